"""Pipeline exports."""

from .runner import PhraseEvo, PhraseEvoResult

__all__ = ["PhraseEvo", "PhraseEvoResult"]
