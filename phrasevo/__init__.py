"""Top-level package exposing PhraseEvo SDK entrypoints."""

from .pipelines import PhraseEvo, PhraseEvoResult

__version__ = "1.0.0"

__all__ = ["PhraseEvo", "PhraseEvoResult"]
