"""
Centralised exception hierarchy for PhraseEvo.

Configuration problems are reported through typed exceptions before a run
enters its evolution loop, so the CLI and SDK layers can present the offending
value instead of a bare ``ValueError``.  Broken internal invariants (genome
length mismatches, out of range pool indices) stay plain assertions.
"""

from __future__ import annotations

from typing import Any


class PhraseEvoError(Exception):
    """Base class for all PhraseEvo specific exceptions."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class PhraseEvoConfigError(PhraseEvoError):
    """Raised for configuration or profile related issues."""


class PhraseEvoRuntimeError(PhraseEvoError):
    """Raised when the evolution engine is driven out of order."""


__all__ = [
    "PhraseEvoError",
    "PhraseEvoConfigError",
    "PhraseEvoRuntimeError",
]
