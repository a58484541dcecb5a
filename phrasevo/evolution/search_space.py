"""
Search space definition for PhraseEvo genomes.

Every gene is a single character drawn from a `CharacterSpace`.  The default
space is the printable ASCII block (codes 32 through 127) which is what the
mutation operator and the generation 0 seeding sample from.  All random draws
go through one injected `RandomSource` so a run can be replayed by fixing its
seed, or scripted entirely in tests.
"""

from __future__ import annotations

import random
import time
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from phrasevo.exceptions import PhraseEvoConfigError

T = TypeVar("T")

PRINTABLE_ASCII = (32, 128)


class RandomSource:
    """Single pseudo-random stream shared by seeding, selection and reproduction."""

    def __init__(self, seed: Optional[int] = None) -> None:
        # Seeded once, from the wall clock unless told otherwise.
        self.seed = int(time.time()) if seed is None else int(seed)
        self._random = random.Random(self.seed)

    def integer(self, low: int, high: int) -> int:
        """Return a uniform integer in ``[low, high)``."""
        return self._random.randrange(low, high)

    def uniform(self) -> float:
        """Return a uniform float in ``[0, 1)``."""
        return self._random.random()

    def choice(self, items: Sequence[T]) -> T:
        return items[self.integer(0, len(items))]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"


class CharacterSpace:
    """Ordered set of characters a gene may take."""

    def __init__(self, characters: Iterable[str]) -> None:
        unique: List[str] = []
        for char in characters:
            if len(char) != 1:
                raise PhraseEvoConfigError(
                    f"Alphabet entries must be single characters, got {char!r}.",
                    context={"entry": char},
                )
            if char not in unique:
                unique.append(char)
        if not unique:
            raise PhraseEvoConfigError("Alphabet must contain at least one character.")
        self.characters: Tuple[str, ...] = tuple(unique)
        self._lookup = frozenset(self.characters)

    @classmethod
    def printable(cls) -> "CharacterSpace":
        """Characters with codes 32..127, the default mutation alphabet."""
        start, stop = PRINTABLE_ASCII
        return cls(chr(code) for code in range(start, stop))

    @classmethod
    def from_string(cls, alphabet: str) -> "CharacterSpace":
        return cls(alphabet)

    def random_character(self, rng: RandomSource) -> str:
        """Draw one character uniformly from the space."""
        return rng.choice(self.characters)

    def random_genes(self, length: int, rng: RandomSource) -> Tuple[str, ...]:
        """Sample ``length`` independent characters."""
        return tuple(self.random_character(rng) for _ in range(length))

    def missing_from(self, text: str) -> List[str]:
        """Characters of ``text`` this space can never produce, first occurrence order."""
        missing: List[str] = []
        for char in text:
            if char not in self._lookup and char not in missing:
                missing.append(char)
        return missing

    def __contains__(self, char: object) -> bool:
        return char in self._lookup

    def __len__(self) -> int:
        return len(self.characters)

    def __repr__(self) -> str:
        return f"CharacterSpace(size={len(self.characters)})"
