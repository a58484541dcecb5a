"""
Representation of PhraseEvo genomes.

A genome is a fixed-length run of characters, one per position of the target
phrase, together with the fitness it scored against that target.  Genes are
held in a tuple: reproduction always builds a new genome rather than editing
one that is already part of a generation or a mating pool.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .search_space import CharacterSpace, RandomSource

_genome_id = itertools.count()


@dataclass
class Genome:
    """Container representing one candidate phrase."""

    genes: Tuple[str, ...]
    fitness: float = 0.0
    generation: int = 0
    parent_ids: List[int] = field(default_factory=list)
    id: int = field(default_factory=lambda: next(_genome_id))

    def __post_init__(self) -> None:
        self.genes = tuple(self.genes)

    @classmethod
    def random(
        cls,
        length: int,
        space: CharacterSpace,
        rng: RandomSource,
        generation: int = 0,
    ) -> "Genome":
        """Create a genome of ``length`` random characters from ``space``."""
        return cls(genes=space.random_genes(length, rng), generation=generation)

    @classmethod
    def from_phrase(cls, phrase: Iterable[str], generation: int = 0) -> "Genome":
        return cls(genes=tuple(phrase), generation=generation)

    def phrase(self) -> str:
        """Decode the genes into their string form."""
        return "".join(self.genes)

    def clone(self) -> "Genome":
        """Independent copy keeping the evaluated fitness and lineage."""
        return Genome(
            genes=self.genes,
            fitness=self.fitness,
            generation=self.generation,
            parent_ids=list(self.parent_ids),
            id=self.id,
        )

    def __len__(self) -> int:
        return len(self.genes)
