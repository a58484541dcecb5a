"""
Crossover and mutation operators.

A child is produced from two parents in two steps.  Single point crossover
picks a midpoint ``m`` in ``[0, L)`` and takes every gene up to and including
``m`` from the second parent and every gene after it from the first.  Mutation
then walks the child position by position and, with probability
``mutation_rate``, swaps the gene for a fresh character from the alphabet.
Parents are never modified.
"""

from __future__ import annotations

from dataclasses import dataclass

from phrasevo.exceptions import PhraseEvoConfigError

from .genome import Genome
from .search_space import CharacterSpace, RandomSource


@dataclass
class Reproducer:
    """Derive child genomes from pairs of parents."""

    mutation_rate: float
    space: CharacterSpace
    rng: RandomSource

    def __post_init__(self) -> None:
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise PhraseEvoConfigError(
                f"Mutation rate must lie in [0, 1], got {self.mutation_rate!r}.",
                context={"mutation_rate": self.mutation_rate},
            )

    def crossover(self, parent_a: Genome, parent_b: Genome) -> Genome:
        """Splice two parents at a random midpoint."""
        length = len(parent_a.genes)
        assert length == len(parent_b.genes), "parents must have the same number of genes"
        midpoint = self.rng.integer(0, length)
        genes = tuple(
            parent_a.genes[i] if i > midpoint else parent_b.genes[i]
            for i in range(length)
        )
        return Genome(
            genes=genes,
            generation=max(parent_a.generation, parent_b.generation) + 1,
            parent_ids=[parent_a.id, parent_b.id],
        )

    def mutate(self, genome: Genome) -> Genome:
        """Return ``genome`` with each gene independently resampled at ``mutation_rate``."""
        genes = list(genome.genes)
        for i in range(len(genes)):
            if self.rng.uniform() < self.mutation_rate:
                genes[i] = self.space.random_character(self.rng)
        return Genome(
            genes=tuple(genes),
            generation=genome.generation,
            parent_ids=list(genome.parent_ids),
            id=genome.id,
        )

    def reproduce(self, parent_a: Genome, parent_b: Genome) -> Genome:
        """Crossover followed by mutation; the child is left unscored."""
        return self.mutate(self.crossover(parent_a, parent_b))
