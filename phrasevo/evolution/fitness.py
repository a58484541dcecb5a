"""
Fitness scoring for PhraseEvo genomes.

The evaluator compares a genome position by position with the target phrase.
Fitness is the fraction of positions holding exactly the target character, so
it always lies in ``[0, 1]`` and reaches ``1.0`` only for an exact match.
There is no partial credit for characters that are merely close.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from phrasevo.exceptions import PhraseEvoConfigError

from .genome import Genome

PERFECT_SCORE = 1.0


@dataclass(frozen=True)
class FitnessEvaluator:
    """Score genomes against a fixed target phrase."""

    target: str

    def __post_init__(self) -> None:
        if not self.target:
            raise PhraseEvoConfigError("Target phrase must not be empty.", context={"target": self.target})

    @property
    def perfect_score(self) -> float:
        return PERFECT_SCORE

    def score(self, genome: Genome) -> float:
        """Return the fitness of ``genome`` without storing it."""
        assert len(genome.genes) == len(self.target), (
            f"genome length {len(genome.genes)} does not match target length {len(self.target)}"
        )
        matches = sum(1 for gene, wanted in zip(genome.genes, self.target) if gene == wanted)
        return matches / len(self.target)

    def evaluate(self, genome: Genome) -> float:
        """Score ``genome`` and record the result on it."""
        genome.fitness = self.score(genome)
        return genome.fitness

    def evaluate_all(self, genomes: Iterable[Genome]) -> None:
        for genome in genomes:
            self.evaluate(genome)
