"""
Population management utilities for PhraseEvo evolution cycles.

The `PopulationManager` owns the current generation and its transient mating
pool.  It seeds generation 0, swaps in each new generation wholesale, and
offers the summary helpers (average, best, range) the engine reports on.
The number of entities never changes after seeding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .fitness import PERFECT_SCORE
from .genome import Genome
from .search_space import CharacterSpace, RandomSource

PHRASE_DISPLAY_LIMIT = 50


@dataclass
class PopulationManager:
    """Container around the entities of one generation."""

    space: CharacterSpace
    population_size: int
    genome_length: int
    rng: RandomSource
    entities: List[Genome] = field(default_factory=list)
    mating_pool: List[Genome] = field(default_factory=list)
    generations: int = 0
    completed: bool = False
    perfect_score: float = PERFECT_SCORE

    def _fresh_entities(self, generation: int) -> List[Genome]:
        return [
            Genome.random(self.genome_length, self.space, self.rng, generation=generation)
            for _ in range(self.population_size)
        ]

    def seed(self) -> None:
        """Populate generation 0 with random genomes."""
        self.entities = self._fresh_entities(generation=0)
        self.mating_pool = []
        self.generations = 0
        self.completed = False

    def reseed(self) -> None:
        """Replace every entity with a random genome and count it as a generation."""
        self.replace(self._fresh_entities(generation=self.generations + 1))

    def replace(self, children: Sequence[Genome]) -> None:
        """Install the next generation and advance the generation counter."""
        assert len(children) == self.population_size, (
            f"expected {self.population_size} children, got {len(children)}"
        )
        self.entities = list(children)
        self.generations += 1

    def best_index(self) -> int:
        """Index of the fittest entity; ties go to the lowest index."""
        best, record = 0, self.entities[0].fitness
        for index, entity in enumerate(self.entities):
            if entity.fitness > record:
                best, record = index, entity.fitness
        return best

    def best(self) -> Genome:
        return self.entities[self.best_index()]

    def average_fitness(self) -> float:
        if not self.entities:
            return 0.0
        return sum(entity.fitness for entity in self.entities) / len(self.entities)

    def fitness_range(self) -> Tuple[float, float]:
        scores = [entity.fitness for entity in self.entities]
        return min(scores), max(scores)

    def all_phrases(self, limit: int = PHRASE_DISPLAY_LIMIT) -> str:
        """Phrases of the first ``limit`` entities, one per line, for debugging."""
        shown = self.entities[: min(len(self.entities), limit)]
        return "".join(entity.phrase() + "\n" for entity in shown)

    def __len__(self) -> int:
        return len(self.entities)
