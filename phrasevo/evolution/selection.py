"""
Natural selection: building the mating pool.

Every entity of the current generation is copied into the pool a number of
times proportional to its fitness relative to the fittest entity.  With the
default multiplier of 100 the fittest entity always contributes exactly 100
copies and entities that match nothing contribute none.  The multiplier is an
arbitrary quantisation constant, not derived from the population size.
"""

from __future__ import annotations

from typing import List, Sequence

from loguru import logger

from phrasevo.exceptions import PhraseEvoConfigError

from .genome import Genome

DEFAULT_POOL_MULTIPLIER = 100


def remap(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly re-map ``value`` from one range onto another."""
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


class MatingPoolSelector:
    """Fitness-proportionate replication of entities into a mating pool."""

    def __init__(self, multiplier: int = DEFAULT_POOL_MULTIPLIER) -> None:
        if int(multiplier) != multiplier or multiplier <= 0:
            raise PhraseEvoConfigError(
                f"Pool multiplier must be a positive integer, got {multiplier!r}.",
                context={"pool_multiplier": multiplier},
            )
        self.multiplier = int(multiplier)

    def replication_count(self, fitness: float, max_fitness: float) -> int:
        """Number of pool copies earned by ``fitness`` in a generation topped by ``max_fitness``."""
        if max_fitness <= 0:
            return 0
        normalized = remap(fitness, 0.0, max_fitness, 0.0, 1.0)
        return int(normalized * self.multiplier)

    def replication_counts(self, entities: Sequence[Genome]) -> List[int]:
        if not entities:
            return []
        max_fitness = max(entity.fitness for entity in entities)
        return [self.replication_count(entity.fitness, max_fitness) for entity in entities]

    def build(self, entities: Sequence[Genome]) -> List[Genome]:
        """Return a freshly built pool of independent copies."""
        pool: List[Genome] = []
        for entity, count in zip(entities, self.replication_counts(entities)):
            pool.extend(entity.clone() for _ in range(count))
        logger.trace("Mating pool rebuilt with {} entries from {} entities", len(pool), len(entities))
        return pool
