"""
Manual sanity check of the genetic operators.

Two random parents are bred into a child through crossover and mutation and
all three are scored.  A fourth genome copies the child but has its leading
genes forced to the target's, which must raise its fitness accordingly.
The printed phrases make it easy to eyeball the operators by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from phrasevo.evolution import (
    CharacterSpace,
    FitnessEvaluator,
    Genome,
    RandomSource,
    Reproducer,
)

FORCED_GENES = 3


@dataclass
class SanityRecord:
    label: str
    phrase: str
    fitness: float


def run_sanity_check(
    target: str,
    mutation_rate: float,
    rng: Optional[RandomSource] = None,
    space: Optional[CharacterSpace] = None,
) -> List[SanityRecord]:
    rng = rng or RandomSource()
    space = space or CharacterSpace.printable()
    evaluator = FitnessEvaluator(target)
    reproducer = Reproducer(mutation_rate, space, rng)

    parent_a = Genome.random(len(target), space, rng)
    parent_b = Genome.random(len(target), space, rng)
    evaluator.evaluate(parent_a)
    evaluator.evaluate(parent_b)

    child = reproducer.reproduce(parent_a, parent_b)
    evaluator.evaluate(child)

    forced = min(FORCED_GENES, len(target))
    manipulated = Genome.from_phrase(target[:forced] + child.phrase()[forced:])
    evaluator.evaluate(manipulated)

    records = [
        SanityRecord("Parent 1 (DNA A)", parent_a.phrase(), parent_a.fitness),
        SanityRecord("Parent 2 (DNA B)", parent_b.phrase(), parent_b.fitness),
        SanityRecord("Child    (DNA C)", child.phrase(), child.fitness),
        SanityRecord("Child    (DNA D)", manipulated.phrase(), manipulated.fitness),
    ]
    for record in records:
        logger.debug("{} fitness {:.4f}: {!r}", record.label, record.fitness, record.phrase)
    return records
