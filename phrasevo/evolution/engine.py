"""
Evolution engine driving the PhraseEvo generation lifecycle.

The engine owns one population and moves it through a small state machine::

    SETUP -> EVALUATED -> SELECTED -> REPRODUCED -> EVALUATED -> ... -> DONE

Generation 0 is created at random and scored during setup.  Each further
cycle builds a mating pool, breeds exactly ``population_size`` children that
replace the whole previous generation, and scores them.  A run ends when some
entity matches the target exactly, or, when configured, once a generation cap
or a stagnation window is exhausted.
"""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List, Mapping, Optional

from loguru import logger

from phrasevo.exceptions import PhraseEvoConfigError, PhraseEvoRuntimeError
from phrasevo.utils.logger import RunLogger

from .fitness import FitnessEvaluator
from .genome import Genome
from .population import PopulationManager
from .reproduction import Reproducer
from .search_space import CharacterSpace, RandomSource
from .selection import DEFAULT_POOL_MULTIPLIER, MatingPoolSelector

DEFAULT_TARGET = "I think, therefore I am."
DEFAULT_POPULATION = 250
DEFAULT_MUTATION_RATE = 0.01
HISTORY_LIMIT = 1000


class EngineState(str, enum.Enum):
    SETUP = "setup"
    EVALUATED = "evaluated"
    SELECTED = "selected"
    REPRODUCED = "reproduced"
    DONE = "done"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class EvolutionConfig:
    """Immutable settings for one evolution run."""

    target: str = DEFAULT_TARGET
    population_size: int = DEFAULT_POPULATION
    mutation_rate: float = DEFAULT_MUTATION_RATE
    pool_multiplier: int = DEFAULT_POOL_MULTIPLIER
    max_generations: Optional[int] = None
    stagnation_limit: Optional[int] = None
    seed: Optional[int] = None
    alphabet: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "EvolutionConfig":
        """Build a config from an ``evolution`` configuration section."""
        return cls(
            target=mapping.get("target", DEFAULT_TARGET),
            population_size=mapping.get("population", DEFAULT_POPULATION),
            mutation_rate=mapping.get("mutation_rate", DEFAULT_MUTATION_RATE),
            pool_multiplier=mapping.get("pool_multiplier", DEFAULT_POOL_MULTIPLIER),
            max_generations=mapping.get("max_generations"),
            stagnation_limit=mapping.get("stagnation_limit"),
            seed=mapping.get("seed"),
            alphabet=mapping.get("alphabet"),
        )

    def character_space(self) -> CharacterSpace:
        if self.alphabet is None:
            return CharacterSpace.printable()
        return CharacterSpace.from_string(self.alphabet)

    def validate(self) -> "EvolutionConfig":
        """Reject settings the evolution loop cannot run with."""

        if not isinstance(self.target, str) or not self.target:
            raise PhraseEvoConfigError("Target phrase must be a non-empty string.", context={"target": self.target})
        if not _is_int(self.population_size) or self.population_size <= 0:
            raise PhraseEvoConfigError(
                f"Population size must be a positive integer, got {self.population_size!r}.",
                context={"population": self.population_size},
            )
        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)) or not (
            0.0 <= self.mutation_rate <= 1.0
        ):
            raise PhraseEvoConfigError(
                f"Mutation rate must lie in [0, 1], got {self.mutation_rate!r}.",
                context={"mutation_rate": self.mutation_rate},
            )
        if not _is_int(self.pool_multiplier) or self.pool_multiplier <= 0:
            raise PhraseEvoConfigError(
                f"Pool multiplier must be a positive integer, got {self.pool_multiplier!r}.",
                context={"pool_multiplier": self.pool_multiplier},
            )
        if self.max_generations is not None and (not _is_int(self.max_generations) or self.max_generations < 0):
            raise PhraseEvoConfigError(
                f"Generation cap must be a non-negative integer, got {self.max_generations!r}.",
                context={"max_generations": self.max_generations},
            )
        if self.stagnation_limit is not None and (not _is_int(self.stagnation_limit) or self.stagnation_limit <= 0):
            raise PhraseEvoConfigError(
                f"Stagnation limit must be a positive integer, got {self.stagnation_limit!r}.",
                context={"stagnation_limit": self.stagnation_limit},
            )
        if self.seed is not None and not _is_int(self.seed):
            raise PhraseEvoConfigError(f"Seed must be an integer, got {self.seed!r}.", context={"seed": self.seed})
        _check_reachable(self.target, self.character_space())
        return self


def _check_reachable(target: str, space: CharacterSpace) -> None:
    # A character outside the alphabet can never be produced, so the run would never converge.
    missing = space.missing_from(target)
    if missing:
        raise PhraseEvoConfigError(
            f"Target contains characters outside the gene alphabet: {missing!r}.",
            context={"target": target, "missing": missing},
        )


@dataclass
class GenerationStats:
    """Summary of one evaluated generation."""

    generation: int
    average_fitness: float
    best_fitness: float
    best_phrase: str
    pool_size: int = 0
    reseeded: bool = False


@dataclass
class EvolutionResult:
    """Outcome of a finished run."""

    completed: bool
    termination: str
    generations: int
    population_size: int
    mutation_rate: float
    average_fitness: float
    best_fitness: float
    best_phrase: str
    seed: int
    reseeds: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    history: List[GenerationStats] = field(default_factory=list)

    def as_dict(self, include_history: bool = False) -> Dict[str, Any]:
        payload = asdict(self)
        payload["started_at"] = self.started_at.isoformat() if self.started_at else None
        payload["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        if not include_history:
            payload.pop("history")
        return payload


class EvolutionEngine:
    """Central coordinator of the select / reproduce / evaluate cycle."""

    def __init__(
        self,
        config: EvolutionConfig,
        rng: Optional[RandomSource] = None,
        space: Optional[CharacterSpace] = None,
        logger: Optional[RunLogger] = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        """Create a new evolution engine.

        Parameters
        ----------
        config : EvolutionConfig
            Validated before anything is built; invalid settings raise
            :class:`PhraseEvoConfigError`.
        rng : RandomSource, optional
            Random stream shared by seeding, selection and reproduction.
            Defaults to one seeded from ``config.seed`` or the clock.
        space : CharacterSpace, optional
            Gene alphabet overriding ``config.alphabet``.
        logger : RunLogger, optional
            Progress reporter.
        history_limit : int, default HISTORY_LIMIT
            Number of most recent :class:`GenerationStats` kept in ``history``.
        """
        self.config = config.validate()
        self.space = space or config.character_space()
        _check_reachable(config.target, self.space)
        self.rng = rng or RandomSource(config.seed)
        self.logger = logger or RunLogger()
        self.fitness_evaluator = FitnessEvaluator(config.target)
        self.selector = MatingPoolSelector(config.pool_multiplier)
        self.reproducer = Reproducer(config.mutation_rate, self.space, self.rng)
        self.population = PopulationManager(
            space=self.space,
            population_size=config.population_size,
            genome_length=len(config.target),
            rng=self.rng,
        )
        self.state = EngineState.SETUP
        self.history: Deque[GenerationStats] = deque(maxlen=max(1, history_limit))
        self.termination: Optional[str] = None
        self.reseeds = 0
        self.started_at: Optional[datetime] = None
        self.finished_at: Optional[datetime] = None
        self._best_so_far = -1.0
        self._stale_generations = 0
        self._pool_size = 0
        self._reseeded = False

    def _require(self, *states: EngineState) -> None:
        if self.state not in states:
            expected = ", ".join(state.value for state in states)
            raise PhraseEvoRuntimeError(
                f"Engine is in state '{self.state.value}', expected one of: {expected}.",
                context={"state": self.state.value},
            )

    def setup(self) -> GenerationStats:
        """Create and score generation 0."""
        self._require(EngineState.SETUP)
        self.started_at = datetime.now()
        logger.debug("Populating generation 0 with {} random genomes", self.config.population_size)
        self.population.seed()
        return self._evaluate()

    def evaluate(self) -> GenerationStats:
        """Score the freshly reproduced generation."""
        self._require(EngineState.REPRODUCED)
        return self._evaluate()

    def _evaluate(self) -> GenerationStats:
        self.fitness_evaluator.evaluate_all(self.population.entities)
        best = self.population.best()
        stats = GenerationStats(
            generation=self.population.generations,
            average_fitness=self.population.average_fitness(),
            best_fitness=best.fitness,
            best_phrase=best.phrase(),
            pool_size=self._pool_size,
            reseeded=self._reseeded,
        )
        if best.fitness > self._best_so_far:
            self._best_so_far = best.fitness
            self._stale_generations = 0
        else:
            self._stale_generations += 1
        self.history.append(stats)
        self.state = EngineState.EVALUATED
        self.logger.log_generation(stats)
        self.logger.log_population(self.population)
        return stats

    def select(self) -> List[Genome]:
        """Rebuild the mating pool from the current generation."""
        self._require(EngineState.EVALUATED)
        self.population.mating_pool = self.selector.build(self.population.entities)
        self._pool_size = len(self.population.mating_pool)
        self.state = EngineState.SELECTED
        return self.population.mating_pool

    def reproduce(self) -> None:
        """Replace the generation with children bred from the mating pool."""
        self._require(EngineState.SELECTED)
        pool = self.population.mating_pool
        if not pool:
            logger.warning(
                "Mating pool is empty at generation {}; re-seeding the population with random genomes",
                self.population.generations,
            )
            self.population.reseed()
            self.reseeds += 1
            self._reseeded = True
        else:
            next_generation = self.population.generations + 1
            children: List[Genome] = []
            for _ in range(self.config.population_size):
                a = self.rng.integer(0, len(pool))
                b = self.rng.integer(0, len(pool))
                assert 0 <= a < len(pool) and 0 <= b < len(pool), "mating pool index out of range"
                child = self.reproducer.reproduce(pool[a], pool[b])
                child.generation = next_generation
                children.append(child)
            self.population.replace(children)
            self._reseeded = False
        self.population.mating_pool = []
        self.state = EngineState.REPRODUCED

    def check_termination(self) -> bool:
        """Decide whether the evaluated generation ends the run."""
        self._require(EngineState.EVALUATED, EngineState.DONE)
        if self.state is EngineState.DONE:
            return True
        best = self.population.best()
        if best.fitness == self.population.perfect_score:
            self.population.completed = True
            self.termination = "converged"
        elif self.config.max_generations is not None and self.population.generations >= self.config.max_generations:
            self.termination = "max_generations"
        elif self.config.stagnation_limit is not None and self._stale_generations >= self.config.stagnation_limit:
            self.termination = "stagnation"
        else:
            return False
        self.state = EngineState.DONE
        self.finished_at = datetime.now()
        return True

    def step(self) -> GenerationStats:
        """Run one full generation: selection, reproduction and evaluation."""
        self.select()
        self.reproduce()
        return self.evaluate()

    def run(self) -> EvolutionResult:
        """Evolve until the run terminates and return its outcome."""
        if self.state is EngineState.SETUP:
            self.setup()
        while not self.check_termination():
            self.step()

        last = self.history[-1]
        if last.generation % self.logger.log_every:
            self.logger.log_generation(last, final=True)
        if self.termination != "converged":
            logger.warning("Run ended without an exact match ({})", self.termination)
        result = self.result()
        self.logger.log_summary(result)
        return result

    def result(self) -> EvolutionResult:
        best = self.population.best()
        return EvolutionResult(
            completed=self.population.completed,
            termination=self.termination or "running",
            generations=self.population.generations,
            population_size=len(self.population),
            mutation_rate=self.config.mutation_rate,
            average_fitness=self.population.average_fitness(),
            best_fitness=best.fitness,
            best_phrase=best.phrase(),
            seed=self.rng.seed,
            reseeds=self.reseeds,
            started_at=self.started_at,
            finished_at=self.finished_at,
            history=list(self.history),
        )
