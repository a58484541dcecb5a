"""
Unified logging utilities built on Loguru.

`RunLogger` is the small convenience layer the engine and the SDK use to
report progress: one line per generation, a banner when a run starts and a
summary once it finishes.  `configure_logging` installs the console sink (and
an optional file sink) with the requested level.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Union

from loguru import logger

if TYPE_CHECKING:
    from phrasevo.evolution.engine import EvolutionResult, GenerationStats
    from phrasevo.evolution.population import PopulationManager

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}"


def configure_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """Replace Loguru's sinks with a stderr sink and an optional file sink."""

    logger.remove()
    # sys.stderr is looked up per message; tests and callers may swap it after configuration.
    logger.add(
        lambda message: sys.stderr.write(message),
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=sys.stderr.isatty(),
    )
    if log_file:
        logger.add(str(log_file), level=level.upper(), format=LOG_FORMAT, encoding="utf-8")


class RunLogger:
    """Thin convenience wrapper around Loguru for evolution runs."""

    def __init__(
        self,
        experiment_name: str = "PhraseEvo",
        log_every: int = 1,
        show_population: bool = False,
    ) -> None:
        self.experiment_name = experiment_name
        self.log_every = max(1, int(log_every))
        self.show_population = show_population

    @contextmanager
    def start_run(self, run_name: str, params: Optional[Dict[str, object]] = None) -> Iterator[None]:
        """Bracket a run with start and completion messages."""

        logger.info("Starting {} run: {} at {}", self.experiment_name, run_name, datetime.now().isoformat())
        if params:
            logger.info("Run parameters: {}", params)
        yield
        logger.info("Completed {} run: {} at {}", self.experiment_name, run_name, datetime.now().isoformat())

    def log_generation(self, stats: "GenerationStats", final: bool = False) -> None:
        """Report one evaluated generation, throttled to every ``log_every`` generations."""

        if not final and stats.generation % self.log_every:
            return
        logger.info(
            "Generation {} completed with average fitness {:.4f}, best fitness {:.4f}. Best phrase: {!r}",
            stats.generation,
            stats.average_fitness,
            stats.best_fitness,
            stats.best_phrase,
        )

    def log_population(self, population: "PopulationManager") -> None:
        if self.show_population:
            logger.debug("Generation {} phrases:\n{}", population.generations, population.all_phrases())

    def log_summary(self, result: "EvolutionResult") -> None:
        outcome = "Solution discovered" if result.completed else f"Run stopped ({result.termination})"
        logger.info(
            "{} by generation {} with population {} and mutation rate {}. "
            "Average fitness: {:.4f}. Final phrase: {!r}",
            outcome,
            result.generations,
            result.population_size,
            result.mutation_rate,
            result.average_fitness,
            result.best_phrase,
        )
