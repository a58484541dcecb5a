"""Evolution module exports."""

from .engine import EngineState, EvolutionConfig, EvolutionEngine, EvolutionResult, GenerationStats
from .fitness import PERFECT_SCORE, FitnessEvaluator
from .genome import Genome
from .population import PopulationManager
from .reproduction import Reproducer
from .search_space import CharacterSpace, RandomSource
from .selection import MatingPoolSelector, remap

__all__ = [
    "EngineState",
    "EvolutionConfig",
    "EvolutionEngine",
    "EvolutionResult",
    "GenerationStats",
    "PERFECT_SCORE",
    "FitnessEvaluator",
    "Genome",
    "PopulationManager",
    "Reproducer",
    "CharacterSpace",
    "RandomSource",
    "MatingPoolSelector",
    "remap",
]
