"""Shared fixtures for PhraseEvo tests."""

from typing import Iterable, Optional

import pytest

from phrasevo.evolution import RandomSource


class ScriptedRandom(RandomSource):
    """Random source replaying fixed draws, falling back to constants once exhausted."""

    def __init__(
        self,
        integers: Iterable[int] = (),
        floats: Iterable[float] = (),
        default_float: float = 0.99,
    ) -> None:
        super().__init__(seed=0)
        self.integers = list(integers)
        self.floats = list(floats)
        self.default_float = default_float

    def integer(self, low: int, high: int) -> int:
        if not self.integers:
            return low
        value = self.integers.pop(0)
        assert low <= value < high, f"scripted integer {value} outside [{low}, {high})"
        return value

    def uniform(self) -> float:
        if not self.floats:
            return self.default_float
        return self.floats.pop(0)


@pytest.fixture
def scripted_rng():
    def _build(integers: Iterable[int] = (), floats: Iterable[float] = (), default_float: Optional[float] = None):
        if default_float is None:
            return ScriptedRandom(integers, floats)
        return ScriptedRandom(integers, floats, default_float)

    return _build
