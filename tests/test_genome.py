"""
Tests for genome representation and the character space.
"""

import pytest

from phrasevo.evolution import CharacterSpace, Genome, RandomSource
from phrasevo.exceptions import PhraseEvoConfigError


def test_random_genome_has_requested_length_and_alphabet() -> None:
    """Random genomes should only contain characters from the space."""
    space = CharacterSpace.from_string("xyz")
    genome = Genome.random(12, space, RandomSource(seed=3))
    assert len(genome) == 12
    assert set(genome.phrase()) <= {"x", "y", "z"}
    assert genome.fitness == 0.0
    assert genome.generation == 0


def test_printable_space_covers_codes_32_to_127() -> None:
    space = CharacterSpace.printable()
    assert len(space) == 96
    assert " " in space
    assert chr(127) in space
    assert chr(31) not in space
    assert chr(128) not in space


def test_phrase_decodes_genes() -> None:
    genome = Genome.from_phrase("hello")
    assert genome.genes == ("h", "e", "l", "l", "o")
    assert genome.phrase() == "hello"


def test_clone_is_independent_but_keeps_score() -> None:
    original = Genome.from_phrase("abc")
    original.fitness = 0.5
    copy = original.clone()
    assert copy is not original
    assert copy.genes == original.genes
    assert copy.fitness == 0.5
    copy.fitness = 0.0
    assert original.fitness == 0.5


def test_missing_from_reports_unreachable_characters() -> None:
    space = CharacterSpace.from_string("ab")
    assert space.missing_from("abcab\n") == ["c", "\n"]


def test_empty_alphabet_is_rejected() -> None:
    with pytest.raises(PhraseEvoConfigError):
        CharacterSpace.from_string("")


def test_random_source_is_reproducible_for_a_seed() -> None:
    first = RandomSource(seed=42)
    second = RandomSource(seed=42)
    assert [first.integer(0, 100) for _ in range(10)] == [second.integer(0, 100) for _ in range(10)]
    assert first.uniform() == second.uniform()


def test_random_source_defaults_to_time_seed() -> None:
    rng = RandomSource()
    assert isinstance(rng.seed, int)
    assert rng.seed > 0
