"""
Tests for fitness scoring.
"""

import pytest

from phrasevo.evolution import CharacterSpace, FitnessEvaluator, Genome, RandomSource
from phrasevo.exceptions import PhraseEvoConfigError


def test_exact_match_scores_perfect() -> None:
    evaluator = FitnessEvaluator("hello")
    assert evaluator.score(Genome.from_phrase("hello")) == 1.0


def test_no_matching_position_scores_zero() -> None:
    evaluator = FitnessEvaluator("hello")
    assert evaluator.score(Genome.from_phrase("zzzzz")) == 0.0


def test_partial_match_is_fraction_of_positions() -> None:
    evaluator = FitnessEvaluator("abcd")
    assert evaluator.score(Genome.from_phrase("abzz")) == 0.5
    assert evaluator.score(Genome.from_phrase("zbcz")) == 0.5
    assert evaluator.score(Genome.from_phrase("bcda")) == 0.0


def test_near_characters_get_no_partial_credit() -> None:
    evaluator = FitnessEvaluator("b")
    assert evaluator.score(Genome.from_phrase("a")) == 0.0


def test_evaluate_records_fitness_on_genome() -> None:
    evaluator = FitnessEvaluator("abcd")
    genome = Genome.from_phrase("abcz")
    assert evaluator.score(genome) == 0.75
    assert genome.fitness == 0.0
    assert evaluator.evaluate(genome) == 0.75
    assert genome.fitness == 0.75


def test_scores_always_lie_in_unit_interval() -> None:
    target = "I think, therefore I am."
    evaluator = FitnessEvaluator(target)
    space = CharacterSpace.printable()
    rng = RandomSource(seed=11)
    for _ in range(200):
        genome = Genome.random(len(target), space, rng)
        score = evaluator.score(genome)
        assert 0.0 <= score <= 1.0
        assert (score == 1.0) == (genome.phrase() == target)


def test_length_mismatch_is_an_assertion_failure() -> None:
    evaluator = FitnessEvaluator("abc")
    with pytest.raises(AssertionError):
        evaluator.score(Genome.from_phrase("ab"))


def test_empty_target_is_a_configuration_error() -> None:
    with pytest.raises(PhraseEvoConfigError):
        FitnessEvaluator("")
