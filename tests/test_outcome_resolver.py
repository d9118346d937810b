# tests/test_outcome_resolver.py

import math

import pytest

from src.core.outcome_resolver import (
    InvalidProbability,
    Winner,
    expected_rates,
    resolve,
)
from src.core.random_source import RandomSource, ScriptedSource
from src.data import miners_prod

S19 = miners_prod.PROFILES["s19"]
PWC = miners_prod.CHALLENGER.win_chance


def test_zero_chances_never_produce_a_winner():
    rng = RandomSource(seed=1)
    for _ in range(2_000):
        assert resolve(0.0, 0.0, rng).winner is Winner.NONE


def test_certain_challenger_always_wins_against_zero():
    rng = RandomSource(seed=2)
    for _ in range(2_000):
        assert resolve(1.0, 0.0, rng).winner is Winner.CHALLENGER


def test_both_hit_low_tie_break_goes_to_challenger():
    rng = ScriptedSource([0.001, 0.001, 0.2])
    outcome = resolve(PWC, S19.win_chance, rng, profile=S19)
    assert outcome.winner is Winner.CHALLENGER
    assert outcome.tie is True
    assert outcome.profile is None
    assert rng.consumed == 3


def test_both_hit_high_tie_break_goes_to_profile():
    rng = ScriptedSource([0.001, 0.001, 0.7])
    outcome = resolve(PWC, S19.win_chance, rng, profile=S19)
    assert outcome.winner is Winner.PROFILE
    assert outcome.profile == S19
    assert outcome.tie is True


def test_tie_break_boundary_is_exclusive():
    rng = ScriptedSource([0.001, 0.001, 0.5])
    assert resolve(PWC, S19.win_chance, rng).winner is Winner.PROFILE


def test_both_miss_is_no_winner_with_two_draws():
    rng = ScriptedSource([0.5, 0.5])
    outcome = resolve(PWC, S19.win_chance, rng, profile=S19)
    assert outcome.winner is Winner.NONE
    assert rng.consumed == 2


def test_only_challenger_hits():
    rng = ScriptedSource([0.001, 0.5])
    outcome = resolve(PWC, S19.win_chance, rng, profile=S19)
    assert outcome.winner is Winner.CHALLENGER
    assert outcome.tie is False
    assert rng.consumed == 2


def test_only_profile_hits_carries_the_profile():
    rng = ScriptedSource([0.5, 0.01])
    outcome = resolve(PWC, S19.win_chance, rng, profile=S19)
    assert outcome.winner is Winner.PROFILE
    assert outcome.profile is S19


def test_draw_equal_to_chance_is_a_miss():
    rng = ScriptedSource([0.005, 0.015])
    assert resolve(0.005, 0.015, rng).winner is Winner.NONE


@pytest.mark.parametrize("bad", [-0.1, 1.5, math.nan, "0.1", None, True])
def test_out_of_range_probability_is_rejected(bad):
    with pytest.raises(InvalidProbability):
        resolve(bad, 0.01, ScriptedSource([0.1, 0.1]))
    with pytest.raises(InvalidProbability):
        resolve(0.01, bad, ScriptedSource([0.1, 0.1]))
    assert issubclass(InvalidProbability, ValueError)


def test_challenger_rate_converges_over_many_rounds():
    p_c, p_p = 0.005, 0.015
    trials = 100_000
    rng = RandomSource(seed=20240419)

    wins = sum(
        1 for _ in range(trials) if resolve(p_c, p_p, rng).winner is Winner.CHALLENGER
    )

    expected = p_c * (1 - p_p) + p_c * p_p * 0.5
    assert abs(wins / trials - expected) < 0.001


def test_expected_rates_sum_to_one():
    rates = expected_rates(0.005, 0.015)
    assert rates.challenger == pytest.approx(0.005 * 0.985 + 0.005 * 0.015 * 0.5)
    assert rates.profile == pytest.approx(0.015 * 0.995 + 0.005 * 0.015 * 0.5)
    assert rates.no_winner == pytest.approx(0.995 * 0.985)
    assert rates.tie == pytest.approx(0.005 * 0.015)
    assert rates.challenger + rates.profile + rates.no_winner == pytest.approx(1.0)
