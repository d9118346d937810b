# src/core/race_stats.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from src.config import settings
from src.core.miner_models import ChallengerProfile
from src.core.outcome_resolver import Winner, expected_rates, resolve
from src.core.profile_registry import ProfileRegistry
from src.core.random_source import RandomSource, UniformSource

# ---------------------------------------------------------
# Data model
# ---------------------------------------------------------


@dataclass
class OutcomeTally:
    """Counts from a batch of independent block rounds."""

    trials: int = 0
    challenger_wins: int = 0
    profile_wins: int = 0
    no_winner: int = 0
    ties: int = 0  # rounds where both miners hit
    ties_to_challenger: int = 0

    @property
    def challenger_solo(self) -> int:
        return self.challenger_wins - self.ties_to_challenger

    @property
    def profile_solo(self) -> int:
        return self.profile_wins - (self.ties - self.ties_to_challenger)


def _check_trials(trials: int) -> int:
    if trials <= 0:
        raise ValueError(f"trials must be > 0, got {trials!r}")
    return int(trials)


# ---------------------------------------------------------
# Simulation
# ---------------------------------------------------------


def simulate_outcomes(
    challenger_win_chance: float,
    profile_win_chance: float,
    trials: int = settings.STATS_DEFAULT_TRIALS,
    rng: Optional[UniformSource] = None,
) -> OutcomeTally:
    """Run ``trials`` rounds through the same resolver the race uses."""
    trials = _check_trials(trials)
    rng = rng if rng is not None else RandomSource()
    tally = OutcomeTally(trials=trials)

    for _ in range(trials):
        outcome = resolve(challenger_win_chance, profile_win_chance, rng)
        if outcome.winner is Winner.CHALLENGER:
            tally.challenger_wins += 1
            if outcome.tie:
                tally.ties_to_challenger += 1
        elif outcome.winner is Winner.PROFILE:
            tally.profile_wins += 1
        else:
            tally.no_winner += 1
        if outcome.tie:
            tally.ties += 1

    return tally


def challenger_share_with_ties(tally: OutcomeTally) -> float:
    """
    Challenger rate with every tie counted as half a win.

    Removes the coin-flip noise from the estimate; converges to the same
    value as the raw challenger rate.
    """
    if tally.trials == 0:
        return 0.0
    return (tally.challenger_solo + 0.5 * tally.ties) / tally.trials


def _std_error(rate: float, trials: int) -> float:
    return float(np.sqrt(rate * (1.0 - rate) / trials))


def summarise_tally(
    tally: OutcomeTally,
    challenger_win_chance: float,
    profile_win_chance: float,
) -> pd.DataFrame:
    """
    One row per outcome with empirical vs closed-form rate.

    ``ci_low``/``ci_high`` are a normal-approximation 95% interval around the
    empirical rate, clipped to [0, 1].
    """
    trials = _check_trials(tally.trials)
    expected = expected_rates(challenger_win_chance, profile_win_chance)

    rows = [
        ("challenger", tally.challenger_wins, expected.challenger),
        ("profile", tally.profile_wins, expected.profile),
        ("no_winner", tally.no_winner, expected.no_winner),
        ("tie", tally.ties, expected.tie),
    ]
    df = pd.DataFrame(rows, columns=["outcome", "count", "expected_rate"])
    df["empirical_rate"] = df["count"] / trials
    df["std_error"] = [_std_error(r, trials) for r in df["empirical_rate"]]
    margin = settings.STATS_Z_95 * df["std_error"]
    df["ci_low"] = np.clip(df["empirical_rate"] - margin, 0.0, 1.0)
    df["ci_high"] = np.clip(df["empirical_rate"] + margin, 0.0, 1.0)

    return df[
        [
            "outcome",
            "count",
            "empirical_rate",
            "expected_rate",
            "std_error",
            "ci_low",
            "ci_high",
        ]
    ]


def build_profile_comparison(
    registry: ProfileRegistry,
    challenger: ChallengerProfile,
    trials: int = settings.STATS_DEFAULT_TRIALS,
    rng: Optional[UniformSource] = None,
) -> pd.DataFrame:
    """Expected and simulated rates for the challenger against every profile."""
    trials = _check_trials(trials)
    rng = rng if rng is not None else RandomSource()

    records = []
    for key, profile in registry.list():
        expected = expected_rates(challenger.win_chance, profile.win_chance)
        tally = simulate_outcomes(challenger.win_chance, profile.win_chance, trials, rng)
        records.append(
            {
                "key": key,
                "label": profile.label,
                "throughput_th": profile.throughput_th,
                "profile_win_chance": profile.win_chance,
                "expected_challenger_rate": expected.challenger,
                "expected_profile_rate": expected.profile,
                "expected_no_winner_rate": expected.no_winner,
                "challenger_rate": tally.challenger_wins / trials,
                "profile_rate": tally.profile_wins / trials,
                "no_winner_rate": tally.no_winner / trials,
            }
        )

    return pd.DataFrame.from_records(records)
