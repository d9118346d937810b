# src/core/outcome_resolver.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.config import settings
from src.core.miner_models import MinerProfile
from src.core.random_source import UniformSource


class InvalidProbability(ValueError):
    """Raised when a win chance is outside [0, 1]."""


class Winner(str, Enum):
    UNRESOLVED = "unresolved"
    CHALLENGER = "challenger"
    PROFILE = "profile"
    NONE = "none"


@dataclass(frozen=True)
class Outcome:
    """
    Result of one block round.

    ``profile`` is only set when the traditional miner wins. ``tie`` records
    that both miners hit and the coin flip decided it.
    """

    winner: Winner
    profile: Optional[MinerProfile] = None
    tie: bool = False


@dataclass(frozen=True)
class ExpectedRates:
    challenger: float
    profile: float
    no_winner: float
    tie: float


def _check_probability(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidProbability(f"{name} must be a number, got {value!r}")
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidProbability(f"{name} must be within [0, 1], got {value!r}")
    return float(value)


def resolve(
    challenger_win_chance: float,
    profile_win_chance: float,
    rng: UniformSource,
    profile: Optional[MinerProfile] = None,
) -> Outcome:
    """
    Decide who finds the block this round.

    Each miner gets its own independent draw; a hit is a draw strictly below
    its win chance. When both hit a third draw settles it, challenger taking
    anything below ``settings.TIE_BREAK_THRESHOLD``.
    """
    p_challenger = _check_probability("challenger_win_chance", challenger_win_chance)
    p_profile = _check_probability("profile_win_chance", profile_win_chance)

    challenger_hit = rng.uniform() < p_challenger
    profile_hit = rng.uniform() < p_profile

    if challenger_hit and profile_hit:
        if rng.uniform() < settings.TIE_BREAK_THRESHOLD:
            return Outcome(Winner.CHALLENGER, tie=True)
        return Outcome(Winner.PROFILE, profile=profile, tie=True)
    if challenger_hit:
        return Outcome(Winner.CHALLENGER)
    if profile_hit:
        return Outcome(Winner.PROFILE, profile=profile)
    return Outcome(Winner.NONE)


def expected_rates(
    challenger_win_chance: float, profile_win_chance: float
) -> ExpectedRates:
    """Closed-form outcome probabilities for one round."""
    p_c = _check_probability("challenger_win_chance", challenger_win_chance)
    p_p = _check_probability("profile_win_chance", profile_win_chance)
    split = settings.TIE_BREAK_THRESHOLD
    both = p_c * p_p
    return ExpectedRates(
        challenger=p_c * (1.0 - p_p) + both * split,
        profile=p_p * (1.0 - p_c) + both * (1.0 - split),
        no_winner=(1.0 - p_c) * (1.0 - p_p),
        tie=both,
    )
