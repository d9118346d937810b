# src/core/miner_models.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MinerProfile:
    """
    Represents one traditional mining hardware configuration.

    Kept in core models so both the registry (selection) and the race
    engine can depend on the same schema. ``throughput_th`` is display-only:
    it is authored alongside ``win_chance`` but never used to derive it.
    """

    key: str
    label: str
    throughput_th: float  # terahash per second
    win_chance: float  # probability of winning one round, 0–1
    description: str = ""


@dataclass(frozen=True)
class ChallengerProfile:
    """The PWC Miner entrant. A single fixed win chance, not user-selectable."""

    label: str
    win_chance: float
    tagline: str = ""
    badge: str = ""
