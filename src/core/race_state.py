# src/core/race_state.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from src.config import settings
from src.core.miner_models import MinerProfile
from src.core.outcome_resolver import Outcome, Winner


class Phase(str, Enum):
    IDLE = "idle"
    RACING = "racing"
    COMPLETE = "complete"


@dataclass
class RaceState:
    """
    Per-race record read by the presentation layer.

    ``progress_a`` is the challenger lane, ``progress_b`` the traditional
    miner lane; both sit in [0, 100] and never go down within a race.
    ``generation`` changes on every start and reset so late timer callbacks
    can tell they belong to an earlier race.
    """

    phase: Phase = Phase.IDLE
    progress_a: float = 0.0
    progress_b: float = 0.0
    winner: Winner = Winner.UNRESOLVED
    outcome: Optional[Outcome] = None
    profile: Optional[MinerProfile] = None
    generation: int = 0
    ticks: int = 0
    elapsed_ms: float = 0.0

    def snapshot(self) -> "RaceState":
        return replace(self)


class RaceStateMachine:
    """
    Idle -> Racing -> Complete -> (reset) Idle.

    Every transition method returns True when it was applied and False when
    the current phase or generation rules it out. Nothing here raises for a
    rejected transition; overlapping starts are expected from a UI.
    """

    def __init__(self) -> None:
        self._state = RaceState()

    @property
    def state(self) -> RaceState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def generation(self) -> int:
        return self._state.generation

    def is_current(self, generation: int) -> bool:
        return self._state.phase is Phase.RACING and self._state.generation == generation

    def begin(self, profile: MinerProfile) -> bool:
        if self._state.phase is Phase.RACING:
            return False
        self._state = RaceState(
            phase=Phase.RACING,
            profile=profile,
            generation=self._state.generation + 1,
        )
        return True

    def advance(
        self, generation: int, delta_a: float, delta_b: float, elapsed_ms: float
    ) -> bool:
        if not self.is_current(generation):
            return False
        s = self._state
        s.progress_a = min(s.progress_a + max(delta_a, 0.0), settings.PROGRESS_MAX)
        s.progress_b = min(s.progress_b + max(delta_b, 0.0), settings.PROGRESS_MAX)
        s.ticks += 1
        s.elapsed_ms = elapsed_ms
        return True

    def complete(self, generation: int, outcome: Outcome, elapsed_ms: float) -> bool:
        if not self.is_current(generation):
            return False
        s = self._state
        s.phase = Phase.COMPLETE
        s.progress_a = settings.PROGRESS_MAX
        s.progress_b = settings.PROGRESS_MAX
        s.winner = outcome.winner
        s.outcome = outcome
        s.elapsed_ms = elapsed_ms
        return True

    def reset(self) -> None:
        self._state = RaceState(generation=self._state.generation + 1)
