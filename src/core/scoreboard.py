# src/core/scoreboard.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from src.core.outcome_resolver import Winner
from src.core.race_state import Phase, RaceState


@dataclass
class Scoreboard:
    """Running tally of finished races for one session."""

    challenger_wins: int = 0
    profile_wins: int = 0
    no_winner: int = 0
    wins_by_profile: Dict[str, int] = field(default_factory=dict)
    _seen: Set[int] = field(default_factory=set, repr=False)

    @property
    def races(self) -> int:
        return self.challenger_wins + self.profile_wins + self.no_winner

    def record(self, state: RaceState) -> bool:
        """
        Count ``state`` if it is a finished race not seen before.

        Designed to be passed straight to ``RaceDriver.subscribe``; every
        other update (ticks, resets, repeats of the same race) is ignored.
        """
        if state.phase is not Phase.COMPLETE or state.generation in self._seen:
            return False
        self._seen.add(state.generation)

        if state.winner is Winner.CHALLENGER:
            self.challenger_wins += 1
        elif state.winner is Winner.PROFILE:
            self.profile_wins += 1
            if state.profile is not None:
                key = state.profile.key
                self.wins_by_profile[key] = self.wins_by_profile.get(key, 0) + 1
        else:
            self.no_winner += 1
        return True

    def clear(self) -> None:
        self.challenger_wins = 0
        self.profile_wins = 0
        self.no_winner = 0
        self.wins_by_profile.clear()
        # _seen is kept so a still-complete race is not re-counted
