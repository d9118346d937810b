# src/core/race_driver.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from src.config import settings
from src.core.miner_models import ChallengerProfile, MinerProfile
from src.core.outcome_resolver import resolve
from src.core.race_state import Phase, RaceState, RaceStateMachine
from src.core.random_source import RandomSource, UniformSource, uniform_between
from src.core.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

Subscriber = Callable[[RaceState], None]


class RaceDriver:
    """
    One race session: animates both lanes, then settles the block once.

    The lanes are cosmetic pacing only. Who wins is decided by a single
    ``resolve`` call when the race duration elapses, using ``rng``; lane
    increments come from ``animation_rng`` so scripting the outcome does
    not depend on how many ticks ran.
    """

    def __init__(
        self,
        challenger: ChallengerProfile,
        scheduler: Scheduler,
        rng: Optional[UniformSource] = None,
        animation_rng: Optional[UniformSource] = None,
        duration_ms: float = settings.RACE_DURATION_MS,
        tick_interval_ms: float = settings.RACE_TICK_INTERVAL_MS,
        challenger_step_range: Tuple[float, float] = settings.CHALLENGER_LANE_STEP_RANGE,
        profile_step_range: Tuple[float, float] = settings.PROFILE_LANE_STEP_RANGE,
    ) -> None:
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be > 0, got {duration_ms!r}")
        if tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be > 0, got {tick_interval_ms!r}")
        for name, (low, high) in (
            ("challenger_step_range", challenger_step_range),
            ("profile_step_range", profile_step_range),
        ):
            if not 0 <= low < high:
                raise ValueError(f"{name} must satisfy 0 <= low < high, got {(low, high)!r}")

        seed = settings.RACE_SEED
        self._challenger = challenger
        self._scheduler = scheduler
        self._rng = rng if rng is not None else RandomSource(seed)
        if animation_rng is None:
            animation_rng = RandomSource(None if seed is None else seed + 1)
        self._animation_rng = animation_rng
        self._duration_ms = float(duration_ms)
        self._tick_interval_ms = float(tick_interval_ms)
        self._challenger_steps = challenger_step_range
        self._profile_steps = profile_step_range

        self._machine = RaceStateMachine()
        self._tick_handle: Optional[TimerHandle] = None
        self._finish_handle: Optional[TimerHandle] = None
        self._started_at_ms = 0.0
        self._subscribers: List[Subscriber] = []

    # ---------------------------------------------------------
    # Read side
    # ---------------------------------------------------------

    @property
    def challenger(self) -> ChallengerProfile:
        return self._challenger

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def state(self) -> RaceState:
        """Copy of the current race state."""
        return self._machine.state.snapshot()

    @property
    def phase(self) -> Phase:
        return self._machine.phase

    @property
    def is_racing(self) -> bool:
        return self._machine.phase is Phase.RACING

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register for a state copy after every change; returns an unsubscribe."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _publish(self) -> None:
        snapshot = self._machine.state.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)

    # ---------------------------------------------------------
    # Commands
    # ---------------------------------------------------------

    def start(self, profile: MinerProfile) -> None:
        """Begin a race against ``profile``. Ignored while a race is running."""
        if not self._machine.begin(profile):
            logger.debug("Ignoring start for %s: race already running", profile.key)
            return

        generation = self._machine.generation
        self._started_at_ms = self._scheduler.now_ms()
        # Tick first so a tick due at the finish instant runs before completion
        self._tick_handle = self._scheduler.schedule_repeating(
            self._tick_interval_ms, lambda: self._on_tick(generation)
        )
        self._finish_handle = self._scheduler.schedule_once(
            self._duration_ms, lambda: self._on_finish(generation, profile)
        )
        logger.info(
            "Race %d started: %s (%.4f) vs %s (%.4f)",
            generation,
            self._challenger.label,
            self._challenger.win_chance,
            profile.label,
            profile.win_chance,
        )
        self._publish()

    def reset(self) -> None:
        """Stop any running race and return to Idle with cleared lanes."""
        self._cancel_timers()
        previous = self._machine.phase
        self._machine.reset()
        logger.info("Race reset from %s", previous.value)
        self._publish()

    # ---------------------------------------------------------
    # Timer callbacks
    # ---------------------------------------------------------

    def _elapsed_ms(self) -> float:
        return self._scheduler.now_ms() - self._started_at_ms

    def _on_tick(self, generation: int) -> None:
        if not self._machine.is_current(generation):
            return
        delta_a = uniform_between(self._animation_rng, *self._challenger_steps)
        delta_b = uniform_between(self._animation_rng, *self._profile_steps)
        if self._machine.advance(generation, delta_a, delta_b, self._elapsed_ms()):
            state = self._machine.state
            logger.debug(
                "Race %d tick %d: %.1f / %.1f",
                generation,
                state.ticks,
                state.progress_a,
                state.progress_b,
            )
            self._publish()

    def _on_finish(self, generation: int, profile: MinerProfile) -> None:
        if not self._machine.is_current(generation):
            return
        # Ticks must be gone before the state flips to Complete
        self._scheduler.cancel(self._tick_handle)
        self._tick_handle = None
        self._finish_handle = None
        outcome = resolve(
            self._challenger.win_chance, profile.win_chance, self._rng, profile=profile
        )
        self._machine.complete(generation, outcome, self._elapsed_ms())
        logger.info(
            "Race %d complete: winner=%s%s",
            generation,
            outcome.winner.value,
            " (tie-break)" if outcome.tie else "",
        )
        self._publish()

    def _cancel_timers(self) -> None:
        self._scheduler.cancel(self._tick_handle)
        self._scheduler.cancel(self._finish_handle)
        self._tick_handle = None
        self._finish_handle = None
