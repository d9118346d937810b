# src/core/race_session.py
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from src.config import settings
from src.core.profile_registry import ProfileRegistry, load_registry
from src.core.race_driver import RaceDriver
from src.core.race_state import RaceState
from src.core.random_source import UniformSource
from src.core.scheduler import VirtualScheduler
from src.core.scoreboard import Scoreboard
from src.data.miners_prod import CHALLENGER


@dataclass
class WallClockPump:
    """
    Feeds real elapsed time into a ``VirtualScheduler``.

    Streamlit reruns the script instead of running an event loop, so each
    redraw calls ``pump`` and any ticks or completion that fell due since the
    previous redraw fire in order, on the script thread.
    """

    scheduler: VirtualScheduler
    clock: Callable[[], float] = time.monotonic  # seconds
    _last: Optional[float] = field(default=None, repr=False)

    def pump(self) -> float:
        """Advance the scheduler to now; returns the milliseconds applied."""
        now = self.clock()
        if self._last is None:
            self._last = now
            return 0.0
        delta_ms = max(0.0, (now - self._last) * 1000.0)
        self._last = now
        if delta_ms:
            self.scheduler.advance(delta_ms)
        return delta_ms


@dataclass
class RaceSession:
    """Everything one browser session needs to run races."""

    registry: ProfileRegistry
    driver: RaceDriver
    scheduler: VirtualScheduler
    pump: WallClockPump
    scoreboard: Scoreboard
    selected_key: str

    @property
    def state(self) -> RaceState:
        return self.driver.state

    def select(self, key: str) -> None:
        """Change the selected profile. Ignored mid-race, like the disabled selector."""
        self.registry.get(key)
        if not self.driver.is_racing:
            self.selected_key = key

    def start(self, key: Optional[str] = None) -> None:
        if key is not None:
            self.select(key)
        self.pump.pump()
        self.driver.start(self.registry.get(self.selected_key))

    def reset(self) -> None:
        self.pump.pump()
        self.driver.reset()

    def tick(self) -> RaceState:
        self.pump.pump()
        return self.driver.state


def new_session(
    registry: Optional[ProfileRegistry] = None,
    rng: Optional[UniformSource] = None,
    animation_rng: Optional[UniformSource] = None,
    clock: Callable[[], float] = time.monotonic,
) -> RaceSession:
    registry = registry if registry is not None else load_registry()
    scheduler = VirtualScheduler()
    driver = RaceDriver(
        CHALLENGER,
        scheduler,
        rng=rng,
        animation_rng=animation_rng,
        duration_ms=settings.RACE_DURATION_MS,
        tick_interval_ms=settings.RACE_TICK_INTERVAL_MS,
    )
    scoreboard = Scoreboard()
    driver.subscribe(scoreboard.record)
    return RaceSession(
        registry=registry,
        driver=driver,
        scheduler=scheduler,
        pump=WallClockPump(scheduler, clock=clock),
        scoreboard=scoreboard,
        selected_key=registry.default_key,
    )
