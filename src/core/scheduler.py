# src/core/scheduler.py
from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

Callback = Callable[[], None]


class TimerHandle(Protocol):
    @property
    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """
    Host timer capability the race driver needs.

    A repeating callback at a fixed interval and a one-shot delayed callback,
    both cancelable. Times are in milliseconds.
    """

    def schedule_repeating(self, interval_ms: float, callback: Callback) -> TimerHandle:
        ...

    def schedule_once(self, delay_ms: float, callback: Callback) -> TimerHandle:
        ...

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        ...

    def now_ms(self) -> float:
        ...


def _check_delay(name: str, value: float, allow_zero: bool) -> float:
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError(f"{name} must be {'>= 0' if allow_zero else '> 0'}, got {value!r}")
    return float(value)


# ---------------------------------------------------------
# Virtual (logical clock) scheduler
# ---------------------------------------------------------


@dataclass(eq=False)
class VirtualTimer:
    callback: Callback
    due_ms: float
    interval_ms: Optional[float] = None
    cancelled: bool = False
    fired: int = 0


class VirtualScheduler:
    """
    Deterministic scheduler driven by explicit ``advance`` calls.

    Timers due at the same instant fire in the order they were first
    registered; a repeating timer keeps its original slot on every repeat.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, VirtualTimer]] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        return self._now

    def schedule_repeating(self, interval_ms: float, callback: Callback) -> VirtualTimer:
        interval = _check_delay("interval_ms", interval_ms, allow_zero=False)
        timer = VirtualTimer(callback, due_ms=self._now + interval, interval_ms=interval)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        return timer

    def schedule_once(self, delay_ms: float, callback: Callback) -> VirtualTimer:
        delay = _check_delay("delay_ms", delay_ms, allow_zero=True)
        timer = VirtualTimer(callback, due_ms=self._now + delay)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        return timer

    def cancel(self, handle: Optional[VirtualTimer]) -> None:
        if handle is not None:
            handle.cancelled = True

    def pending(self) -> int:
        """Number of live timers still queued."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, ms: float) -> None:
        """Move the clock forward by ``ms``, firing everything that falls due."""
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards ({ms!r} ms)")
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, seq, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            if timer.interval_ms is not None:
                timer.due_ms = due + timer.interval_ms
                heapq.heappush(self._queue, (timer.due_ms, seq, timer))
            else:
                timer.cancelled = True
            timer.fired += 1
            timer.callback()
        self._now = target

    def advance_to(self, when_ms: float) -> None:
        if when_ms > self._now:
            self.advance(when_ms - self._now)

    def run_until_idle(self, limit_ms: float = 60_000.0) -> None:
        """Fire timers until none are live or ``limit_ms`` more has elapsed."""
        deadline = self._now + limit_ms
        while True:
            live = [entry for entry in self._queue if not entry[2].cancelled]
            if not live:
                return
            next_due = min(live)[0]
            if next_due > deadline:
                self._now = deadline
                return
            self.advance_to(next_due)


# ---------------------------------------------------------
# asyncio-backed scheduler
# ---------------------------------------------------------


class AsyncioTimer:
    def __init__(self) -> None:
        self._handle: Optional[asyncio.TimerHandle] = None
        self.cancelled = False

    def _bind(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()


class AsyncioScheduler:
    """Scheduler for hosts that run an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now_ms(self) -> float:
        return self.loop.time() * 1000.0

    def schedule_once(self, delay_ms: float, callback: Callback) -> AsyncioTimer:
        delay = _check_delay("delay_ms", delay_ms, allow_zero=True)
        timer = AsyncioTimer()

        def _fire() -> None:
            if not timer.cancelled:
                timer.cancelled = True
                callback()

        timer._bind(self.loop.call_later(delay / 1000.0, _fire))
        return timer

    def schedule_repeating(self, interval_ms: float, callback: Callback) -> AsyncioTimer:
        interval = _check_delay("interval_ms", interval_ms, allow_zero=False)
        timer = AsyncioTimer()
        start = self.loop.time()
        count = 0

        def _fire() -> None:
            nonlocal count
            if timer.cancelled:
                return
            count += 1
            # Anchor to the start time so repeats do not drift
            timer._bind(self.loop.call_at(start + (count + 1) * interval / 1000.0, _fire))
            callback()

        timer._bind(self.loop.call_at(start + interval / 1000.0, _fire))
        return timer

    def cancel(self, handle: Optional[AsyncioTimer]) -> None:
        if handle is not None:
            handle.cancel()
