# src/core/random_source.py
from __future__ import annotations

import random
from typing import Iterable, Optional, Protocol


class UniformSource(Protocol):
    """Anything that can hand out uniform draws from [0, 1)."""

    def uniform(self) -> float:
        ...


class RandomSource:
    """Seedable source backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def uniform(self) -> float:
        return self._rng.random()


class ScriptedSource:
    """
    Replays a fixed sequence of draws.

    Used to pin outcomes in tests and demos. Raises ``RuntimeError`` once the
    script runs out so a miscounted draw shows up immediately.
    """

    def __init__(self, draws: Iterable[float]) -> None:
        self._draws = list(draws)
        for value in self._draws:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Scripted draw must be in [0, 1), got {value!r}")
        self._index = 0

    def uniform(self) -> float:
        if self._index >= len(self._draws):
            raise RuntimeError(
                f"ScriptedSource exhausted after {len(self._draws)} draws"
            )
        value = self._draws[self._index]
        self._index += 1
        return value

    @property
    def consumed(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._draws) - self._index


def uniform_between(rng: UniformSource, low: float, high: float) -> float:
    """Scale a [0, 1) draw onto [low, high)."""
    return low + rng.uniform() * (high - low)
