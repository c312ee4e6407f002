"""
Random Sources - Injectable entropy for reproducible turns.

A random source is any zero-argument callable returning a float in [0, 1).
It is passed explicitly to every function that consumes entropy; the engine
never touches the global `random` module state.
"""

from __future__ import annotations
import random
from typing import Callable, Iterable

RandomSource = Callable[[], float]


class RandomSourceExhausted(RuntimeError):
    """A scripted source was asked for more draws than it holds."""


def seeded_source(seed: int | None = None) -> RandomSource:
    """A Mersenne Twister stream; the same seed replays the same turns."""
    return random.Random(seed).random


class ScriptedRandom:
    """
    Replays a fixed sequence of draws.

    Used for tests and for replaying a recorded turn. Every draw is
    recorded in `consumed` so callers can assert on draw counts.
    """

    def __init__(self, draws: Iterable[float], repeat_last: bool = False):
        self._draws = list(draws)
        self._index = 0
        self.repeat_last = repeat_last
        self.consumed: list[float] = []

    def __call__(self) -> float:
        if self._index >= len(self._draws):
            if self.repeat_last and self._draws:
                value = self._draws[-1]
                self.consumed.append(value)
                return value
            raise RandomSourceExhausted(
                f"Scripted random source exhausted after {len(self._draws)} draws"
            )
        value = self._draws[self._index]
        self._index += 1
        self.consumed.append(value)
        return value

    @property
    def remaining(self) -> int:
        return len(self._draws) - self._index


class RecordingRandom:
    """Wraps a source and records every draw it hands out (for replay)."""

    def __init__(self, source: RandomSource):
        self.source = source
        self.recorded: list[float] = []

    def __call__(self) -> float:
        value = self.source()
        self.recorded.append(value)
        return value

    def replay(self) -> ScriptedRandom:
        return ScriptedRandom(self.recorded)


def random_int(rng: RandomSource, low: int, high: int) -> int:
    """Uniform integer in [low, high] from one draw."""
    return low + int(rng() * (high - low + 1))


def pick_index(rng: RandomSource, length: int) -> int:
    """Uniform index into a sequence of `length` items from one draw."""
    return int(rng() * length)


def roll_percent(rng: RandomSource, chance: float) -> bool:
    """One draw; succeeds when draw * 100 < chance."""
    return rng() * 100 < chance
