# src/tilesnake/rng.py
from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

import numpy as np  # type: ignore

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that hands out uniform integers in [low, high)."""

    def randrange(self, low: int, high: int) -> int: ...


class NumpyRandom:
    """Default random source backed by numpy's Generator (seedable for replays)."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._gen = np.random.default_rng(seed)

    def randrange(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"empty range [{low}, {high})")
        return int(self._gen.integers(low, high))


def choice(rng: RandomSource, items: Sequence[T]) -> T:
    return items[rng.randrange(0, len(items))]
