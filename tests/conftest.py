from __future__ import annotations

from typing import Iterable

import pytest

from tilesnake.config import GameConfig, PowerUpKind
from tilesnake.game import GameEngine
from tilesnake.geometry import Cell
from tilesnake.rng import NumpyRandom


class ScriptedRandom:
    """Random source that replays fixed values, then falls back to a seeded generator."""

    def __init__(self, values: Iterable[int] = (), seed: int = 1234):
        self.values = list(values)
        self.fallback = NumpyRandom(seed)
        self.calls = []

    def push(self, *values: int) -> None:
        self.values.extend(values)

    def randrange(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if not self.values:
            return self.fallback.randrange(low, high)
        value = self.values.pop(0)
        assert low <= value < high, f"scripted {value} outside [{low}, {high})"
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_engine():
    """
    make_engine(*script, store=None, **config) -> GameEngine

    The script is consumed in draw order: mode layout first, then food (x, y).
    """

    def _make(*script, store=None, **config):
        return GameEngine(GameConfig(**config), ScriptedRandom(script), store)

    return _make


def activate(engine: GameEngine, kind: PowerUpKind) -> None:
    """Force a power-up active as if it had just been collected."""
    state = engine.power_ups
    state.pending_kind = kind
    state.pending_position = Cell(-99, -99)
    state.collect(Cell(-99, -99))


@pytest.fixture
def power_up():
    return activate
