"""Tile-grid snake simulation engine: modes, power-ups and a timer-driven session."""

from tilesnake.config import Difficulty, GameConfig, GameMode, PowerUpKind
from tilesnake.errors import BoardUnplayable, SnakeError
from tilesnake.game import GameEngine, GameEvent, Snapshot, StepResult
from tilesnake.geometry import Cell, Direction
from tilesnake.rng import NumpyRandom, RandomSource
from tilesnake.scheduler import ManualScheduler, Scheduler, ThreadingScheduler
from tilesnake.scores import InMemoryScoreStore, JsonScoreStore, ScoreStore
from tilesnake.session import GameSession

__all__ = [
    "BoardUnplayable",
    "Cell",
    "Difficulty",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameEvent",
    "GameMode",
    "GameSession",
    "InMemoryScoreStore",
    "JsonScoreStore",
    "ManualScheduler",
    "NumpyRandom",
    "PowerUpKind",
    "RandomSource",
    "Scheduler",
    "ScoreStore",
    "SnakeError",
    "Snapshot",
    "StepResult",
    "ThreadingScheduler",
]
