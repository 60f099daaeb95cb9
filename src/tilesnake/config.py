# src/tilesnake/config.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ----- Session timing -----
SPAWN_INTERVAL = 10.0       # seconds between periodic power-up spawn rolls
COUNTDOWN_INTERVAL = 1.0    # seconds per power-up / time-trial countdown tick
ROUND_SECONDS = 180         # time-trial round length

# ----- Scoring & spawning -----
FOOD_POINTS = 10
SPAWN_ODDS = 5              # 1-in-5 chance of a power-up after eating
SNAKE_START_LENGTH = 3


class Difficulty(Enum):
    """Difficulty tiers: (tick interval seconds, board side, score multiplier)."""

    EASY = ("easy", 0.3, 12, 1.0)
    MEDIUM = ("medium", 0.2, 15, 1.5)
    HARD = ("hard", 0.1, 20, 2.0)

    def __new__(cls, key: str, tick_interval: float, board_size: int, score_multiplier: float):
        obj = object.__new__(cls)
        obj._value_ = key
        obj.tick_interval = tick_interval
        obj.board_size = board_size
        obj.score_multiplier = score_multiplier
        return obj


class GameMode(Enum):
    CLASSIC = "classic"
    TIME_TRIAL = "time_trial"
    MAZE = "maze"
    PORTAL = "portal"


class PowerUpKind(Enum):
    """Collectible effects and how long each one lasts once picked up."""

    SPEED_BOOST = ("speed_boost", 5)
    SCORE_MULTIPLIER = ("score_multiplier", 10)
    SHIELD = ("shield", 8)
    GHOST_MODE = ("ghost_mode", 6)

    def __new__(cls, key: str, duration: int):
        obj = object.__new__(cls)
        obj._value_ = key
        obj.duration = duration
        return obj


# ----- Tunables (everything a session is created from) -----
@dataclass(frozen=True)
class GameConfig:
    difficulty: Difficulty = Difficulty.MEDIUM
    mode: GameMode = GameMode.CLASSIC
    board_size: Optional[int] = None        # overrides difficulty.board_size
    round_seconds: int = ROUND_SECONDS
    spawn_interval: float = SPAWN_INTERVAL
    countdown_interval: float = COUNTDOWN_INTERVAL
    spawn_odds: int = SPAWN_ODDS
    food_points: int = FOOD_POINTS
    exclusive_placement: bool = False       # keep maze/portal cells off snake & each other

    def __post_init__(self):
        if self.round_seconds <= 0:
            raise ValueError(f"round_seconds must be positive, got {self.round_seconds}")
        if self.spawn_interval <= 0 or self.countdown_interval <= 0:
            raise ValueError("spawn_interval and countdown_interval must be positive")
        if self.spawn_odds < 1:
            raise ValueError(f"spawn_odds must be >= 1, got {self.spawn_odds}")
        if self.board_size is not None and self.board_size < 1:
            raise ValueError(f"board_size must be >= 1, got {self.board_size}")

    @property
    def size(self) -> int:
        """Effective board side length."""
        if self.board_size is not None:
            return self.board_size
        return self.difficulty.board_size
