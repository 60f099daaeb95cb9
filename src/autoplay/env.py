# src/autoplay/env.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np  # type: ignore

from tilesnake.config import Difficulty, GameConfig, GameMode
from tilesnake.game import GameEngine, Snapshot
from tilesnake.geometry import Direction, in_bounds, manhattan, step
from tilesnake.rng import NumpyRandom
from tilesnake.scheduler import ManualScheduler
from tilesnake.scores import ScoreStore
from tilesnake.session import GameSession

# -----------------------------------------------------------------------------
# Actions: integers -> headings
# -----------------------------------------------------------------------------
ACTIONS = {
    0: Direction.UP,
    1: Direction.DOWN,
    2: Direction.LEFT,
    3: Direction.RIGHT,
}
ACTION_OF = {d: a for a, d in ACTIONS.items()}

OBS_DIM = 9


# -----------------------------------------------------------------------------
# Small geometry helpers (screen coordinates: y grows downwards)
# -----------------------------------------------------------------------------
def left_of(direction: Direction) -> Direction:
    """Heading after a 90° turn to the snake's left."""
    return Direction((direction.dy, -direction.dx))


def right_of(direction: Direction) -> Direction:
    """Heading after a 90° turn to the snake's right."""
    return Direction((-direction.dy, direction.dx))


def would_hit(snap: Snapshot, direction: Direction) -> bool:
    """
    True if moving the head one cell in `direction` would hit a wall, an
    obstacle or the body. Portals are followed; power-ups are ignored.
    """
    cell = step(snap.head, direction)
    for entrance, exit_ in snap.portals:
        if entrance == cell:
            cell = exit_
            break
    if not in_bounds(cell, snap.board_size):
        return True
    return cell in snap.obstacles or cell in snap.snake


# -----------------------------------------------------------------------------
# Observation function
# -----------------------------------------------------------------------------
def observe(snap: Snapshot, heading: Direction) -> np.ndarray:
    """
    Compact 9-D observation:

      0: hx_n, 1: hy_n  - head position normalized to [0, 1]
      2: fx_n, 3: fy_n  - food position normalized to [0, 1]
      4: dx,   5: dy    - current heading components in {-1, 0, 1}
      6: danger_ahead, 7: danger_left, 8: danger_right
    """
    denom = max(snap.board_size - 1, 1)
    return np.array(
        [
            snap.head.x / denom, snap.head.y / denom,
            snap.food.x / denom, snap.food.y / denom,
            float(heading.dx), float(heading.dy),
            float(would_hit(snap, heading)),
            float(would_hit(snap, left_of(heading))),
            float(would_hit(snap, right_of(heading))),
        ],
        dtype=np.float32,
    )


# -----------------------------------------------------------------------------
# Headless environment
# -----------------------------------------------------------------------------
@dataclass
class SnakeEnv:
    """
    Gym-like wrapper that plays a full GameSession on a virtual clock.

    Each step() queues a heading and runs the scheduler until the snake has
    moved once, so power-up spawns, countdowns and time-trial expiry all
    happen exactly as they would in real time.

    Rewards:
      + eat_reward    when food is eaten
      + shaping_coef * (d_before - d_after) per move (closer -> positive)
      + step_penalty  per move
      + death_reward  on a fatal collision (running out of time is not death)
    """

    mode: GameMode = GameMode.CLASSIC
    difficulty: Difficulty = Difficulty.MEDIUM
    seed_value: int = 0
    step_penalty: float = -0.001
    eat_reward: float = 1.0
    death_reward: float = -1.0
    shaping_coef: float = 0.01
    score_store: Optional[ScoreStore] = None
    config: Optional[GameConfig] = field(default=None, repr=False)

    def __post_init__(self):
        if self.config is None:
            self.config = GameConfig(difficulty=self.difficulty, mode=self.mode)
        self.np_random = np.random.default_rng(self.seed_value)
        self.engine = GameEngine(self.config, NumpyRandom(self.seed_value), self.score_store)
        self.scheduler = ManualScheduler()
        self.session = GameSession(self.engine, self.scheduler)

    # Gym-like API -------------------------------------------------------------
    def reset(self, seed: int | None = None) -> np.ndarray:
        """Start a new episode and return the first observation."""
        if seed is not None:
            self.engine.rng = NumpyRandom(seed)
            self.np_random = np.random.default_rng(seed)
        self.session.reset()
        self.session.start()
        return self._obs()

    def step(self, action: int):
        """
        Apply an action (0..3), advance exactly one move and return
        (obs, reward, terminated, info).
        """
        assert action in ACTIONS, f"Invalid action {action}"
        engine = self.engine

        if engine.is_over:
            return self._obs(), 0.0, True, self._info()

        self.session.change_direction(ACTIONS[action])
        d_before = manhattan(engine.head, engine.food)
        score_before = engine.score
        ticks_before = engine.ticks

        while engine.ticks == ticks_before and not engine.is_over:
            if not self.scheduler.run_next():
                break

        reward = self.step_penalty
        if engine.score > score_before:
            reward += self.eat_reward
        if engine.is_over and engine.end_reason == "collision":
            reward = self.death_reward
        else:
            reward += self.shaping_coef * (d_before - manhattan(engine.head, engine.food))

        return self._obs(), reward, engine.is_over, self._info()

    def snapshot(self) -> Snapshot:
        return self.session.snapshot()

    def _obs(self) -> np.ndarray:
        return observe(self.session.snapshot(), self.engine.heading)

    def _info(self) -> dict:
        return {
            "score": self.engine.score,
            "ticks": self.engine.ticks,
            "reason": self.engine.end_reason,
            "clock": self.scheduler.now,
        }

    def close(self) -> None:
        self.session.pause()

    @property
    def board_size(self) -> int:
        return self.engine.size

    @property
    def action_space_n(self) -> int:
        return len(ACTIONS)

    @property
    def observation_space_shape(self):
        return (OBS_DIM,)

