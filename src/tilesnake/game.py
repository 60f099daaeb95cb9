# src/tilesnake/game.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np  # type: ignore

from .config import SNAKE_START_LENGTH, Difficulty, GameConfig, GameMode, PowerUpKind
from .errors import BoardUnplayable
from .geometry import Cell, Direction, in_bounds, is_opposite, random_free_cell, step, wrap
from .modes import ModeLayout, build_layout
from .powerups import PowerUpState
from .rng import NumpyRandom, RandomSource
from .scores import ScoreStore

logger = logging.getLogger(__name__)

# Cell codes used by Snapshot.to_grid()
EMPTY, BODY, HEAD, FOOD, OBSTACLE, POWER_UP, PORTAL_IN, PORTAL_OUT = range(8)


class GameEvent(Enum):
    MOVED = "moved"
    TELEPORTED = "teleported"
    COLLISION_SUPPRESSED = "collision_suppressed"
    FOOD_EATEN = "food_eaten"
    POWER_UP_SPAWNED = "power_up_spawned"
    POWER_UP_COLLECTED = "power_up_collected"
    POWER_UP_EXPIRED = "power_up_expired"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class StepResult:
    events: Tuple[GameEvent, ...] = ()
    points: int = 0

    def __bool__(self) -> bool:
        return bool(self.events)

    def __contains__(self, event: GameEvent) -> bool:
        return event in self.events


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for anything that draws it."""

    snake: Tuple[Cell, ...]
    food: Cell
    direction: Direction
    score: int
    is_over: bool
    end_reason: Optional[str]
    active_power_up: Optional[PowerUpKind]
    power_up_remaining: int
    pending_power_up: Optional[PowerUpKind]
    pending_position: Optional[Cell]
    obstacles: frozenset
    portals: Tuple[Tuple[Cell, Cell], ...]
    time_remaining: Optional[int]
    board_size: int
    mode: GameMode
    difficulty: Difficulty
    tick_interval: float
    ticks: int

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def to_grid(self) -> np.ndarray:
        """Board as a [size, size] int8 array indexed [y, x], filled with the cell codes."""
        grid = np.full((self.board_size, self.board_size), EMPTY, dtype=np.int8)
        for entrance, exit_ in self.portals:
            grid[entrance.y, entrance.x] = PORTAL_IN
            grid[exit_.y, exit_.x] = PORTAL_OUT
        for x, y in self.obstacles:
            grid[y, x] = OBSTACLE
        if self.pending_position is not None:
            grid[self.pending_position.y, self.pending_position.x] = POWER_UP
        grid[self.food.y, self.food.x] = FOOD
        for x, y in self.snake[1:]:
            grid[y, x] = BODY
        grid[self.head.y, self.head.x] = HEAD
        return grid


def starting_snake(size: int) -> List[Cell]:
    """Horizontal segment centred on the board, head first, pointing right."""
    center = size // 2
    return [Cell(center - i, center) for i in range(SNAKE_START_LENGTH)]


class GameEngine:
    """
    Authoritative single-snake simulation.

    Not thread-safe on its own; GameSession serialises every call.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
        score_store: Optional[ScoreStore] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else NumpyRandom()
        self.score_store = score_store
        self.size = self.config.size
        self.power_ups = PowerUpState()
        self.reset()

    # ---------- Lifecycle ----------
    def reset(self) -> None:
        """Start a fresh session. Raises BoardUnplayable if it cannot be laid out."""
        snake = starting_snake(self.size)
        if not all(in_bounds(c, self.size) for c in snake):
            raise BoardUnplayable(
                f"a {SNAKE_START_LENGTH}-cell snake does not fit on a {self.size}x{self.size} board"
            )
        self.layout: ModeLayout = build_layout(self.config, self.rng, avoid=snake)
        self.snake: List[Cell] = snake
        self.direction = Direction.RIGHT
        self._heading = Direction.RIGHT     # direction the last step actually used
        self.score = 0
        self.is_over = False
        self.end_reason: Optional[str] = None
        self.ticks = 0
        self.time_remaining: Optional[int] = self.layout.round_seconds
        self._score_reported = False
        self.power_ups.clear()
        self.food = random_free_cell(self.size, self._blocked(), self.rng)

    # ---------- Input ----------
    def change_direction(self, direction) -> bool:
        """Queue a heading for the next step. 180° turns and junk input are ignored."""
        if not isinstance(direction, Direction) or is_opposite(direction, self._heading):
            return False
        self.direction = direction
        return True

    # ---------- Queries ----------
    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def heading(self) -> Direction:
        """Direction the snake last moved in (what 180° checks compare against)."""
        return self._heading

    @property
    def tick_interval(self) -> float:
        base = self.config.difficulty.tick_interval
        if self.power_ups.is_active(PowerUpKind.SPEED_BOOST):
            return base / 2
        return base

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=tuple(self.snake),
            food=self.food,
            direction=self.direction,
            score=self.score,
            is_over=self.is_over,
            end_reason=self.end_reason,
            active_power_up=self.power_ups.active,
            power_up_remaining=self.power_ups.remaining,
            pending_power_up=self.power_ups.pending_kind,
            pending_position=self.power_ups.pending_position,
            obstacles=self.layout.obstacles,
            portals=self.layout.portals,
            time_remaining=self.time_remaining,
            board_size=self.size,
            mode=self.config.mode,
            difficulty=self.config.difficulty,
            tick_interval=self.tick_interval,
            ticks=self.ticks,
        )

    def _blocked(self) -> set:
        return set(self.snake) | self.layout.obstacles

    # ---------- Update ----------
    def step(self) -> StepResult:
        """Advance the snake one cell. Returns what happened; empty once the game is over."""
        if self.is_over:
            return StepResult()

        events: List[GameEvent] = []
        self._heading = self.direction
        candidate = step(self.head, self.direction)

        # Portals fire before any collision rule looks at the head
        if self.config.mode is GameMode.PORTAL:
            exit_ = self.layout.portal_exit(candidate)
            if exit_ is not None:
                candidate = exit_
                events.append(GameEvent.TELEPORTED)

        ghost = self.power_ups.is_active(PowerUpKind.GHOST_MODE)
        shield = self.power_ups.is_active(PowerUpKind.SHIELD)

        off_board = not in_bounds(candidate, self.size)
        if off_board and ghost:
            candidate = wrap(candidate, self.size)
            off_board = False
            events.append(GameEvent.COLLISION_SUPPRESSED)
        elif self._hits(candidate):
            if ghost:
                events.append(GameEvent.COLLISION_SUPPRESSED)
            elif shield:
                events.append(GameEvent.COLLISION_SUPPRESSED)
                logger.debug("shield absorbed collision at %s", candidate)
                if off_board:
                    # the wall holds the snake in place until it turns
                    self.ticks += 1
                    return StepResult(tuple(events))
            else:
                self._finish("collision")
                events.append(GameEvent.GAME_OVER)
                return StepResult(tuple(events))

        self.ticks += 1
        self.snake.insert(0, candidate)
        events.append(GameEvent.MOVED)

        points = 0
        if candidate == self.food:
            points = self._eat(events)
        else:
            self.snake.pop()

        if not self.is_over and self.power_ups.collect(candidate) is not None:
            events.append(GameEvent.POWER_UP_COLLECTED)

        return StepResult(tuple(events), points)

    def _hits(self, cell: Cell) -> bool:
        if not in_bounds(cell, self.size):
            return True
        if cell in self.layout.obstacles:
            return True
        return cell in self.snake

    def _eat(self, events: List[GameEvent]) -> int:
        bonus = 2 if self.power_ups.is_active(PowerUpKind.SCORE_MULTIPLIER) else 1
        points = math.floor(self.config.food_points * self.config.difficulty.score_multiplier * bonus)
        self.score += points
        events.append(GameEvent.FOOD_EATEN)
        try:
            self.food = random_free_cell(self.size, self._blocked(), self.rng)
        except BoardUnplayable:
            # nowhere left to put food: the snake has filled the board
            self._finish("board_full")
            events.append(GameEvent.GAME_OVER)
            return points
        if self.rng.randrange(0, self.config.spawn_odds) == 0 and self.spawn_power_up():
            events.append(GameEvent.POWER_UP_SPAWNED)
        return points

    def spawn_power_up(self) -> bool:
        """Roll a collectible onto the board (no-op unless idle and in play)."""
        if self.is_over:
            return False
        occupied = self._blocked() | {self.food}
        return self.power_ups.spawn(self.size, occupied, self.rng)

    def countdown(self) -> StepResult:
        """One-second tick: run down the active power-up and the time-trial clock."""
        if self.is_over:
            return StepResult()
        events: List[GameEvent] = []
        if self.power_ups.countdown() is not None:
            events.append(GameEvent.POWER_UP_EXPIRED)
        if self.time_remaining is not None:
            self.time_remaining = max(self.time_remaining - 1, 0)
            if self.time_remaining == 0:
                self._finish("time_up")
                events.append(GameEvent.GAME_OVER)
        return StepResult(tuple(events))

    def _finish(self, reason: str) -> None:
        self.is_over = True
        self.end_reason = reason
        logger.info(
            "game over (%s): mode=%s difficulty=%s score=%d ticks=%d",
            reason, self.config.mode.value, self.config.difficulty.value, self.score, self.ticks,
        )
        self._report_score()

    def _report_score(self) -> None:
        if self._score_reported or self.score_store is None:
            return
        self._score_reported = True
        mode, difficulty = self.config.mode, self.config.difficulty
        if self.score > self.score_store.best_score(mode, difficulty):
            self.score_store.record_score(mode, difficulty, self.score)
            logger.info("new best score %d for %s/%s", self.score, mode.value, difficulty.value)
