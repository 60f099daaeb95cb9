# src/tilesnake/session.py
from __future__ import annotations

import logging
import threading
from functools import partial
from typing import Callable, Dict, Optional

from .game import GameEngine, GameEvent, Snapshot, StepResult
from .geometry import Direction
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

MOVE, SPAWN, COUNTDOWN = "move", "spawn", "countdown"


class GameSession:
    """
    Drives a GameEngine from three repeating triggers:

      move       every engine.tick_interval (re-armed when SpeedBoost flips it)
      spawn      every config.spawn_interval, rolls a collectible power-up
      countdown  every config.countdown_interval, power-up and time-trial clocks

    Every mutation happens under one lock. Each arm bumps a generation
    counter and callbacks carry the generation they were armed with, so a
    tick that arrives after pause()/reset() is dropped instead of applied.
    """

    def __init__(
        self,
        engine: GameEngine,
        scheduler: Scheduler,
        listener: Optional[Callable[[StepResult], None]] = None,
    ):
        self.engine = engine
        self.scheduler = scheduler
        self.listener = listener
        self._lock = threading.RLock()
        self._handles: Dict[str, object] = {}
        self._generation = 0
        self._move_epoch = 0
        self._move_interval: Optional[float] = None
        self._running = False   # caller wants play; survives game over so reset() resumes

    # ---------- Controls ----------
    @property
    def is_running(self) -> bool:
        with self._lock:
            return bool(self._handles)

    @property
    def move_interval(self) -> Optional[float]:
        """Interval the movement trigger is currently armed at (None when idle)."""
        with self._lock:
            return self._move_interval

    def start(self) -> None:
        with self._lock:
            self._running = True
            if self._handles or self.engine.is_over:
                return
            self._arm()

    def pause(self) -> None:
        with self._lock:
            self._running = False
            self._disarm()

    def reset(self) -> None:
        with self._lock:
            self._disarm()
            self.engine.reset()
            if self._running:
                self._arm()

    def change_direction(self, direction: Direction) -> bool:
        with self._lock:
            return self.engine.change_direction(direction)

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self.engine.snapshot()

    # ---------- Trigger plumbing ----------
    def _arm(self) -> None:
        self._generation += 1
        generation = self._generation
        config = self.engine.config
        self._handles[SPAWN] = self.scheduler.schedule(
            config.spawn_interval, partial(self._fire, generation, None, self._spawn)
        )
        self._handles[COUNTDOWN] = self.scheduler.schedule(
            config.countdown_interval, partial(self._fire, generation, None, self.engine.countdown)
        )
        self._arm_movement()
        logger.debug("armed triggers (generation %d, move every %ss)", generation, self._move_interval)

    def _arm_movement(self) -> None:
        old = self._handles.pop(MOVE, None)
        if old is not None:
            self.scheduler.cancel(old)
        self._move_epoch += 1
        self._move_interval = self.engine.tick_interval
        self._handles[MOVE] = self.scheduler.schedule(
            self._move_interval,
            partial(self._fire, self._generation, self._move_epoch, self.engine.step),
        )

    def _disarm(self) -> None:
        self._generation += 1
        for handle in self._handles.values():
            self.scheduler.cancel(handle)
        self._handles.clear()
        self._move_interval = None

    def _spawn(self) -> StepResult:
        if self.engine.spawn_power_up():
            return StepResult((GameEvent.POWER_UP_SPAWNED,))
        return StepResult()

    def _fire(self, generation: int, move_epoch: Optional[int], action: Callable[[], StepResult]) -> None:
        with self._lock:
            if generation != self._generation:
                return
            if move_epoch is not None and move_epoch != self._move_epoch:
                return
            result = action()
            if result and self.listener is not None:
                self.listener(result)
                if generation != self._generation:
                    return  # listener paused or reset us
            if self.engine.is_over:
                self._disarm()
            elif self.engine.tick_interval != self._move_interval:
                self._arm_movement()
