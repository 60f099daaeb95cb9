# src/tilesnake/powerups.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Collection, Optional

from .config import PowerUpKind
from .errors import BoardUnplayable
from .geometry import Cell, random_free_cell
from .rng import RandomSource, choice

logger = logging.getLogger(__name__)

KINDS = tuple(PowerUpKind)


class Phase(Enum):
    IDLE = "idle"
    SPAWNED = "spawned"
    ACTIVE = "active"


@dataclass
class PowerUpState:
    """
    Power-up lifecycle for one session.

    IDLE -> SPAWNED  spawn() places a collectible of a random kind
    SPAWNED -> ACTIVE  collect() when the head lands on it
    ACTIVE -> IDLE  countdown() runs out, or clear() on reset
    """

    active: Optional[PowerUpKind] = None
    remaining: int = 0
    pending_kind: Optional[PowerUpKind] = None
    pending_position: Optional[Cell] = None

    @property
    def phase(self) -> Phase:
        if self.active is not None:
            return Phase.ACTIVE
        if self.pending_position is not None:
            return Phase.SPAWNED
        return Phase.IDLE

    def is_active(self, kind: PowerUpKind) -> bool:
        return self.active is kind

    def spawn(self, size: int, occupied: Collection[Cell], rng: RandomSource) -> bool:
        """Place a collectible if idle. Returns True if one was placed."""
        if self.phase is not Phase.IDLE:
            return False
        kind = choice(rng, KINDS)
        try:
            position = random_free_cell(size, occupied, rng)
        except BoardUnplayable:
            logger.debug("no room for a %s power-up, skipping spawn", kind.value)
            return False
        self.pending_kind = kind
        self.pending_position = position
        logger.debug("spawned %s at %s", kind.value, position)
        return True

    def collect(self, head: Cell) -> Optional[PowerUpKind]:
        """Activate the pending collectible if `head` is on it."""
        if self.pending_position is None or head != self.pending_position:
            return None
        kind = self.pending_kind
        self.active = kind
        self.remaining = kind.duration
        self.pending_kind = None
        self.pending_position = None
        logger.debug("activated %s for %ss", kind.value, kind.duration)
        return kind

    def countdown(self) -> Optional[PowerUpKind]:
        """One-second tick. Returns the kind that just expired, if any."""
        if self.active is None:
            return None
        self.remaining = max(self.remaining - 1, 0)
        if self.remaining > 0:
            return None
        expired = self.active
        self.active = None
        logger.debug("%s expired", expired.value)
        return expired

    def clear(self) -> None:
        self.active = None
        self.remaining = 0
        self.pending_kind = None
        self.pending_position = None
