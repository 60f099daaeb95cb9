# src/tilesnake/modes.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set, Tuple

from .config import GameConfig, GameMode
from .geometry import Cell, random_free_cell
from .rng import RandomSource

MAZE_MARGIN = 2     # obstacles stay off the two outer rings
PORTAL_MARGIN = 1
PORTAL_PAIRS = 2

Portal = Tuple[Cell, Cell]  # (entrance, exit)


@dataclass(frozen=True)
class ModeLayout:
    """Per-session auxiliary data derived from the game mode."""

    mode: GameMode
    obstacles: frozenset = frozenset()
    portals: Tuple[Portal, ...] = ()
    round_seconds: Optional[int] = None

    def portal_exit(self, cell: Cell) -> Optional[Cell]:
        """Exit for the first portal whose entrance is `cell`, else None."""
        for entrance, exit_ in self.portals:
            if entrance == cell:
                return exit_
        return None


def _interior_cell(size: int, margin: int, rng: RandomSource, avoid: Set[Cell]) -> Cell:
    # with nothing to avoid this is a single (x, y) draw
    return random_free_cell(size, avoid, rng, lo=margin, hi=size - margin)


def generate_obstacles(
    size: int, rng: RandomSource, avoid: Iterable[Cell] = (), exclusive: bool = False
) -> frozenset:
    """
    Scatter size // 2 obstacles inside the maze margin.

    Draws may land on each other (the set collapses them) or on the snake,
    unless `exclusive` is set, in which case every draw avoids `avoid` and
    the obstacles already placed.
    """
    blocked: Set[Cell] = set(avoid) if exclusive else set()
    obstacles: Set[Cell] = set()
    for _ in range(size // 2):
        cell = _interior_cell(size, MAZE_MARGIN, rng, blocked)
        obstacles.add(cell)
        if exclusive:
            blocked.add(cell)
    return frozenset(obstacles)


def generate_portals(
    size: int, rng: RandomSource, avoid: Iterable[Cell] = (), exclusive: bool = False
) -> Tuple[Portal, ...]:
    blocked: Set[Cell] = set(avoid) if exclusive else set()
    portals = []
    for _ in range(PORTAL_PAIRS):
        entrance = _interior_cell(size, PORTAL_MARGIN, rng, blocked)
        if exclusive:
            blocked.add(entrance)
        exit_ = _interior_cell(size, PORTAL_MARGIN, rng, blocked)
        if exclusive:
            blocked.add(exit_)
        portals.append((entrance, exit_))
    return tuple(portals)


def build_layout(config: GameConfig, rng: RandomSource, avoid: Iterable[Cell] = ()) -> ModeLayout:
    """Fresh layout for a session start/reset. Classic carries nothing."""
    size = config.size
    mode = config.mode
    if mode is GameMode.TIME_TRIAL:
        return ModeLayout(mode=mode, round_seconds=config.round_seconds)
    if mode is GameMode.MAZE:
        return ModeLayout(
            mode=mode,
            obstacles=generate_obstacles(size, rng, avoid, config.exclusive_placement),
        )
    if mode is GameMode.PORTAL:
        return ModeLayout(
            mode=mode,
            portals=generate_portals(size, rng, avoid, config.exclusive_placement),
        )
    return ModeLayout(mode=mode)
