# src/tilesnake/geometry.py
from __future__ import annotations

from enum import Enum
from typing import Collection, NamedTuple

from .errors import BoardUnplayable
from .rng import RandomSource


class Cell(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    """Headings as (dx, dy); y grows downwards like screen rows."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


# ---------- Pure helpers ----------
def in_bounds(cell: Cell, size: int) -> bool:
    return 0 <= cell.x < size and 0 <= cell.y < size


def wrap(cell: Cell, size: int) -> Cell:
    return Cell(cell.x % size, cell.y % size)


def step(cell: Cell, direction: Direction) -> Cell:
    return Cell(cell.x + direction.dx, cell.y + direction.dy)


def is_opposite(a: Direction, b: Direction) -> bool:
    return OPPOSITE[a] is b


def manhattan(a: Cell, b: Cell) -> int:
    """Manhattan (L1) distance on the grid."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def random_free_cell(
    size: int,
    occupied: Collection[Cell],
    rng: RandomSource,
    lo: int = 0,
    hi: int | None = None,
) -> Cell:
    """
    Uniformly sample a cell in [lo, hi) x [lo, hi) that is not occupied.

    Draws x then y and re-samples until the cell is free. Raises
    BoardUnplayable up front when the region has no free cell, so the
    rejection loop always terminates.
    """
    hi = size if hi is None else hi
    if hi <= lo:
        raise BoardUnplayable(f"empty placement region [{lo}, {hi}) on a {size}x{size} board")
    taken = {c for c in occupied if lo <= c.x < hi and lo <= c.y < hi}
    if len(taken) >= (hi - lo) ** 2:
        raise BoardUnplayable(f"no free cell left on a {size}x{size} board")
    while True:
        cell = Cell(rng.randrange(lo, hi), rng.randrange(lo, hi))
        if cell not in taken:
            return cell
