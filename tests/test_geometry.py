import pytest

from tilesnake.errors import BoardUnplayable
from tilesnake.geometry import (
    Cell,
    Direction,
    OPPOSITE,
    in_bounds,
    is_opposite,
    manhattan,
    random_free_cell,
    step,
    wrap,
)
from tilesnake.rng import NumpyRandom


def test_in_bounds_edges():
    assert in_bounds(Cell(0, 0), 12)
    assert in_bounds(Cell(11, 11), 12)
    assert not in_bounds(Cell(12, 0), 12)
    assert not in_bounds(Cell(0, -1), 12)


def test_wrap_maps_into_board():
    assert wrap(Cell(12, 6), 12) == Cell(0, 6)
    assert wrap(Cell(-1, 3), 12) == Cell(11, 3)
    assert wrap(Cell(5, 5), 12) == Cell(5, 5)


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, Cell(3, 2)),
        (Direction.DOWN, Cell(3, 4)),
        (Direction.LEFT, Cell(2, 3)),
        (Direction.RIGHT, Cell(4, 3)),
    ],
)
def test_step_adds_unit_vector(direction, expected):
    assert step(Cell(3, 3), direction) == expected
    assert manhattan(Cell(3, 3), expected) == 1


def test_opposites():
    for d in Direction:
        assert is_opposite(d, OPPOSITE[d])
        assert not is_opposite(d, d)
    assert not is_opposite(Direction.UP, Direction.LEFT)


def test_cells_compare_by_value():
    assert Cell(1, 2) == Cell(1, 2) == (1, 2)
    assert len({Cell(1, 2), Cell(1, 2)}) == 1


def test_random_free_cell_resamples_until_free(scripted):
    rng = scripted([0, 0, 1, 1])
    assert random_free_cell(2, {Cell(0, 0)}, rng) == Cell(1, 1)
    assert rng.calls == [(0, 2)] * 4


def test_random_free_cell_full_board_is_unplayable(scripted):
    occupied = {Cell(x, y) for x in range(2) for y in range(2)}
    with pytest.raises(BoardUnplayable):
        random_free_cell(2, occupied, scripted())


def test_random_free_cell_respects_region():
    rng = NumpyRandom(7)
    for _ in range(200):
        cell = random_free_cell(12, (), rng, lo=2, hi=10)
        assert 2 <= cell.x < 10 and 2 <= cell.y < 10


def test_random_free_cell_empty_region():
    with pytest.raises(BoardUnplayable):
        random_free_cell(4, (), NumpyRandom(0), lo=2, hi=2)
