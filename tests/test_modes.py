import pytest

from tilesnake.config import Difficulty, GameConfig, GameMode
from tilesnake.errors import BoardUnplayable
from tilesnake.geometry import Cell
from tilesnake.modes import ModeLayout, build_layout, generate_obstacles, generate_portals
from tilesnake.rng import NumpyRandom


def test_classic_has_no_aux_data():
    layout = build_layout(GameConfig(mode=GameMode.CLASSIC), NumpyRandom(0))
    assert layout.obstacles == frozenset()
    assert layout.portals == ()
    assert layout.round_seconds is None


def test_time_trial_sets_round():
    layout = build_layout(GameConfig(mode=GameMode.TIME_TRIAL), NumpyRandom(0))
    assert layout.round_seconds == 180
    assert layout.obstacles == frozenset()


@pytest.mark.parametrize("seed", range(5))
def test_maze_obstacles_stay_inside_margin(seed):
    config = GameConfig(mode=GameMode.MAZE, difficulty=Difficulty.EASY)
    layout = build_layout(config, NumpyRandom(seed))
    assert 1 <= len(layout.obstacles) <= 6
    for cell in layout.obstacles:
        assert 2 <= cell.x < 10 and 2 <= cell.y < 10


def test_maze_duplicate_draws_collapse(scripted):
    rng = scripted([2, 2, 3, 3, 2, 2, 4, 4, 5, 5, 6, 6])
    obstacles = generate_obstacles(12, rng)
    assert obstacles == {Cell(2, 2), Cell(3, 3), Cell(4, 4), Cell(5, 5), Cell(6, 6)}


def test_maze_may_overlap_snake_by_default(scripted):
    rng = scripted([6, 6] * 6)
    assert generate_obstacles(12, rng, avoid=[Cell(6, 6)]) == {Cell(6, 6)}


def test_exclusive_maze_skips_avoided_and_placed_cells(scripted):
    rng = scripted([2, 2, 3, 3, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8])
    obstacles = generate_obstacles(12, rng, avoid=[Cell(2, 2)], exclusive=True)
    assert Cell(2, 2) not in obstacles
    assert obstacles == {Cell(3, 3), Cell(4, 4), Cell(5, 5), Cell(6, 6), Cell(7, 7), Cell(8, 8)}


def test_portals_are_two_interior_pairs():
    portals = generate_portals(15, NumpyRandom(3))
    assert len(portals) == 2
    for entrance, exit_ in portals:
        for cell in (entrance, exit_):
            assert 1 <= cell.x < 14 and 1 <= cell.y < 14


def test_portal_draw_order(scripted):
    rng = scripted([1, 2, 3, 4, 5, 6, 7, 8])
    assert generate_portals(12, rng) == (
        (Cell(1, 2), Cell(3, 4)),
        (Cell(5, 6), Cell(7, 8)),
    )


def test_portal_exit_first_match_wins():
    layout = ModeLayout(
        mode=GameMode.PORTAL,
        portals=((Cell(2, 2), Cell(5, 5)), (Cell(2, 2), Cell(8, 8))),
    )
    assert layout.portal_exit(Cell(2, 2)) == Cell(5, 5)
    assert layout.portal_exit(Cell(5, 5)) is None


def test_maze_on_tiny_board_is_unplayable():
    config = GameConfig(mode=GameMode.MAZE, board_size=4)
    with pytest.raises(BoardUnplayable):
        build_layout(config, NumpyRandom(0))
