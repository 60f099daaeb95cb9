import pytest

from tilesnake.config import Difficulty, GameConfig, GameMode, PowerUpKind


@pytest.mark.parametrize(
    "difficulty, interval, size, multiplier",
    [
        (Difficulty.EASY, 0.3, 12, 1.0),
        (Difficulty.MEDIUM, 0.2, 15, 1.5),
        (Difficulty.HARD, 0.1, 20, 2.0),
    ],
)
def test_difficulty_table(difficulty, interval, size, multiplier):
    assert difficulty.tick_interval == interval
    assert difficulty.board_size == size
    assert difficulty.score_multiplier == multiplier


def test_power_up_durations():
    assert {k: k.duration for k in PowerUpKind} == {
        PowerUpKind.SPEED_BOOST: 5,
        PowerUpKind.SCORE_MULTIPLIER: 10,
        PowerUpKind.SHIELD: 8,
        PowerUpKind.GHOST_MODE: 6,
    }


def test_enums_look_up_by_value():
    assert GameMode("maze") is GameMode.MAZE
    assert Difficulty("hard") is Difficulty.HARD
    assert PowerUpKind("shield") is PowerUpKind.SHIELD


def test_board_size_defaults_to_difficulty():
    assert GameConfig(difficulty=Difficulty.EASY).size == 12
    assert GameConfig(difficulty=Difficulty.EASY, board_size=30).size == 30


def test_config_is_a_value():
    a = GameConfig(mode=GameMode.PORTAL)
    assert a == GameConfig(mode=GameMode.PORTAL)
    with pytest.raises(AttributeError):
        a.mode = GameMode.MAZE


@pytest.mark.parametrize(
    "kwargs",
    [
        {"round_seconds": 0},
        {"spawn_interval": 0},
        {"countdown_interval": -1.0},
        {"spawn_odds": 0},
        {"board_size": 0},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
