import json
import logging

from tilesnake.config import Difficulty, GameMode
from tilesnake.scores import InMemoryScoreStore, JsonScoreStore


def test_in_memory_keeps_best():
    store = InMemoryScoreStore()
    assert store.best_score(GameMode.CLASSIC, Difficulty.EASY) == 0
    store.record_score(GameMode.CLASSIC, Difficulty.EASY, 40)
    store.record_score(GameMode.CLASSIC, Difficulty.EASY, 20)
    assert store.best_score(GameMode.CLASSIC, Difficulty.EASY) == 40
    assert store.best_score(GameMode.CLASSIC, Difficulty.HARD) == 0
    assert store.best_score(GameMode.MAZE, Difficulty.EASY) == 0


def test_json_store_round_trips_through_disk(tmp_path):
    path = tmp_path / "scores" / "high.json"
    store = JsonScoreStore(str(path))
    store.record_score(GameMode.MAZE, Difficulty.HARD, 120)
    store.record_score(GameMode.CLASSIC, Difficulty.MEDIUM, 45)

    assert json.loads(path.read_text()) == {
        "classic": {"medium": 45},
        "maze": {"hard": 120},
    }
    reloaded = JsonScoreStore(str(path))
    assert reloaded.best_score(GameMode.MAZE, Difficulty.HARD) == 120
    assert reloaded.best_score(GameMode.CLASSIC, Difficulty.MEDIUM) == 45


def test_json_store_skips_write_when_not_a_best(tmp_path):
    path = tmp_path / "high.json"
    store = JsonScoreStore(str(path))
    store.record_score(GameMode.CLASSIC, Difficulty.EASY, 0)
    assert not path.exists()


def test_json_store_ignores_corrupt_file(tmp_path, caplog):
    path = tmp_path / "high.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="tilesnake.scores"):
        store = JsonScoreStore(str(path))
    assert store.table == {}
    assert "unreadable" in caplog.text


def test_json_store_ignores_null_score(tmp_path, caplog):
    path = tmp_path / "high.json"
    path.write_text(json.dumps({"classic": {"easy": None}}))
    with caplog.at_level(logging.WARNING, logger="tilesnake.scores"):
        store = JsonScoreStore(str(path))
    assert store.table == {}
    assert store.best_score(GameMode.CLASSIC, Difficulty.EASY) == 0
    assert "unreadable" in caplog.text


def test_json_store_replaces_file_whole(tmp_path):
    path = tmp_path / "high.json"
    store = JsonScoreStore(str(path))
    store.record_score(GameMode.CLASSIC, Difficulty.EASY, 10)
    store.record_score(GameMode.CLASSIC, Difficulty.EASY, 30)

    assert [p.name for p in tmp_path.iterdir()] == ["high.json"]
    assert json.loads(path.read_text()) == {"classic": {"easy": 30}}


def test_json_store_ignores_unknown_keys(tmp_path):
    path = tmp_path / "high.json"
    path.write_text(json.dumps({"snooker": {"easy": 3}}))
    assert JsonScoreStore(str(path)).table == {}
