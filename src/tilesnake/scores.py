# src/tilesnake/scores.py
from __future__ import annotations

import json
import logging
import os
from typing import Dict, Protocol

from .config import Difficulty, GameMode

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def best_score(self, mode: GameMode, difficulty: Difficulty) -> int: ...

    def record_score(self, mode: GameMode, difficulty: Difficulty, score: int) -> None: ...


class InMemoryScoreStore:
    """High-score table keyed by (mode, difficulty). Nothing survives the process."""

    def __init__(self):
        self.table: Dict[GameMode, Dict[Difficulty, int]] = {}

    def best_score(self, mode: GameMode, difficulty: Difficulty) -> int:
        return self.table.get(mode, {}).get(difficulty, 0)

    def record_score(self, mode: GameMode, difficulty: Difficulty, score: int) -> None:
        if score > self.best_score(mode, difficulty):
            self.table.setdefault(mode, {})[difficulty] = score


class JsonScoreStore(InMemoryScoreStore):
    """
    High scores persisted as JSON:

        {"classic": {"easy": 120, "hard": 40}, "maze": {...}}

    The file is read once on construction and rewritten on every new best.
    A missing or unreadable file starts an empty table.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.load()

    def load(self) -> None:
        self.table = {}
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            for mode_key, scores in raw.items():
                mode = GameMode(mode_key)
                self.table[mode] = {Difficulty(k): int(v) for k, v in scores.items()}
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("ignoring unreadable high-score file %s: %s", self.path, e)
            self.table = {}

    def save(self) -> None:
        raw = {
            mode.value: {difficulty.value: score for difficulty, score in scores.items()}
            for mode, scores in self.table.items()
        }
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        # the old file stays intact until the new one is complete
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(raw, f, indent=2, sort_keys=True)
        os.replace(tmp, self.path)

    def record_score(self, mode: GameMode, difficulty: Difficulty, score: int) -> None:
        before = self.best_score(mode, difficulty)
        super().record_score(mode, difficulty, score)
        if score > before:
            self.save()
