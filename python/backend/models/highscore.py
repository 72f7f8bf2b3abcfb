"""High score persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class HighScoreEntry:
    moves: int
    time: float
    date: str


class HighScoreManager:
    """Loads, saves, and queries high scores from a JSON file.

    File layout::

        {"scores": {"4": [{"moves": 80, "time": 51.2, "date": "..."}]},
         "achievements": ["first_win"]}
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._scores: dict[str, list[HighScoreEntry]] = {}
        self._achievements: set[str] = set()
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt score file %s", self.filepath)
            return
        for size_key, entries in data.get("scores", {}).items():
            self._scores[size_key] = [HighScoreEntry(**e) for e in entries]
        self._achievements = set(data.get("achievements", []))

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "scores": {
                size_key: [asdict(e) for e in entries]
                for size_key, entries in self._scores.items()
            },
            "achievements": sorted(self._achievements),
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- scores ---------------------------------------------------------------

    def add_score(self, size: int, entry: HighScoreEntry) -> None:
        key = str(size)
        if key not in self._scores:
            self._scores[key] = []
        self._scores[key].append(entry)
        self._scores[key].sort(key=lambda e: (e.moves, e.time))
        logger.debug("Recorded %d-move score for %dx%d", entry.moves, size, size)
        self.save()

    def get_scores(self, size: int) -> list[HighScoreEntry]:
        return self._scores.get(str(size), [])

    def get_all_sizes(self) -> list[int]:
        return sorted(int(k) for k in self._scores)

    def best_moves(self, size: int) -> int | None:
        entries = self.get_scores(size)
        return min(e.moves for e in entries) if entries else None

    def best_time(self, size: int) -> float | None:
        entries = self.get_scores(size)
        return min(e.time for e in entries) if entries else None

    def total_games(self) -> int:
        return sum(len(entries) for entries in self._scores.values())

    # -- achievements ---------------------------------------------------------

    @property
    def achievements(self) -> frozenset[str]:
        return frozenset(self._achievements)

    def unlock(self, achievement_ids: list[str]) -> None:
        new = set(achievement_ids) - self._achievements
        if not new:
            return
        self._achievements |= new
        self.save()
