"""Achievements unlocked by finishing games."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from backend.models.highscore import HighScoreManager


@dataclass(frozen=True)
class GameResult:
    """Outcome of a finished game, as seen by achievement rules."""

    size: int
    moves: int
    time: float
    total_games: int


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    condition: Callable[[GameResult], bool]


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        "first_win", "First Victory!", "Complete your first puzzle",
        lambda r: r.total_games >= 1,
    ),
    Achievement(
        "speed_demon_3x3", "Speed Demon", "Solve a 3x3 puzzle in under 30 seconds",
        lambda r: r.size == 3 and r.time < 30,
    ),
    Achievement(
        "speed_demon_4x4", "Lightning Fast", "Solve a 4x4 puzzle in under 60 seconds",
        lambda r: r.size == 4 and r.time < 60,
    ),
    Achievement(
        "efficiency_master", "Efficiency Master", "Solve a 4x4 puzzle in under 100 moves",
        lambda r: r.size == 4 and r.moves < 100,
    ),
    Achievement(
        "puzzle_veteran", "Puzzle Veteran", "Complete 10 puzzles",
        lambda r: r.total_games >= 10,
    ),
    Achievement(
        "puzzle_master", "Puzzle Master", "Complete 50 puzzles",
        lambda r: r.total_games >= 50,
    ),
    Achievement(
        "perfectionist", "Perfectionist", "Solve a 3x3 puzzle in 22 moves or fewer",
        lambda r: r.size == 3 and r.moves <= 22,
    ),
    Achievement(
        "big_puzzle_solver", "Big Puzzle Solver", "Complete a 5x5 puzzle",
        lambda r: r.size == 5,
    ),
)


def check_achievements(
    result: GameResult, unlocked: frozenset[str] | set[str] = frozenset()
) -> list[Achievement]:
    """Return achievements earned by *result* that are not yet in *unlocked*."""
    return [
        a for a in ACHIEVEMENTS
        if a.id not in unlocked and a.condition(result)
    ]


def record_win(
    manager: HighScoreManager, size: int, moves: int, time: float
) -> list[Achievement]:
    """Evaluate a win already stored in *manager* and persist new unlocks."""
    result = GameResult(
        size=size, moves=moves, time=time, total_games=manager.total_games()
    )
    earned = check_achievements(result, manager.achievements)
    manager.unlock([a.id for a in earned])
    return earned
