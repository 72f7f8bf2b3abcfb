"""Key handling shared by the terminal frontends.

Both CLI frontends feed normalised actions from ``input_handler`` into a
``CliSession`` and only differ in how they draw the grid and the status line.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from backend.engine.gamemoves.executor import MoveOutcome
from backend.engine.gameplay.game import GamePlay
from backend.engine.gamesolver.solver import NoSolutionFound
from backend.models.grid import Direction, Position
from frontend.cli.input_handler import CURSOR_STEPS

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

# Human-readable reasons for a failed solve.
_FAILURES = {
    "unsolvable": "Board is unsolvable.",
    "exhausted": "No solution within the search depth.",
    "node_limit": "Search budget exhausted; try a smaller grid.",
    "timeout": "Solver ran out of time.",
    "cancelled": "Solve cancelled.",
}


@dataclass
class Status:
    """One-line message under the grid; ``kind`` picks the colour."""

    kind: str  # "ok" | "info" | "warn" | "error"
    text: str


class CliSession:
    """Cursor, move and solver handling for one game on screen."""

    def __init__(self, game: GamePlay) -> None:
        self.game = game
        self.cursor: Position = game.grid.blank_pos
        self.status: Status | None = None

    # -- cursor ---------------------------------------------------------------

    def move_cursor(self, action: str) -> None:
        dr, dc = CURSOR_STEPS[action]
        r, c = self.cursor
        n = self.game.size
        self.cursor = (min(n - 1, max(0, r + dr)), min(n - 1, max(0, c + dc)))

    @property
    def preview(self) -> set[Position]:
        """Cells whose tiles would slide if the cursor cell were clicked."""
        return set(self.game.preview(*self.cursor))

    # -- actions --------------------------------------------------------------

    def handle(self, key: str) -> bool:
        """Apply a movement/cursor action.  Returns True if *key* was consumed."""
        if key in _DIRECTIONS:
            self.game.move(_DIRECTIONS[key])
        elif key in CURSOR_STEPS:
            self.move_cursor(key)
        elif key in ("click", "enter"):
            moved = self.game.click(*self.cursor)
            if not moved:
                self.status = Status("warn", "Nothing to slide there.")
        else:
            return False
        return True

    def hint(self) -> None:
        if self.game.is_won:
            self.status = Status("ok", "Already solved!")
            return
        target = self.game.hint()
        if target is None:
            self.status = Status("warn", "No hint available.")
        else:
            self.status = Status("info", f"Hint: slid tile at row {target[0] + 1}, col {target[1] + 1}")

    def find_solution(self) -> list[Position] | None:
        """Run the solver; on failure set the status line and return None."""
        if self.game.is_won:
            self.status = Status("ok", "Already solved!")
            return None
        try:
            return self.game.solve_path()
        except NoSolutionFound as exc:
            self.status = Status("error", _FAILURES.get(exc.reason, str(exc)))
            return None

    def play_solution(
        self,
        path: list[Position],
        draw_step: Callable[[MoveOutcome, int, int], None],
        delay: float,
    ) -> None:
        """Replay *path*, drawing after every move."""
        for i, outcome in enumerate(self.game.play_solution(path)):
            draw_step(outcome, i, len(path))
            time.sleep(delay)
        self.cursor = self.game.grid.blank_pos
        self.status = Status("ok", f"Solved in {len(path)} moves!")

    def take_status(self) -> Status | None:
        status, self.status = self.status, None
        return status
