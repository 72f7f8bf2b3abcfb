"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.grid import GridState


class GameState:
    """Holds the current grid, move counter, elapsed time, and time limit.

    The grid itself is an immutable ``GridState``; this object only swaps in
    the next snapshot after each move.
    """

    def __init__(
        self,
        grid: GridState,
        time_limit: float = 0,
        max_moves_for_win: int | None = None,
    ) -> None:
        self.grid = grid
        self.moves: int = 0
        self.time_limit = time_limit
        self.max_moves_for_win = max_moves_for_win
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    @property
    def time_left(self) -> float | None:
        """Seconds remaining, or ``None`` when the game is untimed."""
        if not self.time_limit:
            return None
        return max(0.0, self.time_limit - self.elapsed_time)

    @property
    def is_time_up(self) -> bool:
        return self.time_left == 0.0

    # -- moves ----------------------------------------------------------------

    def advance(self, grid: GridState) -> None:
        """Replace the grid after a successful move."""
        self.grid = grid
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.grid.is_solved()

    @property
    def is_optimal_win(self) -> bool:
        """Solved within the configured move allowance."""
        if not self.is_solved:
            return False
        return self.max_moves_for_win is None or self.moves <= self.max_moves_for_win
