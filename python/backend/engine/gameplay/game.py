"""Core gameplay logic — processes moves and checks win condition."""

from __future__ import annotations

import logging
from typing import Iterator

from backend.config import PuzzleSettings, settings as default_settings
from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import MoveOutcome, TileRelocation, apply_move, play
from backend.engine.gamemoves.moves import can_slide, chain_to_move
from backend.engine.gamesolver.solver import Solver
from backend.engine.gamestate.state import GameState
from backend.models.grid import DIRECTION_OFFSETS, Direction, GridState, Position

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    The session owns the current grid.  Every move goes through the move
    executor and hands back the relocations so the caller can animate them
    before issuing the next move.
    """

    def __init__(
        self,
        size: int,
        settings: PuzzleSettings | None = None,
        seed: int | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.size = size
        grid = GameGenerator.generate(size, self.settings.shuffle_steps, seed)
        self.state = self._new_state(grid)
        self.last_relocations: list[TileRelocation] = []

    @classmethod
    def from_grid(
        cls, grid: GridState, settings: PuzzleSettings | None = None
    ) -> "GamePlay":
        """Create a game session from an existing grid (e.g. study mode)."""
        obj = object.__new__(cls)
        obj.settings = settings or default_settings
        obj.size = grid.size
        obj.state = obj._new_state(grid)
        obj.last_relocations = []
        return obj

    def _new_state(self, grid: GridState) -> GameState:
        return GameState(
            grid,
            time_limit=self.settings.time_limit,
            max_moves_for_win=self.settings.max_moves_for_win,
        )

    @property
    def grid(self) -> GridState:
        return self.state.grid

    # -- movement -------------------------------------------------------------

    def _apply(self, target: Position) -> list[TileRelocation]:
        """Apply one move; the relocations are also kept in ``last_relocations``."""
        self.last_relocations = []
        if self.state.is_time_up:
            return []
        outcome = apply_move(self.grid, target)
        if outcome.moved:
            self.state.advance(outcome.state)
            self.last_relocations = outcome.relocations
            logger.debug("Moved %d tile(s) toward %s", len(outcome.relocations), target)
        return outcome.relocations

    def move(self, direction: Direction) -> bool:
        """Slide the tile next to the blank in *direction* (where the *tile* goes).

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid; the moved tile is in
        ``last_relocations``.
        """
        br, bc = self.grid.blank_pos
        dr, dc = DIRECTION_OFFSETS[direction]
        return bool(self._apply((br + dr, bc + dc)))

    def click(self, row: int, col: int) -> list[TileRelocation]:
        """Click the cell at (row, col).

        Every tile between the clicked cell and the blank slides one cell
        toward the blank.  Returns the relocations, empty if nothing moved.
        A chain slide counts as a single move.
        """
        return self._apply((row, col))

    def move_tile(self, row: int, col: int) -> bool:
        """Like ``click`` but only reports whether anything moved."""
        return bool(self.click(row, col))

    # -- previews -------------------------------------------------------------

    def preview(self, row: int, col: int) -> list[Position]:
        """Positions of the tiles that clicking (row, col) would move."""
        return [slide.src for slide in chain_to_move(self.grid, (row, col))]

    def movable_positions(self) -> list[Position]:
        grid = self.grid
        return [
            (r, c)
            for r in range(grid.size)
            for c in range(grid.size)
            if can_slide(grid, (r, c))
        ]

    # -- solver ---------------------------------------------------------------

    def _solver_bounds(self) -> dict:
        return {
            "depth_cap": self.settings.solver_depth_cap,
            "max_nodes": self.settings.solver_max_nodes,
            "time_limit": self.settings.solver_time_limit,
        }

    def solve_path(self) -> list[Position]:
        """Solver path for the current grid; raises ``NoSolutionFound``."""
        return Solver.solve(self.grid, **self._solver_bounds())

    def hint(self) -> Position | None:
        """Apply the solver's next move and return its target.

        Returns ``None`` when nothing moved.
        """
        self.last_relocations = []
        if self.state.is_time_up:
            return None
        target = Solver.hint(self.grid, **self._solver_bounds())
        if target is None or not self._apply(target):
            return None
        return target

    def play_solution(self, path: list[Position]) -> Iterator[MoveOutcome]:
        """Apply *path* one move at a time, yielding each outcome.

        The next move is only applied once the caller asks for it, so the
        previous outcome can be fully animated first.
        """
        for outcome in play(self.grid, path):
            self.state.advance(outcome.state)
            self.last_relocations = outcome.relocations
            yield outcome

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    @property
    def is_lost(self) -> bool:
        return self.state.is_time_up and not self.state.is_solved
