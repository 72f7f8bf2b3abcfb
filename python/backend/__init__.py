"""Puzzle state engine.

Construction, interactive play and autosolve in one place::

    from backend import shuffled_puzzle, apply_move, solve

    grid = shuffled_puzzle(3, 50, seed=7)
    for target in solve(grid):
        grid = apply_move(grid, target).state
"""

from __future__ import annotations

from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import IllegalMoveError, MoveOutcome, apply_move
from backend.engine.gamemoves.moves import apply_chain, can_slide, chain_to_move
from backend.engine.gamesolver.solver import NoSolutionFound, Solver
from backend.models.grid import BLANK, GridState, InvalidStateError, Position


def new_puzzle(size: int) -> GridState:
    return GameGenerator.solved(size)


def shuffled_puzzle(
    size: int, step_budget: int | None = None, seed: int | None = None
) -> GridState:
    return GameGenerator.shuffled(size, step_budget, seed)


def is_solved(state: GridState) -> bool:
    return state.is_solved()


solve = Solver.solve

__all__ = [
    "BLANK",
    "GridState",
    "IllegalMoveError",
    "InvalidStateError",
    "MoveOutcome",
    "NoSolutionFound",
    "Position",
    "apply_chain",
    "apply_move",
    "can_slide",
    "chain_to_move",
    "is_solved",
    "new_puzzle",
    "shuffled_puzzle",
    "solve",
]
