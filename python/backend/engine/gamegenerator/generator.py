"""Generates solvable sliding puzzle grids."""

from __future__ import annotations

import logging
import random

from backend.models.grid import GridState

logger = logging.getLogger(__name__)


class GameGenerator:
    """Creates solvable puzzles by random walks from the solved state.

    Every step is a legal single-tile move, so the result is always
    solvable and no parity check is needed afterwards.
    """

    @staticmethod
    def solved(size: int) -> GridState:
        """Return the goal-state grid (all tiles in order, blank bottom-right)."""
        return GridState.solved(size)

    @staticmethod
    def default_step_budget(size: int) -> int:
        return max(200, size * size * 10)

    @staticmethod
    def shuffle(state: GridState, step_budget: int, rng: random.Random) -> GridState:
        """Return *state* after *step_budget* uniformly random blank swaps."""
        if step_budget < 1:
            raise ValueError(f"step_budget must be at least 1, got {step_budget}.")

        for _ in range(step_budget):
            target = rng.choice(state.blank_neighbors())
            state = state.swap_blank(target)
        return state

    @staticmethod
    def shuffled(
        size: int, step_budget: int | None = None, seed: int | None = None
    ) -> GridState:
        """Return a shuffled grid; identical for identical *seed* values."""
        if step_budget is None:
            step_budget = GameGenerator.default_step_budget(size)
        rng = random.Random(seed)
        state = GameGenerator.shuffle(GridState.solved(size), step_budget, rng)
        logger.debug("Shuffled %dx%d with %d steps (seed=%s)", size, size, step_budget, seed)
        return state

    @staticmethod
    def generate(
        size: int, step_budget: int | None = None, seed: int | None = None
    ) -> GridState:
        """Return a random *solvable* grid that is not already solved."""
        if step_budget is None:
            step_budget = GameGenerator.default_step_budget(size)
        rng = random.Random(seed)
        state = GameGenerator.shuffle(GridState.solved(size), step_budget, rng)

        # Keep walking with the same generator so seeded games stay reproducible.
        while state.is_solved():
            state = GameGenerator.shuffle(state, step_budget, rng)
        return state
