"""Shuffle engine: seeded random walks from the solved grid."""

from __future__ import annotations

import random

import pytest

from backend import shuffled_puzzle
from backend.engine.gamegenerator.generator import GameGenerator
from backend.models.grid import SIZES, GridState


def test_same_seed_same_grid() -> None:
    assert shuffled_puzzle(3, 50, seed=42) == shuffled_puzzle(3, 50, seed=42)


def test_different_seeds_usually_differ() -> None:
    grids = {GameGenerator.shuffled(4, 200, seed=s) for s in range(10)}
    assert len(grids) > 1


@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("seed", [0, 1, 7, 123])
def test_shuffled_grids_are_solvable(size: int, seed: int) -> None:
    assert GameGenerator.shuffled(size, seed=seed).is_solvable()


def test_single_step_moves_blank_once() -> None:
    start = GridState.solved(3)
    grid = GameGenerator.shuffle(start, 1, random.Random(0))

    assert grid.blank_pos in start.blank_neighbors()


def test_shuffle_draws_from_given_rng() -> None:
    start = GridState.solved(4)
    a = GameGenerator.shuffle(start, 30, random.Random(99))
    b = GameGenerator.shuffle(start, 30, random.Random(99))
    assert a == b


@pytest.mark.parametrize("budget", [0, -5])
def test_shuffle_rejects_empty_budget(budget: int) -> None:
    with pytest.raises(ValueError):
        GameGenerator.shuffle(GridState.solved(3), budget, random.Random(0))


@pytest.mark.parametrize("size, expected", [(3, 200), (4, 200), (5, 250)])
def test_default_step_budget(size: int, expected: int) -> None:
    assert GameGenerator.default_step_budget(size) == expected


@pytest.mark.parametrize("seed", range(20))
def test_generate_never_returns_solved(seed: int) -> None:
    # Two steps often walk straight back to the goal.
    grid = GameGenerator.generate(3, 2, seed=seed)
    assert not grid.is_solved()
    assert grid.is_solvable()


def test_generate_is_deterministic() -> None:
    assert GameGenerator.generate(5, seed=3) == GameGenerator.generate(5, seed=3)
