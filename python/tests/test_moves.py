"""Move generation: legality, chain slides and their inverse."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import apply_move
from backend.engine.gamemoves.moves import (
    Slide,
    apply_chain,
    can_slide,
    chain_to_move,
    reverse_target,
    single_moves,
)
from backend.models.grid import GridState

# Blank in the centre of a 3x3 grid.
#   1 2 3
#   4 . 5
#   6 7 8
CENTRE = GridState.from_rows([[1, 2, 3], [4, 0, 5], [6, 7, 8]])


# -- legality -----------------------------------------------------------------


@pytest.mark.parametrize(
    "pos, expected",
    [
        ((0, 1), True),
        ((2, 1), True),
        ((1, 0), True),
        ((1, 2), True),
        ((1, 1), False),  # the blank itself
        ((0, 0), False),  # diagonal
        ((2, 2), False),
        ((3, 1), False),  # off the grid
        ((-1, 1), False),
    ],
)
def test_can_slide(pos: tuple[int, int], expected: bool) -> None:
    assert can_slide(CENTRE, pos) is expected


def test_can_slide_whole_row_and_column() -> None:
    grid = GridState.solved(4)
    movable = {
        (r, c) for r in range(4) for c in range(4) if can_slide(grid, (r, c))
    }
    assert movable == {(3, 0), (3, 1), (3, 2), (0, 3), (1, 3), (2, 3)}


def test_chain_empty_when_not_slidable() -> None:
    assert chain_to_move(CENTRE, (0, 0)) == []
    assert chain_to_move(CENTRE, CENTRE.blank_pos) == []


# -- concrete scenarios ---------------------------------------------------------


def test_single_move_of_tile_eight() -> None:
    grid = GridState.solved(3)
    outcome = apply_move(grid, (2, 1))

    assert outcome.state.cells == (1, 2, 3, 4, 5, 6, 7, 0, 8)
    assert grid.blank_pos == (2, 2)
    assert outcome.state.blank_pos == (2, 1)
    assert outcome.relocations == [Slide(8, (2, 1), (2, 2))]


def test_two_away_chain_in_row() -> None:
    grid = GridState.solved(3)
    chain = chain_to_move(grid, (2, 0))

    # Nearest tile first, each shifting one cell toward the blank.
    assert chain == [Slide(8, (2, 1), (2, 2)), Slide(7, (2, 0), (2, 1))]

    moved = apply_chain(grid, chain)
    assert moved.blank_pos == (2, 0)
    assert moved.rows()[2] == [0, 7, 8]
    assert moved.rows()[:2] == grid.rows()[:2]


def test_chain_in_column() -> None:
    grid = GridState.solved(4)
    moved = apply_chain(grid, chain_to_move(grid, (0, 3)))

    assert [row[3] for row in moved.rows()] == [0, 4, 8, 12]
    assert moved.blank_pos == (0, 3)


def test_apply_chain_leaves_input_untouched() -> None:
    grid = GridState.solved(3)
    apply_chain(grid, chain_to_move(grid, (0, 2)))
    assert grid.is_solved()


# -- malformed chains -----------------------------------------------------------


def test_apply_chain_rejects_gap() -> None:
    grid = GridState.solved(3)
    with pytest.raises(ValueError):
        apply_chain(grid, [Slide(7, (2, 0), (2, 1))])


def test_apply_chain_rejects_wrong_tile() -> None:
    grid = GridState.solved(3)
    with pytest.raises(ValueError):
        apply_chain(grid, [Slide(5, (2, 1), (2, 2))])


def test_apply_chain_rejects_non_contiguous() -> None:
    grid = GridState.solved(3)
    with pytest.raises(ValueError):
        apply_chain(grid, [Slide(8, (2, 1), (2, 2)), Slide(6, (1, 2), (2, 1))])


# -- round trip -------------------------------------------------------------------


@pytest.mark.parametrize("seed", range(5))
def test_chain_round_trip(seed: int) -> None:
    rng = random.Random(seed)
    grid = GameGenerator.shuffled(4, 100, seed=seed)

    for _ in range(20):
        movable = [
            (r, c) for r in range(4) for c in range(4) if can_slide(grid, (r, c))
        ]
        chain = chain_to_move(grid, rng.choice(movable))
        moved = apply_chain(grid, chain)

        back = chain_to_move(moved, reverse_target(chain))
        assert reverse_target(chain) == grid.blank_pos
        assert apply_chain(moved, back) == grid
        grid = moved


def test_reverse_target_of_empty_chain() -> None:
    assert reverse_target([]) is None


def test_single_moves_follow_blank_neighbors() -> None:
    moves = single_moves(CENTRE)

    assert [target for target, _ in moves] == CENTRE.blank_neighbors()
    for target, state in moves:
        assert state.blank_pos == target
        assert state.tile_at(CENTRE.blank_pos) == CENTRE.tile_at(target)
