"""Move executor: one move at a time, with relocations for animation."""

from __future__ import annotations

import pytest

from backend.engine.gamemoves.executor import (
    IllegalMoveError,
    TileRelocation,
    apply_move,
    play,
    replay,
)
from backend.models.grid import GridState


def test_illegal_target_is_a_no_op() -> None:
    grid = GridState.solved(3)
    outcome = apply_move(grid, (0, 0))

    assert outcome.state is grid
    assert outcome.relocations == []
    assert not outcome.moved


def test_chain_relocations_use_tile_labels() -> None:
    grid = GridState.solved(4)
    outcome = apply_move(grid, (3, 0))

    assert outcome.moved
    assert outcome.relocations == [
        TileRelocation(15, (3, 2), (3, 3)),
        TileRelocation(14, (3, 1), (3, 2)),
        TileRelocation(13, (3, 0), (3, 1)),
    ]
    for rel in outcome.relocations:
        assert outcome.state.tile_at(rel.dst) == rel.tile


def test_play_yields_each_step_in_order() -> None:
    grid = GridState.solved(3)
    path = [(2, 1), (1, 1), (1, 2), (2, 2)]

    outcomes = list(play(grid, path))

    assert len(outcomes) == len(path)
    assert [o.state.blank_pos for o in outcomes] == path
    # Each step starts where the previous one ended.
    assert outcomes[0].relocations[0].tile == 8
    assert outcomes[1].relocations[0].tile == 5
    assert outcomes[-1].state == replay(grid, path)


def test_play_is_lazy() -> None:
    grid = GridState.solved(3)
    steps = play(grid, [(2, 1), (0, 0)])

    first = next(steps)
    assert first.state.blank_pos == (2, 1)
    with pytest.raises(IllegalMoveError):
        next(steps)


def test_replay_rejects_illegal_path() -> None:
    with pytest.raises(IllegalMoveError):
        replay(GridState.solved(3), [(0, 0)])


def test_illegal_move_error_is_value_error() -> None:
    assert issubclass(IllegalMoveError, ValueError)


def test_replay_of_empty_path() -> None:
    grid = GridState.solved(5)
    assert replay(grid, []) is grid
