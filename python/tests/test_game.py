"""Game session: moves, clicks, previews, hints and solver playback."""

from __future__ import annotations

import pytest

from backend.config import PuzzleSettings
from backend.engine.gameplay.game import GamePlay
from backend.engine.gamesolver.solver import NoSolutionFound
from backend.engine.gamestate.state import GameState
from backend.models.grid import Direction, GridState


def _one_away() -> GridState:
    return GridState.solved(3).swap_blank((2, 1))


# -- construction -------------------------------------------------------------


def test_new_game_is_shuffled_and_seeded() -> None:
    settings = PuzzleSettings(shuffle_steps=40)
    a = GamePlay(4, settings, seed=8)
    b = GamePlay(4, settings, seed=8)

    assert a.grid == b.grid
    assert not a.is_won
    assert a.state.moves == 0


def test_from_grid_keeps_grid() -> None:
    grid = _one_away()
    game = GamePlay.from_grid(grid)
    assert game.grid is grid
    assert game.size == 3


# -- moving -------------------------------------------------------------------


@pytest.mark.parametrize(
    "direction, blank_after",
    [
        (Direction.UP, (2, 1)),     # blank stays: nothing below it
        (Direction.DOWN, (1, 1)),   # tile above moves down
        (Direction.LEFT, (2, 2)),   # tile on the right moves left
        (Direction.RIGHT, (2, 0)),  # tile on the left moves right
    ],
)
def test_move_direction(direction: Direction, blank_after: tuple[int, int]) -> None:
    game = GamePlay.from_grid(_one_away())
    moved = game.move(direction)

    assert moved is (blank_after != (2, 1))
    assert game.grid.blank_pos == blank_after
    assert game.state.moves == int(moved)


def test_click_chain_counts_as_one_move() -> None:
    game = GamePlay.from_grid(GridState.solved(4))
    relocations = game.click(3, 0)

    assert [r.tile for r in relocations] == [15, 14, 13]
    assert game.grid.blank_pos == (3, 0)
    assert game.state.moves == 1


def test_click_off_line_does_nothing() -> None:
    game = GamePlay.from_grid(GridState.solved(4))
    assert game.click(0, 0) == []
    assert not game.move_tile(1, 1)
    assert game.state.moves == 0


def test_winning_by_click() -> None:
    game = GamePlay.from_grid(_one_away())
    assert game.move_tile(2, 2)
    assert game.is_won
    assert not game.is_lost


# -- previews -----------------------------------------------------------------


def test_preview_lists_chain_sources() -> None:
    game = GamePlay.from_grid(GridState.solved(4))
    assert game.preview(0, 3) == [(2, 3), (1, 3), (0, 3)]
    assert game.preview(1, 1) == []


def test_movable_positions() -> None:
    game = GamePlay.from_grid(_one_away())
    assert set(game.movable_positions()) == {(2, 0), (2, 2), (0, 1), (1, 1)}


# -- solver -------------------------------------------------------------------


def test_hint_applies_best_move() -> None:
    game = GamePlay.from_grid(_one_away())

    assert game.hint() == (2, 2)
    assert game.is_won
    assert game.state.moves == 1


def test_hint_when_solved() -> None:
    game = GamePlay.from_grid(GridState.solved(3))
    assert game.hint() is None
    assert game.state.moves == 0


def test_solve_path_raises_on_unsolvable() -> None:
    game = GamePlay.from_grid(GridState.from_cells(3, [2, 1, 3, 4, 5, 6, 7, 8, 0]))
    with pytest.raises(NoSolutionFound) as exc_info:
        game.solve_path()
    assert exc_info.value.reason == "unsolvable"


def test_solve_path_uses_configured_bounds() -> None:
    settings = PuzzleSettings(solver_max_nodes=1)
    game = GamePlay.from_grid(GridState.solved(3).swap_blank((2, 1)).swap_blank((1, 1)), settings)

    with pytest.raises(NoSolutionFound) as exc_info:
        game.solve_path()
    assert exc_info.value.reason == "node_limit"


def test_play_solution_steps_one_move_at_a_time() -> None:
    game = GamePlay(3, PuzzleSettings(shuffle_steps=12), seed=4)
    path = game.solve_path()

    steps = game.play_solution(path)
    first = next(steps)
    # Only the first move has been applied so far.
    assert game.state.moves == 1
    assert game.grid == first.state

    rest = list(steps)
    assert len(rest) == len(path) - 1
    assert game.is_won
    assert game.state.moves == len(path)


# -- game state ---------------------------------------------------------------


def test_optimal_win_threshold() -> None:
    state = GameState(_one_away(), max_moves_for_win=1)
    state.advance(GridState.solved(3))
    assert state.is_optimal_win

    state.advance(GridState.solved(3))
    assert not state.is_optimal_win


def test_untimed_game_never_runs_out() -> None:
    state = GameState(GridState.solved(3))
    assert state.time_left is None
    assert not state.is_time_up


def test_time_up_blocks_moves(monkeypatch: pytest.MonkeyPatch) -> None:
    game = GamePlay.from_grid(_one_away(), PuzzleSettings(time_limit=5))
    monkeypatch.setattr(GameState, "elapsed_time", property(lambda self: 6.0))

    assert game.state.is_time_up
    assert game.is_lost
    assert game.click(2, 2) == []
    assert game.state.moves == 0


def test_hint_after_time_up_moves_nothing(monkeypatch: pytest.MonkeyPatch) -> None:
    game = GamePlay.from_grid(_one_away(), PuzzleSettings(time_limit=1))
    monkeypatch.setattr(GameState, "elapsed_time", property(lambda self: 2.0))

    assert game.hint() is None
    assert game.last_relocations == []
    assert game.grid == _one_away()
    assert game.state.moves == 0


def test_last_relocations_follow_every_move() -> None:
    game = GamePlay.from_grid(_one_away())

    assert not game.move(Direction.UP)
    assert game.last_relocations == []

    assert game.move(Direction.DOWN)
    assert [(r.tile, r.src, r.dst) for r in game.last_relocations] == [(5, (1, 1), (2, 1))]

    game.click(2, 1)
    assert game.hint() == (2, 2)
    assert [(r.tile, r.src, r.dst) for r in game.last_relocations] == [(8, (2, 2), (2, 1))]
    assert game.is_won


def test_pause_freezes_clock() -> None:
    state = GameState(GridState.solved(3))
    state.pause()
    frozen = state.elapsed_time
    assert state.elapsed_time == frozen
    state.resume()
    assert state.elapsed_time >= frozen
