"""Solver test suite — correctness, optimality and search bounds.

Boards come from seeded shuffles and from a breadth-first sweep outward from
the solved grid, so expected path lengths are known exactly.  Every test is
hard-killed by ``pytest-timeout`` (configured in ``pyproject.toml``).  If the
solver returns in time, the path is replayed through the real game engine to
verify correctness.
"""

from __future__ import annotations

import pytest

from backend import solve
from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import replay
from backend.engine.gamemoves.moves import single_moves
from backend.engine.gameplay.game import GamePlay
from backend.engine.gamesolver.solver import NoSolutionFound, Solver
from backend.models.grid import GridState


# -- helpers ------------------------------------------------------------------


def _bfs_depths(size: int, max_depth: int) -> dict[GridState, int]:
    """Exact single-move distance from solved for every grid within *max_depth*."""
    start = GridState.solved(size)
    depths = {start: 0}
    layer = [start]
    for depth in range(1, max_depth + 1):
        next_layer = []
        for grid in layer:
            for _, child in single_moves(grid):
                if child not in depths:
                    depths[child] = depth
                    next_layer.append(child)
        layer = next_layer
    return depths


_DEPTHS_3x3 = _bfs_depths(3, 14)


def _samples(depth: int, count: int = 3) -> list[GridState]:
    at_depth = sorted((g for g, d in _DEPTHS_3x3.items() if d == depth), key=lambda g: g.key)
    return at_depth[:count]


_OPTIMALITY_CASES = [
    pytest.param(grid, depth, id=f"depth{depth}-{i}")
    for depth in (1, 2, 4, 7, 10, 14)
    for i, grid in enumerate(_samples(depth))
]


def _assert_solve(grid: GridState, **bounds) -> list:
    """Solve the grid and verify the returned path reaches the goal state."""
    path = Solver.solve(grid, **bounds)

    # ---- path sanity ----------------------------------------------------------
    assert isinstance(path, list), "solve() must return a list of positions"
    assert len(path) > 0, f"Solvable grid returned 0 moves:\n{grid}"

    # ---- apply moves via the real game engine and check win -------------------
    assert replay(grid, path).is_solved()

    game = GamePlay.from_grid(grid)
    for i, (r, c) in enumerate(path):
        assert game.move_tile(r, c), (
            f"Move {i} to {(r, c)} was invalid at blank {game.grid.blank_pos}"
        )
    assert game.is_won, f"Grid not solved after {len(path)} moves:\n{grid}"
    return path


# -- heuristic ----------------------------------------------------------------


def test_heuristic_values() -> None:
    assert Solver.heuristic(GridState.solved(4)) == 0
    assert Solver.heuristic(GridState.solved(3).swap_blank((2, 1))) == 1
    assert Solver.heuristic(GridState.from_rows([[8, 1, 3], [4, 0, 2], [7, 6, 5]])) == 10


# -- basic results --------------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5])
def test_solved_grid_needs_no_moves(size: int) -> None:
    assert Solver.solve(GridState.solved(size)) == []


def test_one_move_away() -> None:
    grid = GridState.solved(3).swap_blank((2, 1))

    path = solve(grid)

    assert path == [(2, 2)]
    assert replay(grid, path).is_solved()


@pytest.mark.parametrize("grid, depth", _OPTIMALITY_CASES)
def test_path_is_optimal(grid: GridState, depth: int) -> None:
    path = _assert_solve(grid)
    assert len(path) == depth


@pytest.mark.parametrize("seed", range(8))
def test_solve_3x3(seed: int) -> None:
    grid = GameGenerator.generate(3, seed=seed)
    path = _assert_solve(grid)
    assert len(path) <= 31  # hardest 3x3 grids need 31 moves


@pytest.mark.parametrize("seed", range(5))
def test_solve_4x4(seed: int) -> None:
    grid = GameGenerator.generate(4, 30, seed=seed)
    assert len(_assert_solve(grid)) <= 30


@pytest.mark.parametrize("seed", range(3))
def test_solve_5x5(seed: int) -> None:
    grid = GameGenerator.generate(5, 20, seed=seed)
    assert len(_assert_solve(grid)) <= 20


def test_search_reports_stats() -> None:
    grid = _samples(7)[0]
    result = Solver.search(grid)

    assert len(result.path) == 7
    assert result.stats.expanded >= 7
    assert result.stats.generated > 0
    assert result.stats.peak_frontier >= 1


# -- hints --------------------------------------------------------------------


def test_hint_is_first_move() -> None:
    grid = _samples(4)[0]
    assert Solver.hint(grid) == Solver.solve(grid)[0]


def test_hint_on_solved_grid() -> None:
    assert Solver.hint(GridState.solved(4)) is None


def test_hint_swallows_failures() -> None:
    unsolvable = GridState.from_cells(3, [2, 1, 3, 4, 5, 6, 7, 8, 0])
    assert Solver.hint(unsolvable) is None


# -- bounded failures -------------------------------------------------------------


def test_unsolvable_reported_without_search() -> None:
    grid = GridState.from_cells(3, [2, 1, 3, 4, 5, 6, 7, 8, 0])

    with pytest.raises(NoSolutionFound) as exc_info:
        Solver.solve(grid)

    assert exc_info.value.reason == "unsolvable"
    assert exc_info.value.stats.expanded == 0


def test_depth_cap_exhausts_search() -> None:
    grid = _samples(6)[0]

    with pytest.raises(NoSolutionFound) as exc_info:
        Solver.solve(grid, depth_cap=3)
    assert exc_info.value.reason == "exhausted"

    # Nodes at the cap are still expanded, so cap 5 reaches a 6-move goal.
    assert len(Solver.solve(grid, depth_cap=5)) == 6


@pytest.mark.parametrize("grid", _samples(4), ids=lambda g: "".join(map(str, g.cells)))
def test_depth_cap_allows_one_move_past_cap(grid: GridState) -> None:
    assert len(_assert_solve(grid, depth_cap=3)) == 4

    with pytest.raises(NoSolutionFound) as exc_info:
        Solver.solve(grid, depth_cap=2)
    assert exc_info.value.reason == "exhausted"


def test_node_limit() -> None:
    grid = GameGenerator.generate(4, seed=11)

    with pytest.raises(NoSolutionFound) as exc_info:
        Solver.solve(grid, max_nodes=10)

    assert exc_info.value.reason == "node_limit"
    assert exc_info.value.stats.expanded == 11


def test_time_limit() -> None:
    grid = GameGenerator.generate(5, seed=5)

    with pytest.raises(NoSolutionFound) as exc_info:
        Solver.solve(grid, max_nodes=None, time_limit=1e-6)

    assert exc_info.value.reason == "timeout"


def test_cancel_callback() -> None:
    grid = GameGenerator.generate(5, seed=5)
    calls = []

    def cancel() -> bool:
        calls.append(1)
        return True

    with pytest.raises(NoSolutionFound) as exc_info:
        Solver.solve(grid, max_nodes=None, should_cancel=cancel)

    assert exc_info.value.reason == "cancelled"
    assert calls == [1]
