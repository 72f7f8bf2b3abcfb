"""Sliding puzzle solver — A* over single-tile moves.

The search works at single-swap granularity (chain slides are never
expanded) and scores nodes with the Manhattan distance, which is
admissible and consistent for unit-cost swaps.  A successful search is
therefore optimal.  It is bounded three ways: a depth cap on path length,
a ceiling on node expansions, and an optional wall-clock limit or cancel
callback so a single-threaded caller is never blocked indefinitely.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, NamedTuple

from backend.engine.gamemoves.moves import single_moves
from backend.models.grid import BLANK, GridState, Position

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_CAP = 50
DEFAULT_MAX_NODES = 500_000

# How many expansions pass between clock / cancel checks.
_POLL_INTERVAL = 1024


@dataclass
class SearchStats:
    expanded: int = 0
    generated: int = 0
    peak_frontier: int = 0
    elapsed: float = 0.0


class NoSolutionFound(Exception):
    """The search ended without reaching the solved grid.

    ``reason`` is one of ``"unsolvable"``, ``"exhausted"``, ``"node_limit"``,
    ``"timeout"`` or ``"cancelled"``.
    """

    def __init__(self, reason: str, stats: SearchStats | None = None) -> None:
        self.reason = reason
        self.stats = stats or SearchStats()
        super().__init__(f"No solution found ({reason}) after {self.stats.expanded} expansions.")


class SearchResult(NamedTuple):
    path: list[Position]
    stats: SearchStats


@dataclass(eq=False)
class SearchNode:
    state: GridState
    g: int
    h: int
    move: Position | None = None
    parent: SearchNode | None = field(default=None, repr=False)

    @property
    def f(self) -> int:
        return self.g + self.h

    @property
    def path(self) -> list[Position]:
        """Blank targets from the start grid to this node."""
        moves: list[Position] = []
        node: SearchNode | None = self
        while node is not None and node.move is not None:
            moves.append(node.move)
            node = node.parent
        moves.reverse()
        return moves


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def heuristic(state: GridState) -> int:
        """Sum of Manhattan distances of every tile to its goal cell."""
        n = state.size
        distance = 0
        for i, value in enumerate(state.cells):
            if value == BLANK:
                continue
            r, c = divmod(i, n)
            gr, gc = divmod(value - 1, n)
            distance += abs(r - gr) + abs(c - gc)
        return distance

    @staticmethod
    def is_solvable(state: GridState) -> bool:
        """Return True if *state* can reach the goal state."""
        return state.is_solvable()

    @staticmethod
    def solve(
        state: GridState,
        depth_cap: int = DEFAULT_DEPTH_CAP,
        max_nodes: int | None = DEFAULT_MAX_NODES,
        time_limit: float | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> list[Position]:
        """Return the blank targets that solve *state*, ``[]`` if already solved.

        Raises ``NoSolutionFound`` when the grid is unsolvable or any bound
        is hit before the goal is reached.
        """
        return Solver.search(state, depth_cap, max_nodes, time_limit, should_cancel).path

    @staticmethod
    def search(
        state: GridState,
        depth_cap: int = DEFAULT_DEPTH_CAP,
        max_nodes: int | None = DEFAULT_MAX_NODES,
        time_limit: float | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> SearchResult:
        """Like ``solve`` but also returns the search statistics."""
        stats = SearchStats()
        started = time.monotonic()

        if state.is_solved():
            return SearchResult([], stats)
        if not state.is_solvable():
            logger.info("Refusing to search an unsolvable %dx%d grid", state.size, state.size)
            raise NoSolutionFound("unsolvable", stats)

        counter = itertools.count()
        start = SearchNode(state, 0, Solver.heuristic(state))
        frontier: list[tuple[int, int, SearchNode]] = [(start.f, next(counter), start)]
        # Cheapest g currently queued for each state; older, costlier entries are stale.
        best_g: dict[tuple[int, ...], int] = {state.key: 0}
        explored: set[tuple[int, ...]] = set()

        def fail(reason: str) -> NoSolutionFound:
            stats.elapsed = time.monotonic() - started
            logger.info(
                "No solution for %dx%d grid: %s (%d expanded, %.2fs)",
                state.size, state.size, reason, stats.expanded, stats.elapsed,
            )
            return NoSolutionFound(reason, stats)

        while frontier:
            stats.peak_frontier = max(stats.peak_frontier, len(frontier))
            _, _, node = heapq.heappop(frontier)
            key = node.state.key
            if key in explored or node.g > best_g.get(key, node.g):
                continue
            explored.add(key)

            if node.state.is_solved():
                path = node.path
                stats.elapsed = time.monotonic() - started
                logger.info(
                    "Solved %dx%d grid in %d moves", state.size, state.size, len(path)
                )
                logger.debug(
                    "Search stats: %d expanded, %d generated, peak frontier %d, %.3fs",
                    stats.expanded, stats.generated, stats.peak_frontier, stats.elapsed,
                )
                return SearchResult(path, stats)

            if node.g > depth_cap:
                continue

            stats.expanded += 1
            if max_nodes is not None and stats.expanded > max_nodes:
                raise fail("node_limit")
            if stats.expanded % _POLL_INTERVAL == 0:
                if time_limit is not None and time.monotonic() - started > time_limit:
                    raise fail("timeout")
                if should_cancel is not None and should_cancel():
                    raise fail("cancelled")

            g = node.g + 1
            for target, child in single_moves(node.state):
                child_key = child.key
                if child_key in explored:
                    continue
                if best_g.get(child_key, g + 1) <= g:
                    continue
                best_g[child_key] = g
                h = Solver.heuristic(child)
                heapq.heappush(
                    frontier,
                    (g + h, next(counter), SearchNode(child, g, h, target, node)),
                )
                stats.generated += 1

        raise fail("exhausted")

    @staticmethod
    def hint(state: GridState, **bounds) -> Position | None:
        """Return the single best next move, or ``None`` if solved / no solution."""
        if state.is_solved():
            return None
        try:
            moves = Solver.solve(state, **bounds)
        except NoSolutionFound:
            return None
        return moves[0] if moves else None
