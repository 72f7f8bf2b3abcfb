"""Grid model for the sliding puzzle game."""

from __future__ import annotations

import operator
from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Sequence

BLANK = 0
SIZES = (3, 4, 5)

Position = tuple[int, int]


class InvalidStateError(ValueError):
    """Raised when a grid is built from cells that are not a valid permutation."""


class Direction(StrEnum):
    """Direction a *tile* travels into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Offset from the blank to the tile that travels in each direction.
# UP   → tile below the blank moves up
# DOWN → tile above the blank moves down
# LEFT → tile right of the blank moves left
# RIGHT→ tile left of the blank moves right
DIRECTION_OFFSETS: dict[Direction, Position] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


@dataclass(frozen=True)
class GridState:
    """Immutable snapshot of the puzzle grid.

    Cells are stored row-major as a flat tuple.  ``0`` (``BLANK``) marks the
    empty cell.  ``blank_pos`` is derived once at construction.
    """

    size: int
    cells: tuple[int, ...]
    blank_pos: Position = field(init=False, compare=False)

    def __post_init__(self) -> None:
        cells = tuple(self.cells)
        _validate(self.size, cells)
        object.__setattr__(self, "cells", cells)
        object.__setattr__(self, "blank_pos", divmod(cells.index(BLANK), self.size))

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, size: int) -> GridState:
        """Return the goal grid: tiles in order, blank bottom-right."""
        return cls(size, tuple(range(1, size * size)) + (BLANK,))

    @classmethod
    def from_cells(cls, size: int, cells: Iterable[int]) -> GridState:
        """Create a grid from a flat row-major cell list.

        Example::

            GridState.from_cells(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        try:
            values = tuple(_cell_value(v) for v in cells)
        except (TypeError, ValueError) as exc:
            raise InvalidStateError(f"Cells must be integers: {exc}") from exc
        return cls(size, values)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> GridState:
        """Create a grid from a list of rows (as stored in JSON)."""
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise InvalidStateError("Rows must form a square grid.")
        return cls.from_cells(size, (v for row in rows for v in row))

    # -- queries --------------------------------------------------------------

    @property
    def key(self) -> tuple[int, ...]:
        """Canonical serialization used for deduplication."""
        return self.cells

    def index(self, pos: Position) -> int:
        return pos[0] * self.size + pos[1]

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.size and 0 <= c < self.size

    def tile_at(self, pos: Position) -> int:
        return self.cells[self.index(pos)]

    def position_of(self, tile: int) -> Position:
        return divmod(self.cells.index(tile), self.size)

    def rows(self) -> list[list[int]]:
        n = self.size
        return [list(self.cells[r * n : (r + 1) * n]) for r in range(n)]

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        last = len(self.cells) - 1
        if self.cells[last] != BLANK:
            return False
        return all(v == i + 1 for i, v in enumerate(self.cells[:last]))

    def is_tile_correct(self, pos: Position) -> bool:
        """Check if the cell at *pos* holds its goal value."""
        val = self.tile_at(pos)
        if val == BLANK:
            return pos == (self.size - 1, self.size - 1)
        return divmod(val - 1, self.size) == pos

    def blank_neighbors(self) -> list[Position]:
        """Positions orthogonally adjacent to the blank (up, down, left, right)."""
        br, bc = self.blank_pos
        neighbors: list[Position] = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = br + dr, bc + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                neighbors.append((nr, nc))
        return neighbors

    def is_solvable(self) -> bool:
        """Return True if the goal grid can be reached by legal moves.

        Odd widths need an even inversion count.  Even widths also count the
        rows between the blank and the bottom row.
        """
        n = self.size
        flat = [v for v in self.cells if v != BLANK]
        inversions = 0
        for i, a in enumerate(flat):
            for b in flat[i + 1 :]:
                if a > b:
                    inversions += 1
        if n % 2 == 1:
            return inversions % 2 == 0
        blank_row_from_bottom = n - 1 - self.blank_pos[0]
        return (inversions + blank_row_from_bottom) % 2 == 0

    # -- transitions ----------------------------------------------------------

    def swap_blank(self, pos: Position) -> GridState:
        """Return a new grid with the tile at *pos* swapped into the blank.

        *pos* is assumed to be adjacent to the blank; callers validate.
        """
        cells = list(self.cells)
        bi = self.index(self.blank_pos)
        ti = self.index(pos)
        cells[bi], cells[ti] = cells[ti], BLANK
        return GridState._trusted(self.size, tuple(cells), pos)

    @classmethod
    def _trusted(cls, size: int, cells: tuple[int, ...], blank_pos: Position) -> GridState:
        """Build a grid from cells already known to be a valid permutation."""
        obj = object.__new__(cls)
        object.__setattr__(obj, "size", size)
        object.__setattr__(obj, "cells", cells)
        object.__setattr__(obj, "blank_pos", blank_pos)
        return obj

    def __str__(self) -> str:
        width = len(str(self.size * self.size - 1))
        return "\n".join(
            " ".join(("." if v == BLANK else str(v)).rjust(width) for v in row)
            for row in self.rows()
        )


def _validate(size: int, cells: tuple[int, ...]) -> None:
    if size not in SIZES:
        raise InvalidStateError(
            f"Unsupported grid size {size}; expected one of {SIZES}."
        )
    if len(cells) != size * size:
        raise InvalidStateError(
            f"Expected {size * size} cells for a {size}×{size} grid, "
            f"got {len(cells)}."
        )
    if sorted(cells) != list(range(size * size)):
        counts = Counter(cells)
        dupes = sorted(v for v, k in counts.items() if k > 1)
        missing = sorted(set(range(size * size)) - set(cells))
        raise InvalidStateError(
            f"Cells are not a permutation of 0..{size * size - 1} "
            f"(duplicates: {dupes}, missing: {missing})."
        )


def _cell_value(value: object) -> int:
    # Digit strings are allowed; floats and bools are not.
    if isinstance(value, bool):
        raise TypeError(f"{value!r} is not an integer")
    if isinstance(value, str):
        return int(value.strip())
    return operator.index(value)
