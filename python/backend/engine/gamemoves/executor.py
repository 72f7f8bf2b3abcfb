"""Applies moves one at a time and reports what moved.

The executor never sleeps or animates.  Each call returns the new grid and
the tile relocations, and the caller decides how long to spend showing them.
"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple

from backend.engine.gamemoves.moves import Slide, apply_chain, chain_to_move
from backend.models.grid import GridState, Position

# A relocation is reported exactly like a slide: (tile, src, dst).
TileRelocation = Slide


class IllegalMoveError(ValueError):
    """A scripted move (e.g. from a solver path) is not legal for the grid."""


class MoveOutcome(NamedTuple):
    state: GridState
    relocations: list[TileRelocation]

    @property
    def moved(self) -> bool:
        return bool(self.relocations)


def apply_move(state: GridState, target: Position) -> MoveOutcome:
    """Click *target*: slide one tile or a whole chain into the blank.

    Illegal targets leave the grid untouched and report no relocations.
    """
    chain = chain_to_move(state, target)
    if not chain:
        return MoveOutcome(state, [])
    return MoveOutcome(apply_chain(state, chain), chain)


def play(state: GridState, path: Iterable[Position]) -> Iterator[MoveOutcome]:
    """Yield one outcome per entry of *path*, each applied to the previous grid.

    Raises ``IllegalMoveError`` as soon as an entry cannot be applied.
    """
    current = state
    for i, target in enumerate(path):
        outcome = apply_move(current, target)
        if not outcome.moved:
            raise IllegalMoveError(
                f"Move {i} to {target} is illegal with the blank at {current.blank_pos}."
            )
        current = outcome.state
        yield outcome


def replay(state: GridState, path: Iterable[Position]) -> GridState:
    """Apply every move of *path* and return the final grid."""
    current = state
    for outcome in play(state, path):
        current = outcome.state
    return current
