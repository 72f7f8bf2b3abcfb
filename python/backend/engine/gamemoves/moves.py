"""Legal-move generation: single swaps and chain slides."""

from __future__ import annotations

from typing import NamedTuple

from backend.models.grid import BLANK, GridState, Position


class Slide(NamedTuple):
    """One tile shifting one cell toward the blank."""

    tile: int
    src: Position
    dst: Position


def can_slide(state: GridState, pos: Position) -> bool:
    """Return True if clicking *pos* moves at least one tile.

    Any tile sharing the blank's row or column can slide; adjacency is the
    single-tile case.
    """
    if not state.in_bounds(pos) or pos == state.blank_pos:
        return False
    br, bc = state.blank_pos
    return pos[0] == br or pos[1] == bc


def chain_to_move(state: GridState, pos: Position) -> list[Slide]:
    """Return the slides triggered by clicking *pos*.

    Slides are ordered from the tile next to the blank out to *pos*, so
    applying them in order never moves a tile onto another tile.
    """
    if not can_slide(state, pos):
        return []

    br, bc = state.blank_pos
    r, c = pos
    # Unit step from the blank toward the clicked cell.
    dr = (r > br) - (r < br)
    dc = (c > bc) - (c < bc)

    chain: list[Slide] = []
    cr, cc = br, bc
    while (cr, cc) != pos:
        src = (cr + dr, cc + dc)
        chain.append(Slide(state.tile_at(src), src, (cr, cc)))
        cr, cc = src
    return chain


def apply_chain(state: GridState, chain: list[Slide]) -> GridState:
    """Return a new grid with *chain* applied and the blank at its far end.

    Raises ``ValueError`` if *chain* does not describe a contiguous slide into
    the blank of *state*.
    """
    if not chain:
        return state

    first = chain[0]
    step = (first.src[0] - first.dst[0], first.src[1] - first.dst[1])
    if abs(step[0]) + abs(step[1]) != 1:
        raise ValueError(f"Slide {first} does not move a tile by one cell.")

    cells = list(state.cells)
    expected_dst = state.blank_pos
    for slide in chain:
        expected_src = (expected_dst[0] + step[0], expected_dst[1] + step[1])
        if (
            slide.dst != expected_dst
            or slide.src != expected_src
            or not state.in_bounds(slide.src)
            or state.tile_at(slide.src) != slide.tile
        ):
            raise ValueError(f"Slide {slide} does not continue the chain at {expected_dst}.")
        cells[state.index(slide.dst)] = slide.tile
        expected_dst = slide.src

    cells[state.index(expected_dst)] = BLANK
    return GridState._trusted(state.size, tuple(cells), expected_dst)


def single_moves(state: GridState) -> list[tuple[Position, GridState]]:
    """Every grid reachable by swapping one neighbour into the blank."""
    return [(pos, state.swap_blank(pos)) for pos in state.blank_neighbors()]


def reverse_target(chain: list[Slide]) -> Position | None:
    """Position to click to slide *chain* back where it came from."""
    if not chain:
        return None
    return chain[0].dst
