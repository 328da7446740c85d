"""
Adjacency on the dot lattice.

A board of R x C boxes is stored as a (2R+1) x (2C+1) grid: dots on
(even, even), horizontal edges on (even, odd), vertical edges on
(odd, even) and boxes on (odd, odd).
"""
from __future__ import annotations
from typing import Iterator, Tuple

from cells import CellKind
from grid import Grid

Coord = Tuple[int, int]


def lattice_shape(box_rows: int, box_cols: int) -> Coord:
    return (2 * box_rows + 1, 2 * box_cols + 1)


def box_sides(br: int, bc: int) -> Tuple[Coord, Coord, Coord, Coord]:
    """Top, bottom, left, right edges of the box at lattice (br, bc)."""
    return ((br - 1, bc), (br + 1, bc), (br, bc - 1), (br, bc + 1))


def adjacent_boxes(grid: Grid, r: int, c: int) -> Iterator[Coord]:
    """
    Boxes sharing the edge at (r, c): above and below a horizontal edge,
    left and right of a vertical one. Boundary edges have only one.
    """
    if grid.get(r, c).kind is CellKind.H_EDGE:
        candidates = ((r - 1, c), (r + 1, c))
    else:
        candidates = ((r, c - 1), (r, c + 1))
    for br, bc in candidates:
        if grid.is_valid_position(br, bc):
            yield (br, bc)


def count_sides(grid: Grid, br: int, bc: int) -> int:
    """Number of drawn sides of the box at lattice position (br, bc)."""
    return sum(1 for r, c in box_sides(br, bc) if grid.get(r, c).is_claimed)


def is_box_complete(grid: Grid, br: int, bc: int) -> bool:
    return count_sides(grid, br, bc) == 4
