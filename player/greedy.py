from __future__ import annotations
from typing import Optional, Tuple

from errors import NoLegalMove
from grid import Grid
from lattice import adjacent_boxes, count_sides
from moves import Move


def completes_a_box(grid: Grid, r: int, c: int) -> bool:
    """True if drawing the open edge at (r, c) would be the 4th side of a box."""
    return any(count_sides(grid, br, bc) == 3 for br, bc in adjacent_boxes(grid, r, c))


def suggest(grid: Grid) -> Move:
    """
    A greedy hint: take a box if one is available, otherwise the first open line.

    Edges are scanned row-major over the lattice and the first one that
    completes a box wins. The grid is not modified.
    """
    first_open: Optional[Tuple[int, int]] = None
    for r, c, cell in grid.cells():
        if not cell.kind.is_edge or cell.is_claimed:
            continue
        if completes_a_box(grid, r, c):
            return Move.from_lattice(r, c)
        if first_open is None:
            first_open = (r, c)

    if first_open is None:
        raise NoLegalMove("every line has already been drawn")
    return Move.from_lattice(*first_open)
