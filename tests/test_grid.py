import pytest

from cells import BoardCell, CellKind
from errors import InvalidDimension, OutOfBounds
from grid import Grid


def test_rejects_non_positive_dimensions():
    with pytest.raises(InvalidDimension):
        Grid(0, 3)
    with pytest.raises(ValueError):
        Grid(3, -1)


def test_get_and_set_are_bounds_checked():
    g = Grid(2, 3)
    g.set(1, 2, "x")
    assert g.get(1, 2) == "x"
    assert g.get(0, 0) is None
    with pytest.raises(OutOfBounds):
        g.get(2, 0)
    with pytest.raises(OutOfBounds):
        g.set(0, 3, "y")
    with pytest.raises(IndexError):
        g.get(-1, 0)
    assert (g.rows, g.cols) == (2, 3)


def test_resize_shrink_keeps_top_left_region():
    g = Grid(3, 3)
    g.fill_from(list("abcdefghi"))
    g.resize(2, 2)
    assert (g.rows, g.cols) == (2, 2)
    assert [v for _, _, v in g.cells()] == ["a", "b", "d", "e"]
    with pytest.raises(OutOfBounds):
        g.get(2, 2)


def test_resize_grow_leaves_new_cells_empty():
    g = Grid(1, 2)
    g.fill("z")
    g.resize(2, 3)
    assert g.get(0, 0) == "z" and g.get(0, 1) == "z"
    assert g.get(0, 2) is None
    assert g.get(1, 0) is None


def test_resize_rejects_non_positive():
    g = Grid(2, 2)
    with pytest.raises(InvalidDimension):
        g.resize(0, 2)
    assert (g.rows, g.cols) == (2, 2)


def test_fill_from_requires_exact_length():
    g = Grid(2, 2)
    with pytest.raises(ValueError):
        g.fill_from([1, 2, 3])


def test_copy_does_not_share_rows():
    g = Grid(2, 2)
    g.fill(0)
    other = g.copy()
    other.set(0, 0, 9)
    assert g.get(0, 0) == 0


def test_populate_builds_cell_kinds_from_parity():
    g = Grid(3, 3)
    g.populate(BoardCell.at)
    kinds = {(r, c): cell.kind for r, c, cell in g.cells()}
    assert kinds[(0, 0)] is CellKind.DOT
    assert kinds[(0, 1)] is CellKind.H_EDGE
    assert kinds[(1, 0)] is CellKind.V_EDGE
    assert kinds[(1, 1)] is CellKind.BOX
    assert kinds[(2, 2)] is CellKind.DOT
