from __future__ import annotations
from typing import Any, Callable, Iterator, List, Sequence, Tuple

from errors import InvalidDimension, OutOfBounds

Coord = Tuple[int, int]  # (row, col)


class Grid:
    """
    Bounds-checked rows x cols container.

    Cells start out as None. Every access outside [0, rows) x [0, cols)
    raises OutOfBounds; the grid never grows on its own.
    """

    def __init__(self, rows: int, cols: int):
        self._check_dimensions(rows, cols)
        self._rows = rows
        self._cols = cols
        self._cells: List[List[Any]] = [[None] * cols for _ in range(rows)]

    @staticmethod
    def _check_dimensions(rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise InvalidDimension(f"grid dimensions must be positive, got {rows}x{cols}")

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _validate(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise OutOfBounds(
                f"position ({row}, {col}) is out of bounds for grid of size {self._rows}x{self._cols}"
            )

    def get(self, row: int, col: int) -> Any:
        self._validate(row, col)
        return self._cells[row][col]

    def set(self, row: int, col: int, value: Any) -> None:
        self._validate(row, col)
        self._cells[row][col] = value

    def fill(self, value: Any) -> None:
        """Put the same value in every cell."""
        for row in self._cells:
            for c in range(self._cols):
                row[c] = value

    def populate(self, factory: Callable[[int, int], Any]) -> None:
        """Replace every cell with factory(row, col)."""
        for r in range(self._rows):
            for c in range(self._cols):
                self._cells[r][c] = factory(r, c)

    def fill_from(self, values: Sequence[Any]) -> None:
        """Fill row-major from a flat sequence of exactly rows*cols values."""
        if len(values) != self.size:
            raise ValueError(f"expected {self.size} values, got {len(values)}")
        it = iter(values)
        for r in range(self._rows):
            for c in range(self._cols):
                self._cells[r][c] = next(it)

    def resize(self, new_rows: int, new_cols: int) -> None:
        """
        Change the dimensions, keeping the overlapping top-left region.
        Cells that did not exist before come back as None.
        """
        self._check_dimensions(new_rows, new_cols)
        resized: List[List[Any]] = [[None] * new_cols for _ in range(new_rows)]
        for r in range(min(self._rows, new_rows)):
            for c in range(min(self._cols, new_cols)):
                resized[r][c] = self._cells[r][c]
        self._cells = resized
        self._rows = new_rows
        self._cols = new_cols

    def copy(self) -> "Grid":
        """Shallow copy: a new grid holding the same cell objects."""
        other = Grid(self._rows, self._cols)
        for r in range(self._rows):
            other._cells[r] = list(self._cells[r])
        return other

    def positions(self) -> Iterator[Coord]:
        for r in range(self._rows):
            for c in range(self._cols):
                yield (r, c)

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        """Row-major (row, col, value) triples."""
        for r, c in self.positions():
            yield r, c, self._cells[r][c]
