"""
Move value object and the text grammar players type at the move prompt.

Coordinates in a Move are dot coordinates:
  ('H', r, c): dot row r, between dot columns c and c+1
  ('V', r, c): dot column c, between dot rows r and r+1
which is the same (row, col, orientation) convention bots use for
horizontal_lines / vertical_lines.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from errors import MalformedMove, NonAdjacentEndpoints

QUIT_WORDS = frozenset({"quit", "exit", "q"})
HINT_WORD = "hint"
UNDO_WORD = "undo"

SIDES = {
    "T": "T", "TOP": "T",
    "B": "B", "BOT": "B", "BOTTOM": "B",
    "L": "L", "LEFT": "L",
    "R": "R", "RIGHT": "R",
}

MOVE_HELP = (
    "Enter 'h <row> <c1> <c2>', 'v <col> <r1> <r2>', "
    "'<row> <col> <T|B|L|R>', 'hint', 'undo' or 'quit'."
)


@dataclass(frozen=True)
class Move:
    orientation: str
    row: int
    col: int

    def __post_init__(self):
        if self.orientation not in ("H", "V"):
            raise MalformedMove(f"orientation must be 'H' or 'V', got {self.orientation!r}")

    @property
    def lattice(self) -> Tuple[int, int]:
        """Position of this edge in the (2R+1) x (2C+1) lattice."""
        if self.orientation == "H":
            return (2 * self.row, 2 * self.col + 1)
        return (2 * self.row + 1, 2 * self.col)

    @classmethod
    def from_lattice(cls, row: int, col: int) -> "Move":
        if row % 2 == 0 and col % 2 == 1:
            return cls("H", row // 2, col // 2)
        if row % 2 == 1 and col % 2 == 0:
            return cls("V", row // 2, col // 2)
        raise MalformedMove(f"lattice position ({row}, {col}) is not an edge")

    @classmethod
    def from_box_side(cls, box_row: int, box_col: int, side: str) -> "Move":
        key = SIDES.get(side.upper())
        if key == "T":
            return cls("H", box_row, box_col)
        if key == "B":
            return cls("H", box_row + 1, box_col)
        if key == "L":
            return cls("V", box_row, box_col)
        if key == "R":
            return cls("V", box_row, box_col + 1)
        raise MalformedMove(f"unknown side {side!r}; use T, B, L or R")

    def __str__(self) -> str:
        if self.orientation == "H":
            return f"h {self.row} {self.col} {self.col + 1}"
        return f"v {self.col} {self.row} {self.row + 1}"


def is_quit(text: str) -> bool:
    return text.strip().lower() in QUIT_WORDS


def _ints(tokens: List[str]) -> List[int]:
    try:
        return [int(t) for t in tokens]
    except ValueError:
        raise MalformedMove(f"expected integers, got {' '.join(tokens)!r}") from None


def _endpoints(fixed: int, a: int, b: int, orientation: str) -> Move:
    if abs(a - b) != 1:
        raise NonAdjacentEndpoints(f"endpoints {a} and {b} are not adjacent dots")
    low = min(a, b)
    if orientation == "H":
        return Move("H", fixed, low)
    return Move("V", low, fixed)


def parse_move(text: str) -> Move:
    """
    Parse one move command. Accepted forms:
      h <row> <c1> <c2>       horizontal edge on dot row `row`
      v <col> <r1> <r2>       vertical edge on dot column `col`
      <row> <col> <T|B|L|R>   side of the box at (row, col)
      <lrow> <lcol>           raw lattice coordinates of an edge
    Syntax only: bounds are checked by the game.
    """
    tokens = text.split()
    if not tokens:
        raise MalformedMove("empty move")

    head = tokens[0].lower()
    if head in ("h", "v"):
        if len(tokens) != 4:
            raise MalformedMove(f"'{head}' takes three numbers")
        fixed, a, b = _ints(tokens[1:])
        return _endpoints(fixed, a, b, head.upper())

    if len(tokens) == 3 and tokens[2].upper() in SIDES:
        box_row, box_col = _ints(tokens[:2])
        return Move.from_box_side(box_row, box_col, tokens[2])

    if len(tokens) == 2:
        row, col = _ints(tokens)
        return Move.from_lattice(row, col)

    raise MalformedMove(f"could not understand {text.strip()!r}")
