from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional


class CellKind(Enum):
    DOT = "dot"
    H_EDGE = "h_edge"
    V_EDGE = "v_edge"
    BOX = "box"

    @classmethod
    def for_position(cls, row: int, col: int) -> "CellKind":
        """Kind of the lattice cell at (row, col), from coordinate parity."""
        if row % 2 == 0:
            return cls.DOT if col % 2 == 0 else cls.H_EDGE
        return cls.V_EDGE if col % 2 == 0 else cls.BOX

    @property
    def is_edge(self) -> bool:
        return self in (CellKind.H_EDGE, CellKind.V_EDGE)


@dataclass
class BoardCell:
    """
    One addressable unit of the dot lattice.

    owner is None until claimed, then the claiming player's id. Edges are
    claimed by a move, boxes by completing their fourth side.
    """
    kind: CellKind
    owner: Optional[int] = None

    @classmethod
    def at(cls, row: int, col: int) -> "BoardCell":
        return cls(CellKind.for_position(row, col))

    @property
    def is_claimed(self) -> bool:
        return self.owner is not None

    def claim(self, player_id: int) -> bool:
        """Set the owner once. Dots are never claimable."""
        if self.kind is CellKind.DOT or self.owner is not None:
            return False
        self.owner = player_id
        return True

    def display_token(self, labels: Optional[Mapping[int, str]] = None) -> str:
        """Two-character token for text rendering."""
        if self.kind is CellKind.DOT:
            return "* "
        if self.kind is CellKind.H_EDGE:
            return "--" if self.is_claimed else "  "
        if self.kind is CellKind.V_EDGE:
            return "| " if self.is_claimed else "  "
        if not self.is_claimed:
            return "  "
        label = labels.get(self.owner) if labels else None
        if not label:
            label = str(self.owner)
        return label[:2].upper().ljust(2)
