from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class Team:
    name: str
    tag: str

    def __post_init__(self):
        if not self.name.strip() or not self.tag.strip():
            raise ValueError("team name and tag must not be blank")


@dataclass
class Player:
    name: str
    team: Optional[Team] = None

    def __post_init__(self):
        self.name = self.name.strip()
        if not self.name:
            raise ValueError("player name must not be blank")

    @property
    def label(self) -> str:
        """Short owner label drawn inside claimed boxes."""
        if self.team is not None:
            return self.team.tag
        return self.name


def head_to_head(*names: str) -> List[Player]:
    return [Player(name) for name in names]


def alternate_teams(teams: Sequence[Sequence[Player]]) -> List[Player]:
    """
    Interleave team members into one turn order: first member of each team,
    then the second, and so on. Teammates never sit next to each other as
    long as every team has the same size.
    """
    order: List[Player] = []
    longest = max((len(members) for members in teams), default=0)
    for slot in range(longest):
        for members in teams:
            if slot < len(members):
                order.append(members[slot])
    return order
