from __future__ import annotations
import logging
from typing import Callable, Dict

from errors import HintsExhausted
from grid import Grid
from moves import Move
from player import greedy

logger = logging.getLogger(__name__)

DEFAULT_MAX_HINTS = 2

Strategy = Callable[[Grid], Move]


class HintBudget:
    """Per-player hint allowance in front of a move strategy."""

    def __init__(self, strategy: Strategy = greedy.suggest, max_hints: int = DEFAULT_MAX_HINTS):
        if max_hints < 0:
            raise ValueError("max_hints must not be negative")
        self._strategy = strategy
        self.max_hints = max_hints
        self._used: Dict[int, int] = {}

    def reset_for_new_game(self) -> None:
        self._used.clear()

    def remaining(self, player_id: int) -> int:
        used = self._used.get(player_id, 0)
        return min(self.max_hints, max(0, self.max_hints - used))

    def consume(self, player_id: int, grid: Grid) -> Move:
        """
        Spend one hint and return the suggested move.
        A NoLegalMove from the strategy is passed through without charging.
        """
        if self.remaining(player_id) == 0:
            raise HintsExhausted(f"no hints left (limit {self.max_hints} per game)")
        move = self._strategy(grid)
        self._used[player_id] = self._used.get(player_id, 0) + 1
        logger.info("player %d used a hint (%d left): %s", player_id, self.remaining(player_id), move)
        return move
