from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    player_id: int
    snapshot: Any


class UndoManager:
    """
    Undo based on full-state snapshots.

    Each player may undo once per game, and only when the most recent move
    on the history belongs to them.
    """

    def __init__(self):
        self._snapshot_fn: Optional[Callable[[], Any]] = None
        self._restore_fn: Optional[Callable[[Any], None]] = None
        self._history: List[_Entry] = []
        self._used: Dict[int, bool] = {}

    def set_snapshot_functions(self, snapshot_fn: Callable[[], Any], restore_fn: Callable[[Any], None]) -> None:
        self._snapshot_fn = snapshot_fn
        self._restore_fn = restore_fn

    def reset_for_new_game(self) -> None:
        self._history.clear()
        self._used.clear()

    def record_before_move(self, player_id: int) -> None:
        if self._snapshot_fn is None:
            raise RuntimeError("snapshot/restore functions not set")
        self._history.append(_Entry(player_id, self._snapshot_fn()))

    def refusal_reason(self, player_id: int) -> Optional[str]:
        """Why undo_last_for(player_id) would fail right now, or None."""
        if self._used.get(player_id, False):
            return "Undo already used this game."
        if not self._history:
            return "No moves to undo."
        if self._history[-1].player_id != player_id:
            return "You can only undo your own last move."
        return None

    def undo_last_for(self, player_id: int) -> bool:
        if self._restore_fn is None:
            raise RuntimeError("snapshot/restore functions not set")
        reason = self.refusal_reason(player_id)
        if reason is not None:
            logger.debug("undo refused for player %d: %s", player_id, reason)
            return False

        entry = self._history.pop()
        self._restore_fn(entry.snapshot)
        self._used[player_id] = True
        logger.info("player %d undid their last move", player_id)
        return True

    def remaining_for(self, player_id: int) -> int:
        return 0 if self._used.get(player_id, False) else 1

    def __len__(self) -> int:
        return len(self._history)
