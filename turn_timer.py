from __future__ import annotations
import time
from typing import Callable, Optional


class TurnTimer:
    """
    Measures how long a player takes for one move.

        timer.start(player_id)
        ... read input, apply the move ...
        seconds = timer.stop(player_id)

    Call cancel() when the input was not a move (hint, undo, bad syntax).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._running = False
        self._started_at = 0.0
        self._player_id: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def player_id(self) -> Optional[int]:
        return self._player_id

    def reset(self) -> None:
        self.cancel()

    def start(self, player_id: int) -> None:
        """Arm for player_id, discarding any earlier unstopped measurement."""
        self._player_id = player_id
        self._running = True
        self._started_at = self._clock()

    def stop(self, player_id: int) -> float:
        """Elapsed seconds, or 0.0 with no effect if idle or armed for someone else."""
        if not self._running or self._player_id != player_id:
            return 0.0
        elapsed = self._clock() - self._started_at
        self.cancel()
        return elapsed

    def cancel(self) -> None:
        self._running = False
        self._started_at = 0.0
        self._player_id = None
