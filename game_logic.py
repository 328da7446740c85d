from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from cells import BoardCell
from errors import EdgeAlreadyClaimed, InvalidDimension, OutOfBounds, UndoRefused
from grid import Grid
from hints import HintBudget
from lattice import adjacent_boxes, is_box_complete, lattice_shape
from moves import Move
from roster import Player, head_to_head
from turn_timer import TurnTimer
from undo import UndoManager

logger = logging.getLogger(__name__)

MIN_SIZE = 2
MAX_SIZE = 20
DEFAULT_ROWS = 3
DEFAULT_COLS = 3
TEAM_SIZE = 2


class Phase(Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class Snapshot:
    """Everything a move can change, captured just before the move."""
    owners: Tuple[Tuple[Optional[int], ...], ...]
    player_scores: Tuple[int, ...]
    team_scores: Tuple[Tuple[str, int], ...]
    claimed_boxes: int
    current_player: int


@dataclass(frozen=True)
class Outcome:
    winners: Tuple[str, ...]
    best_score: int
    by_team: bool

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1


class DotsAndBoxesGame:
    """
    Dots and Boxes rules on a (2R+1) x (2C+1) lattice of BoardCells.

    Players are addressed by their index in the turn rotation. In team mode
    the rotation must already alternate teams (see roster.alternate_teams).
    """

    def __init__(self, players: Optional[Sequence[Player]] = None, rows: int = DEFAULT_ROWS,
                 cols: int = DEFAULT_COLS, hints: Optional[HintBudget] = None,
                 timer: Optional[TurnTimer] = None):
        self.players: List[Player] = list(players) if players else head_to_head("Player 1", "Player 2")
        self.team_mode = any(p.team is not None for p in self.players)
        if self.team_mode and any(p.team is None for p in self.players):
            raise ValueError("in team mode every player needs a team")
        # team scores are keyed by name, so two different teams may not share one
        teams = {p.team for p in self.players if p.team is not None}
        if len({t.name for t in teams}) != len(teams):
            raise ValueError("every team needs its own name")

        self._rows = rows
        self._cols = cols
        self.validate_size()
        self.grid = Grid(*lattice_shape(rows, cols))
        self.grid.populate(BoardCell.at)

        self.hints = hints if hints is not None else HintBudget()
        self.timer = timer if timer is not None else TurnTimer()
        self.undo_manager = UndoManager()
        self.undo_manager.set_snapshot_functions(self.snapshot, self.restore)

        self.scores: List[int] = [0] * len(self.players)
        self.team_scores: Dict[str, int] = {}
        self.turn_times: List[float] = [0.0] * len(self.players)
        self.current_player = 0
        self.claimed_boxes = 0
        self.phase = Phase.SETUP

    # -- size -------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def total_boxes(self) -> int:
        return self._rows * self._cols

    def validate_size(self) -> None:
        if not (MIN_SIZE <= self._rows <= MAX_SIZE and MIN_SIZE <= self._cols <= MAX_SIZE):
            raise InvalidDimension(
                f"board size must be between {MIN_SIZE}x{MIN_SIZE} and {MAX_SIZE}x{MAX_SIZE}, "
                f"got {self._rows}x{self._cols}"
            )

    def set_size(self, rows: int, cols: int) -> None:
        """Change the number of boxes. Not allowed while a match is running."""
        if self.phase is Phase.PLAYING:
            raise RuntimeError("cannot resize the board during a match")
        old = (self._rows, self._cols)
        self._rows, self._cols = rows, cols
        try:
            self.validate_size()
        except InvalidDimension:
            self._rows, self._cols = old
            raise
        self.grid.resize(*lattice_shape(rows, cols))
        for r, c, cell in list(self.grid.cells()):
            if cell is None:
                self.grid.set(r, c, BoardCell.at(r, c))
        self.phase = Phase.SETUP
        logger.debug("board resized to %dx%d boxes", rows, cols)

    # -- lifecycle --------------------------------------------------------

    def initialize_board(self) -> None:
        """Fresh cells, zero scores, fresh hint/undo/timer state; start playing."""
        self.grid.populate(BoardCell.at)
        self.scores = [0] * len(self.players)
        self.team_scores = {p.team.name: 0 for p in self.players if p.team is not None}
        self.turn_times = [0.0] * len(self.players)
        self.claimed_boxes = 0
        self.current_player = 0
        self.hints.reset_for_new_game()
        self.undo_manager.reset_for_new_game()
        self.timer.reset()
        self.phase = Phase.PLAYING
        logger.debug("new %dx%d match with %d players", self._rows, self._cols, len(self.players))

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.FINISHED

    @property
    def current(self) -> Player:
        return self.players[self.current_player]

    def _require_playing(self) -> None:
        if self.phase is not Phase.PLAYING:
            raise RuntimeError(f"no match in progress (phase is {self.phase.value})")

    # -- moves ------------------------------------------------------------

    def _edge_cell(self, move: Move) -> Tuple[int, int, BoardCell]:
        r, c = move.lattice
        if not self.grid.is_valid_position(r, c):
            raise OutOfBounds(f"line {move} is off the {self._rows}x{self._cols} board")
        return r, c, self.grid.get(r, c)

    def apply_move(self, move: Move) -> int:
        """
        Draw a line for the current player. Returns the number of boxes it
        completed (0, 1 or 2). Completing a box keeps the turn; otherwise play
        passes to the next player in the rotation.
        """
        self._require_playing()
        r, c, cell = self._edge_cell(move)
        if cell.is_claimed:
            raise EdgeAlreadyClaimed(f"line {move} is already drawn")

        mover = self.current_player
        self.undo_manager.record_before_move(mover)
        cell.claim(mover)

        completed = self._check_for_new_boxes(r, c, mover)
        if completed:
            logger.debug("%s completed %d box(es) with %s", self.current.name, completed, move)
        else:
            self.current_player = (self.current_player + 1) % len(self.players)

        if self.claimed_boxes == self.total_boxes:
            self.phase = Phase.FINISHED
            logger.debug("all %d boxes claimed, match finished", self.total_boxes)
        return completed

    def _check_for_new_boxes(self, r: int, c: int, mover: int) -> int:
        # Both neighbours are checked: one line can close two boxes at once.
        completed = 0
        for br, bc in adjacent_boxes(self.grid, r, c):
            box = self.grid.get(br, bc)
            if not box.is_claimed and is_box_complete(self.grid, br, bc):
                box.claim(mover)
                self._award(mover)
                completed += 1
        return completed

    def _award(self, player_id: int) -> None:
        self.scores[player_id] += 1
        self.claimed_boxes += 1
        team = self.players[player_id].team
        if team is not None:
            self.team_scores[team.name] = self.team_scores.get(team.name, 0) + 1

    # -- snapshots ----------------------------------------------------------

    def snapshot(self) -> Snapshot:
        owners = tuple(
            tuple(self.grid.get(r, c).owner for c in range(self.grid.cols))
            for r in range(self.grid.rows)
        )
        return Snapshot(
            owners=owners,
            player_scores=tuple(self.scores),
            team_scores=tuple(self.team_scores.items()),
            claimed_boxes=self.claimed_boxes,
            current_player=self.current_player,
        )

    def restore(self, snap: Snapshot) -> None:
        for r, row in enumerate(snap.owners):
            for c, owner in enumerate(row):
                self.grid.get(r, c).owner = owner
        self.scores = list(snap.player_scores)
        self.team_scores = dict(snap.team_scores)
        self.claimed_boxes = snap.claimed_boxes
        self.current_player = snap.current_player
        self.phase = Phase.FINISHED if self.claimed_boxes == self.total_boxes else Phase.PLAYING

    # -- hint / undo / timer ------------------------------------------------

    def hint(self) -> Move:
        """Spend one of the current player's hints."""
        self._require_playing()
        return self.hints.consume(self.current_player, self.grid)

    def hints_left(self, player_id: Optional[int] = None) -> int:
        return self.hints.remaining(self.current_player if player_id is None else player_id)

    def undo(self) -> None:
        """Take back the current player's own last move, once per match."""
        self._require_playing()
        player_id = self.current_player
        reason = self.undo_manager.refusal_reason(player_id)
        if not self.undo_manager.undo_last_for(player_id):
            raise UndoRefused(reason)

    def start_turn(self) -> None:
        self.timer.start(self.current_player)

    def finish_turn(self, player_id: int) -> float:
        """Stop the timer for player_id and add the time to their total."""
        elapsed = self.timer.stop(player_id)
        if elapsed:
            self.turn_times[player_id] += elapsed
        return elapsed

    def cancel_turn(self) -> None:
        self.timer.cancel()

    # -- results --------------------------------------------------------------

    def get_winner(self) -> Optional[Outcome]:
        """None while the match is running; otherwise the leader(s)."""
        if not self.game_over:
            return None
        if self.team_mode:
            table = list(self.team_scores.items())
        else:
            table = [(p.name, s) for p, s in zip(self.players, self.scores)]
        best = max(score for _, score in table)
        winners = tuple(name for name, score in table if score == best)
        return Outcome(winners=winners, best_score=best, by_team=self.team_mode)

    def labels(self) -> Dict[int, str]:
        return {i: p.label for i, p in enumerate(self.players)}

    def team_tag(self, team_name: str) -> str:
        for p in self.players:
            if p.team is not None and p.team.name == team_name:
                return p.team.tag
        raise KeyError(team_name)
