"""Lifecycle hooks that put DotsAndBoxesGame behind the generic match driver."""
from __future__ import annotations
import logging
import re
from typing import Optional, Tuple

from console import Console
from errors import GameError, HintsExhausted, NoLegalMove, QuitRequested, UndoRefused
from game_logic import DEFAULT_COLS, DEFAULT_ROWS, MAX_SIZE, MIN_SIZE, DotsAndBoxesGame, Outcome
from moves import HINT_WORD, MOVE_HELP, UNDO_WORD, parse_move

logger = logging.getLogger(__name__)


def parse_board_size(text: str) -> Tuple[int, int, Optional[str]]:
    """
    Parse 'R C', 'RxC' or 'R x C' into (rows, cols, warning).
    Anything unusable falls back to the default size with a warning;
    blank input takes the default silently.
    """
    text = text.strip()
    if not text:
        return DEFAULT_ROWS, DEFAULT_COLS, None

    parts = [p for p in re.split(r"\s*[xX]\s*|\s+", text) if p]
    if len(parts) != 2:
        return DEFAULT_ROWS, DEFAULT_COLS, f"Invalid input. Using default {DEFAULT_ROWS}x{DEFAULT_COLS} board."
    try:
        rows, cols = int(parts[0]), int(parts[1])
    except ValueError:
        return DEFAULT_ROWS, DEFAULT_COLS, f"Invalid size. Using default {DEFAULT_ROWS}x{DEFAULT_COLS} board."

    if not (MIN_SIZE <= rows <= MAX_SIZE and MIN_SIZE <= cols <= MAX_SIZE):
        return DEFAULT_ROWS, DEFAULT_COLS, (
            f"Board size out of range. Using default {DEFAULT_ROWS}x{DEFAULT_COLS}."
        )
    return rows, cols, None


def render_board(game: DotsAndBoxesGame) -> str:
    """Plain-text lattice with dot numbers along the top and left."""
    grid = game.grid
    labels = game.labels()
    header = "   " + "".join(f"{c // 2:<2}" if c % 2 == 0 else "  " for c in range(grid.cols))
    lines = [header.rstrip()]
    for r in range(grid.rows):
        prefix = f"{r // 2:>2} " if r % 2 == 0 else "   "
        tokens = "".join(grid.get(r, c).display_token(labels) for c in range(grid.cols))
        lines.append((prefix + tokens).rstrip())
    return "\n".join(lines)


def format_scores(game: DotsAndBoxesGame) -> str:
    lines = ["Scores:"]
    for player_id, player in enumerate(game.players):
        lines.append(f"  {player.name}: {game.scores[player_id]}  ({game.turn_times[player_id]:.1f}s)")
    if game.team_mode:
        lines.append("Team totals:")
        for team_name, score in game.team_scores.items():
            lines.append(f"  {team_name}: {score}")
    return "\n".join(lines)


class DotsAndBoxesMatch:
    """Reads commands from a Console and feeds them to a DotsAndBoxesGame."""

    supports_difficulty = False

    def __init__(self, game: DotsAndBoxesGame, fixed_size: Optional[Tuple[int, int]] = None):
        self.game = game
        self.fixed_size = fixed_size

    def validate_size(self) -> None:
        self.game.validate_size()

    def set_size(self, console: Console) -> None:
        if self.fixed_size is not None:
            self.game.set_size(*self.fixed_size)
            return
        text = console.ask(
            f"Enter board size (rows x cols) between {MIN_SIZE} and {MAX_SIZE}, or 'quit': "
        )
        rows, cols, warning = parse_board_size(text)
        if warning:
            console.write(warning)
        self.game.set_size(rows, cols)

    def initialize_board(self) -> None:
        self.game.initialize_board()

    def render(self, console: Console) -> None:
        game = self.game
        console.write(render_board(game))
        console.write(format_scores(game))
        console.write(
            f"{game.current.name} to play. Hints left: {game.hints_left()}, "
            f"undo left: {game.undo_manager.remaining_for(game.current_player)}"
        )

    def read_and_apply_one_turn(self, console: Console) -> None:
        game = self.game
        player_id = game.current_player
        player = game.current

        game.start_turn()
        try:
            text = console.ask(f"{player.name}, your move: ")
        except QuitRequested:
            game.cancel_turn()
            raise

        command = text.lower()
        if command == HINT_WORD:
            game.cancel_turn()
            self._hint(console)
            return
        if command == UNDO_WORD:
            game.cancel_turn()
            self._undo(console)
            return

        try:
            move = parse_move(text)
            completed = game.apply_move(move)
        except GameError as e:
            game.cancel_turn()
            console.write(f"Invalid move: {e}")
            console.write(MOVE_HELP)
            return

        elapsed = game.finish_turn(player_id)
        logger.debug("%s played %s in %.2fs", player.name, move, elapsed)
        if completed:
            plural = "box" if completed == 1 else "boxes"
            console.write(f"Great! {player.name} completed {completed} {plural} and goes again.")
        console.write(f"{player.name} took {elapsed:.1f}s.")

    def _hint(self, console: Console) -> None:
        try:
            move = self.game.hint()
        except (HintsExhausted, NoLegalMove) as e:
            console.write(str(e))
            return
        console.write(f"Hint: try '{move}'. Hints left: {self.game.hints_left()}")

    def _undo(self, console: Console) -> None:
        try:
            self.game.undo()
        except UndoRefused as e:
            console.write(str(e))
            return
        console.write(f"Undone last move for {self.game.current.name}. (No more undos for this player.)")

    def is_terminal(self) -> bool:
        return self.game.game_over

    def report_outcome(self, console: Console) -> Optional[Outcome]:
        outcome = self.game.get_winner()
        if outcome is None:
            return None
        console.write("\n=== FINAL RESULTS ===")
        console.write(format_scores(self.game))
        kind = "teams" if outcome.by_team else "players"
        if outcome.is_tie:
            console.write(f"It's a tie between {kind}: {', '.join(outcome.winners)}")
        elif outcome.by_team:
            name = outcome.winners[0]
            console.write(
                f"Team {name} ({self.game.team_tag(name)}) wins with {outcome.best_score} boxes!"
            )
        else:
            console.write(f"{outcome.winners[0]} wins with {outcome.best_score} boxes!")
        return outcome
