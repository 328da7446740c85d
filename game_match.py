import sys
import argparse
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from console import Console
from dots_and_boxes import DotsAndBoxesMatch
from errors import InvalidDimension, QuitRequested
from game_logic import TEAM_SIZE, DotsAndBoxesGame
from hints import DEFAULT_MAX_HINTS, HintBudget
from moves import is_quit
from roster import Player, Team, alternate_teams, head_to_head

logger = logging.getLogger(__name__)


class LifecyclePhase(Enum):
    AWAITING_SIZE = "awaiting_size"
    AWAITING_DIFFICULTY = "awaiting_difficulty"
    PLAYING = "playing"
    FINISHED = "finished"
    EXIT = "exit"


class GridGameHooks(Protocol):
    """What a concrete game has to provide to be driven by MatchLifecycle."""

    def validate_size(self) -> None: ...

    def set_size(self, console: Console) -> None: ...

    def initialize_board(self) -> None: ...

    def render(self, console: Console) -> None: ...

    def read_and_apply_one_turn(self, console: Console) -> None: ...

    def is_terminal(self) -> bool: ...

    def report_outcome(self, console: Console) -> Any: ...


class Scoreboard:
    """Wins and draws across the rounds of one session."""

    def __init__(self):
        self.wins: Dict[str, int] = {}
        self.draws = 0

    def record(self, outcome) -> None:
        if outcome is None:
            return
        if outcome.is_tie:
            self.draws += 1
        else:
            winner = outcome.winners[0]
            self.wins[winner] = self.wins.get(winner, 0) + 1

    def __str__(self) -> str:
        if not self.wins and self.draws == 0:
            return "(no results yet)"
        lines = [f"{name}: {count} wins" for name, count in self.wins.items()]
        lines.append(f"Draws: {self.draws}")
        return "\n".join(lines)


class MatchLifecycle:
    """
    Generic round driver: size -> (difficulty) -> play until terminal -> report,
    then offer another round. The game is any object with the GridGameHooks
    methods. A quit at any prompt ends the round without a result.
    """

    def __init__(self, game: GridGameHooks, console: Optional[Console] = None,
                 scoreboard: Optional[Scoreboard] = None):
        self.game = game
        self.console = console or Console()
        self.scoreboard = scoreboard or Scoreboard()
        self.phase = LifecyclePhase.AWAITING_SIZE

    def _enter(self, phase: LifecyclePhase) -> None:
        logger.debug("lifecycle %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def play_round(self):
        """Play one round. Returns the game's outcome, or None if someone quit."""
        try:
            self._enter(LifecyclePhase.AWAITING_SIZE)
            self.game.set_size(self.console)
            self.game.validate_size()

            if getattr(self.game, "supports_difficulty", False):
                self._enter(LifecyclePhase.AWAITING_DIFFICULTY)
                self.game.set_difficulty(self.console)

            self.game.initialize_board()
            self._enter(LifecyclePhase.PLAYING)
            while not self.game.is_terminal():
                self.game.render(self.console)
                self.game.read_and_apply_one_turn(self.console)
        except QuitRequested:
            self.console.write("Match abandoned.")
            self._enter(LifecyclePhase.EXIT)
            return None

        self._enter(LifecyclePhase.FINISHED)
        self.game.render(self.console)
        outcome = self.game.report_outcome(self.console)
        self.scoreboard.record(outcome)
        return outcome

    def prompt_play_again(self) -> bool:
        while True:
            response = self.console.read_line("Would you like to play again? (yes/no) ")
            if response is None or is_quit(response):
                return False
            response = response.strip().lower()
            if response in ("yes", "y"):
                return True
            if response in ("no", "n"):
                return False
            self.console.write("Please respond with 'yes' or 'no'.")

    def run(self) -> None:
        while True:
            self.play_round()
            if not self.prompt_play_again():
                break
        self._enter(LifecyclePhase.EXIT)
        self.console.write("\nFinal Score:")
        self.console.write(str(self.scoreboard))
        self.console.write("Thanks for playing Dots and Boxes. Goodbye!")


def parse_team(text: str) -> List[Player]:
    """'NAME:TAG:member1,member2' -> the team's players."""
    parts = text.split(":")
    if len(parts) != 3:
        raise ValueError(f"team must look like NAME:TAG:member1,member2, got {text!r}")
    name, tag, members = parts
    team = Team(name.strip(), tag.strip())
    players = [Player(m, team) for m in members.split(",") if m.strip()]
    if len(players) != TEAM_SIZE:
        raise ValueError(f"team {team.name!r} needs exactly {TEAM_SIZE} players")
    return players


def build_roster(names: List[str], teams: List[str]) -> List[Player]:
    if teams:
        if len(teams) != 2:
            raise ValueError("team mode needs exactly two --team options")
        rosters = [parse_team(t) for t in teams]
        if rosters[0][0].team.name == rosters[1][0].team.name:
            raise ValueError(f"both teams are named {rosters[0][0].team.name!r}")
        return alternate_teams(rosters)
    if not names:
        names = ["Player 1", "Player 2"]
    if len(names) < 2:
        raise ValueError("at least two players are needed")
    return head_to_head(*names)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Dots and Boxes in the terminal.")

    parser.add_argument("players", nargs="*",
                        help="Player names for a head-to-head game. Defaults to 'Player 1' and 'Player 2'.")

    # Optional arguments with flags
    parser.add_argument("-t", "--team", action="append", default=[],
                        help="Team as NAME:TAG:member1,member2. Give it twice for team mode.")
    parser.add_argument("-s", "--size", type=str, default=None,
                        help="Board size formatted as ROWSxCOLS (e.g., '4x4'). Skips the size prompt.")
    parser.add_argument("--hints", type=int, default=DEFAULT_MAX_HINTS,
                        help=f"Hints per player per game. Defaults to {DEFAULT_MAX_HINTS}.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        players = build_roster(args.players, args.team)
        hints = HintBudget(max_hints=args.hints)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    fixed_size = None
    if args.size:
        # Parse board size from string 'RxC' to tuple (R, C)
        try:
            rows, cols = map(int, args.size.lower().split('x'))
            fixed_size = (rows, cols)
        except ValueError:
            print("Error: Invalid board size format. Please use ROWSxCOLS (e.g., '4x4').")
            sys.exit(1)

    try:
        game = DotsAndBoxesGame(players, hints=hints)
        if fixed_size:
            game.set_size(*fixed_size)
    except InvalidDimension as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("Dots and Boxes: " + " vs ".join(p.name for p in players))
    print("Draw lines between dots. Closing a box scores a point and earns another turn.")
    print("Type 'hint', 'undo' or 'quit' at any move prompt.\n")

    MatchLifecycle(DotsAndBoxesMatch(game, fixed_size)).run()


if __name__ == "__main__":
    main()
