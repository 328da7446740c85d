import pytest

from errors import EdgeAlreadyClaimed, InvalidDimension, OutOfBounds, UndoRefused
from game_logic import DotsAndBoxesGame, Phase
from moves import Move, parse_move
from player import greedy
from roster import Player, Team, alternate_teams
from turn_timer import TurnTimer


def new_game(rows=2, cols=2, players=None):
    game = DotsAndBoxesGame(players, rows=rows, cols=cols)
    game.initialize_board()
    return game


def play(game, *commands):
    return [game.apply_move(parse_move(c)) for c in commands]


def test_lattice_is_sized_from_box_count():
    game = new_game(2, 3)
    assert (game.grid.rows, game.grid.cols) == (5, 7)
    assert game.total_boxes == 6
    assert game.phase is Phase.PLAYING


def test_fourth_side_claims_box_for_mover():
    game = new_game()
    assert game.apply_move(parse_move("h 0 0 1")) == 0
    assert game.current_player == 1
    assert game.apply_move(parse_move("v 0 0 1")) == 0
    assert game.current_player == 0
    assert game.apply_move(parse_move("h 1 0 1")) == 0
    assert game.current_player == 1
    assert game.scores == [0, 0]

    assert game.apply_move(parse_move("v 1 0 1")) == 1
    assert game.scores == [0, 1]
    assert game.current_player == 1  # extra turn
    assert game.grid.get(1, 1).owner == 1
    assert game.claimed_boxes == 1


def test_claiming_same_edge_twice_fails():
    game = new_game()
    play(game, "h 0 0 1")
    before = game.snapshot()
    with pytest.raises(EdgeAlreadyClaimed):
        game.apply_move(parse_move("h 0 0 1"))
    assert game.snapshot() == before
    assert game.scores == [0, 0]


def test_shared_edge_completes_two_boxes():
    game = new_game()
    play(game, "h 0 0 1", "h 1 0 1", "v 0 0 1", "h 0 1 2", "h 1 1 2", "v 2 0 1")
    assert game.scores == [0, 0]
    mover = game.current_player
    assert game.apply_move(parse_move("v 1 0 1")) == 2
    assert game.scores[mover] == 2
    assert game.current_player == mover


def test_off_board_move_is_rejected():
    game = new_game()
    with pytest.raises(OutOfBounds):
        game.apply_move(Move("H", 3, 0))
    with pytest.raises(OutOfBounds):
        game.apply_move(parse_move("v 5 0 1"))
    assert game.current_player == 0


def test_moves_require_a_running_match():
    game = DotsAndBoxesGame(rows=2, cols=2)
    with pytest.raises(RuntimeError):
        game.apply_move(Move("H", 0, 0))


def test_greedy_self_play_claims_every_box():
    game = new_game(3, 4)
    while not game.game_over:
        game.apply_move(greedy.suggest(game.grid))
    assert game.phase is Phase.FINISHED
    assert sum(game.scores) == game.total_boxes == 12
    assert all(cell.is_claimed for _, _, cell in game.grid.cells() if cell.kind.is_edge)
    assert game.get_winner() is not None


def test_winner_and_tie():
    game = new_game()
    assert game.get_winner() is None
    game.scores = [3, 1]
    game.phase = Phase.FINISHED
    outcome = game.get_winner()
    assert outcome.winners == ("Player 1",) and outcome.best_score == 3
    assert not outcome.is_tie

    game.scores = [2, 2]
    assert game.get_winner().is_tie


def test_set_size_validates_range():
    game = DotsAndBoxesGame()
    with pytest.raises(InvalidDimension):
        game.set_size(1, 5)
    with pytest.raises(InvalidDimension):
        game.set_size(21, 3)
    assert (game.rows, game.cols) == (3, 3)
    game.set_size(2, 4)
    assert (game.grid.rows, game.grid.cols) == (5, 9)
    assert all(cell is not None for _, _, cell in game.grid.cells())


def test_cannot_resize_mid_match():
    game = new_game()
    with pytest.raises(RuntimeError):
        game.set_size(4, 4)


def test_team_scores_follow_members():
    red, blue = Team("Red", "RD"), Team("Blue", "BL")
    order = alternate_teams([
        [Player("Ann", red), Player("Bob", red)],
        [Player("Cat", blue), Player("Dan", blue)],
    ])
    assert [p.name for p in order] == ["Ann", "Cat", "Bob", "Dan"]

    game = new_game(players=order)
    assert game.team_scores == {"Red": 0, "Blue": 0}
    # Ann, Cat, Bob, then Dan closes box (0, 0)
    play(game, "h 0 0 1", "v 0 0 1", "h 1 0 1", "v 1 0 1")
    assert game.scores == [0, 0, 0, 1]
    assert game.team_scores == {"Red": 0, "Blue": 1}
    assert game.labels()[3] == "BL"


def test_team_mode_requires_every_player_on_a_team():
    with pytest.raises(ValueError):
        DotsAndBoxesGame([Player("Ann", Team("Red", "R")), Player("Bob")])


def test_two_teams_cannot_share_a_name():
    red_a, red_b = Team("Red", "RA"), Team("Red", "RB")
    order = alternate_teams([
        [Player("Ann", red_a), Player("Bob", red_a)],
        [Player("Cat", red_b), Player("Dan", red_b)],
    ])
    with pytest.raises(ValueError, match="own name"):
        DotsAndBoxesGame(order)


def test_undo_restores_state_before_the_move():
    game = new_game()
    play(game, "h 0 0 1", "v 0 0 1", "h 1 0 1")
    before = game.snapshot()
    play(game, "v 1 0 1")
    assert game.scores == [0, 1]

    game.undo()
    assert game.snapshot() == before
    assert game.scores == [0, 0]
    assert game.current_player == 1

    play(game, "v 1 0 1")
    with pytest.raises(UndoRefused):
        game.undo()


def test_undo_refused_for_other_players_move():
    game = new_game()
    with pytest.raises(UndoRefused, match="No moves"):
        game.undo()
    play(game, "h 0 0 1")
    with pytest.raises(UndoRefused, match="own last move"):
        game.undo()
    assert game.undo_manager.remaining_for(1) == 1


def test_hint_spends_current_players_budget():
    game = new_game(3, 3)
    assert game.hint() == Move("H", 0, 0)
    assert game.hints_left(0) == 1
    assert game.hints_left(1) == 2


def test_new_match_resets_everything():
    game = new_game()
    play(game, "h 0 0 1", "v 0 0 1", "h 1 0 1", "v 1 0 1")
    game.hint()
    game.undo()
    game.initialize_board()
    assert game.scores == [0, 0]
    assert game.claimed_boxes == 0
    assert game.hints_left(1) == 2
    assert game.undo_manager.remaining_for(1) == 1
    assert all(not cell.is_claimed for _, _, cell in game.grid.cells())


def test_turn_timing_accumulates_per_player():
    ticks = iter([10.0, 12.5])
    game = DotsAndBoxesGame(rows=2, cols=2, timer=TurnTimer(clock=lambda: next(ticks)))
    game.initialize_board()
    game.start_turn()
    play(game, "h 0 0 1")
    assert game.finish_turn(0) == 2.5
    assert game.turn_times == [2.5, 0.0]
