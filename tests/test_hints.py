import pytest

from errors import HintsExhausted, NoLegalMove
from hints import DEFAULT_MAX_HINTS, HintBudget
from moves import Move


def fixed_strategy(grid):
    return Move("H", 0, 0)


def test_default_budget_is_two_per_player():
    hints = HintBudget(fixed_strategy)
    assert DEFAULT_MAX_HINTS == 2
    assert hints.remaining(0) == 2
    assert hints.consume(0, None) == Move("H", 0, 0)
    assert hints.remaining(0) == 1
    hints.consume(0, None)
    assert hints.remaining(0) == 0
    with pytest.raises(HintsExhausted):
        hints.consume(0, None)
    assert hints.remaining(0) == 0
    assert hints.remaining(1) == 2


def test_reset_restores_full_budget():
    hints = HintBudget(fixed_strategy, max_hints=1)
    hints.consume(3, None)
    hints.reset_for_new_game()
    assert hints.remaining(3) == 1


def test_strategy_failure_does_not_spend_a_hint():
    def no_moves(grid):
        raise NoLegalMove("board full")

    hints = HintBudget(no_moves)
    with pytest.raises(NoLegalMove):
        hints.consume(0, None)
    assert hints.remaining(0) == 2


def test_zero_budget_and_negative_budget():
    assert HintBudget(fixed_strategy, max_hints=0).remaining(0) == 0
    with pytest.raises(ValueError):
        HintBudget(fixed_strategy, max_hints=-1)
