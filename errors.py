"""Errors raised by the Dots and Boxes core.

Everything below GameError is recoverable: the match loop reports the message
and re-prompts the same player. QuitRequested is control flow, not an error.
"""


class GameError(Exception):
    """Base class for recoverable game conditions."""


class InvalidDimension(GameError, ValueError):
    pass


class OutOfBounds(GameError, IndexError):
    pass


class EdgeAlreadyClaimed(GameError):
    pass


class NonAdjacentEndpoints(GameError):
    pass


class MalformedMove(GameError, ValueError):
    pass


class HintsExhausted(GameError):
    pass


class UndoRefused(GameError):
    pass


class NoLegalMove(GameError):
    pass


class QuitRequested(Exception):
    """Raised when a player types a quit word at any prompt."""
