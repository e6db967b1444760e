from __future__ import annotations


class GameplayError(Exception):
    """Base class for errors raised by the gameplay package."""


class IllegalMoveError(GameplayError, ValueError):
    """A proposed move is malformed or not legal in the current position."""


class NoLegalMoveError(GameplayError):
    """Move selection was asked for a position with no legal moves.

    Callers are expected to check for a finished game first, so this is a
    programming error rather than something to recover from.
    """
