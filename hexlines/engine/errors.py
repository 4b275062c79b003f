from __future__ import annotations

from typing import Any


class GameEngineError(Exception):
    """Base class for engine errors."""
    pass


class InvalidActionError(GameEngineError):
    """Action is not valid in current state."""

    def __init__(self, message: str, action: Any | None = None):
        self.message = message
        self.action = action
        super().__init__(message)


class IllegalMoveError(InvalidActionError):
    """Placement on an occupied or foreign cell, or after the game ended.

    Always recoverable: the caller can re-prompt for another cell.
    """


class GameNotActiveError(GameEngineError):
    """Action submitted to a game that has already ended."""
    pass


class NotYourTurnError(GameEngineError):
    """Player tried to act when it's not their turn."""
    pass


class PreconditionViolatedError(GameEngineError):
    """A caller broke an operation's contract (e.g. evaluating an occupied cell)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
