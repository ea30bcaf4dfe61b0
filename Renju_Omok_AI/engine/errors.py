"""Exceptions raised by the rule engine and the move heuristic."""


class GomokuError(Exception):
    """Base class for rule-engine errors."""


class InvalidArgumentError(GomokuError, ValueError):
    """Caller contract violation (occupied cell, malformed input, ...)."""


class OutOfBoundsError(InvalidArgumentError):
    """Coordinate outside the [1, N] x [1, N] board."""


class ForbiddenMoveError(InvalidArgumentError):
    """Black placement that breaks the advanced rules."""

    def __init__(self, position, kind):
        super().__init__(f"Forbidden move at {position}: {kind.label}")
        self.position = position
        self.kind = kind


class NoLegalMoveError(GomokuError):
    """Every cell is occupied or forbidden for the side to move."""
