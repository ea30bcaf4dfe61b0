"""Move validation, time control, and foul detection."""

from . import renju_rules
from .errors import ForbiddenMoveError, InvalidArgumentError
from ..utils import timer


def check_move(move, board, color, deadline, advanced_rules=False):
    """
    Validate a move against time, bounds, occupancy, and (for Black under the
    advanced rules) the forbidden-move rules.
    Raises TimeoutError or a ValueError subclass on invalid moves.
    """
    if timer.expired(deadline):
        raise TimeoutError("Move exceeded allotted time")

    board.check_bounds(move)
    if not board.is_empty(move):
        raise InvalidArgumentError(f"Cell {move} already occupied")

    if advanced_rules and color == renju_rules.RESTRICTED_COLOR:
        kind = renju_rules.classify(board, move)
        if kind is not renju_rules.ForbiddenKind.ALLOWED:
            raise ForbiddenMoveError(move, kind)

    return True
