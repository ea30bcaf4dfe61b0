"""Renju rule enforcement: forbidden moves for Black, win detection."""

from __future__ import annotations

import enum
from contextlib import contextmanager
from typing import Callable, NamedTuple, Sequence

from .errors import InvalidArgumentError
from .position import AXES, BLACK, WHITE, Position, color_name
from .scanner import ScanMode, scan

RESTRICTED_COLOR = BLACK


class ForbiddenKind(enum.IntEnum):
    ALLOWED = 0
    DOUBLE_THREE = 1
    DOUBLE_FOUR = 2
    OVERLINE = 3

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


@contextmanager
def _simulate(board, color: int, *positions: Position):
    """Hypothetically place stones; only the stones added here are removed on exit."""
    added = []
    try:
        for pos in positions:
            if pos not in board.stones[color]:
                board._push_stone(pos, color)
                added.append(pos)
        yield
    finally:
        for pos in reversed(added):
            board._pop_stone(pos, color)


# --- gap patterns -----------------------------------------------------------
# A side is one direction's ForbidCheck profile: run, gap, run, gap, run.

def _has_gap(side: Sequence[int]) -> bool:
    return side[1] > 0


def _jump(stones: int) -> Callable[[Sequence[int]], bool]:
    """One empty cell, then exactly `stones` own stones."""
    def match(side):
        return side[1] == 1 and side[2] == stones
    return match


def _open(width: int, level: int = 1) -> Callable[[Sequence[int]], bool]:
    """More than `width` empties at `level`, or exactly `width` with no own stone beyond."""
    def match(side):
        return side[level] > width or (side[level] == width and side[level + 1] == 0)
    return match


def _both(first, second) -> Callable[[Sequence[int]], bool]:
    def match(side):
        return first(side) and second(side)
    return match


def _anything(side: Sequence[int]) -> bool:
    return True


FOUR = "four"
THREE = "three"


class GapRule(NamedTuple):
    kind: str
    near: Callable[[Sequence[int]], bool]
    far: Callable[[Sequence[int]], bool]
    once_per_axis: bool  # both sides matching still count once


# Keyed by the number of own stones directly adjacent on both sides.
# Diagrams read from the far side towards the near side; X is the new stone,
# 0 own stone, + empty.
GAP_RULES: dict[int, tuple[GapRule, ...]] = {
    3: (
        GapRule(FOUR, _has_gap, _anything, True),            # 0X00+
    ),
    2: (
        GapRule(FOUR, _jump(1), _anything, False),           # 0X0+0
        GapRule(THREE, _open(2), _open(1), True),            # +0X0++
    ),
    1: (
        GapRule(FOUR, _jump(2), _anything, False),           # 0X+00
        GapRule(THREE, _both(_jump(1), _open(1, level=3)), _open(1), False),  # +0X+0+
    ),
    0: (
        GapRule(FOUR, _jump(3), _anything, False),           # X+000
        GapRule(THREE, _both(_jump(2), _open(1, level=3)), _open(1), False),  # +X+00+
    ),
}


def _key_point_allowed(board, pos: Position, side: Sequence[int], direction: int) -> bool:
    """Would the cell completing this pattern itself be a legal Black move?"""
    key = pos.step(direction, side[0] + 1)
    with _simulate(board, RESTRICTED_COLOR, pos, key):
        return _classify(board, key) is ForbiddenKind.ALLOWED


def _rule_hits(board, pos: Position, rule: GapRule, runs, axis: int) -> int:
    sides = ((runs[axis], runs[axis + AXES], axis), (runs[axis + AXES], runs[axis], axis + AXES))
    matches = (
        rule.near(side) and rule.far(other) and _key_point_allowed(board, pos, side, direction)
        for side, other, direction in sides
    )
    if rule.once_per_axis:
        return 1 if any(matches) else 0
    return sum(1 for hit in matches if hit)


def _classify(board, pos: Position) -> ForbiddenKind:
    runs = scan(
        pos,
        board.stones[RESTRICTED_COLOR],
        ScanMode.FORBID_CHECK,
        board.stones[-RESTRICTED_COLOR],
        size=board.size,
    )
    totals = [runs[axis][0] + runs[axis + AXES][0] for axis in range(AXES)]

    # An exact five wins outright, whatever else the move creates.
    if 4 in totals:
        return ForbiddenKind.ALLOWED
    if any(total >= 5 for total in totals):
        return ForbiddenKind.OVERLINE

    counts = {FOUR: 0, THREE: 0}
    for axis, total in enumerate(totals):
        for rule in GAP_RULES[total]:
            counts[rule.kind] += _rule_hits(board, pos, rule, runs, axis)

    if counts[FOUR] > 1:
        return ForbiddenKind.DOUBLE_FOUR
    if counts[THREE] > 1:
        return ForbiddenKind.DOUBLE_THREE
    return ForbiddenKind.ALLOWED


def classify(board, pos: Position) -> ForbiddenKind:
    """Classify a hypothetical Black stone at an empty cell.

    Stone sets are left exactly as they were on every return path.
    """
    pos = Position(*pos)
    board.check_bounds(pos)
    if not board.is_empty(pos):
        raise InvalidArgumentError(f"cannot classify occupied cell {pos}")
    return _classify(board, pos)


def is_forbidden(board, pos: Position, color: int) -> bool:
    """Return True if placing here is a foul for Black. White is never forbidden."""
    if color != RESTRICTED_COLOR:
        return False
    return classify(board, pos) is not ForbiddenKind.ALLOWED


def refresh_forbidden_cells(board) -> dict[Position, ForbiddenKind]:
    """Classify every empty cell; only forbidden cells are kept."""
    forbidden = {}
    for pos in board.empty_cells():
        kind = _classify(board, pos)
        if kind is not ForbiddenKind.ALLOWED:
            forbidden[pos] = kind
    return forbidden


def check_win(board, color: int, last: Position | None = None) -> list[Position] | None:
    """Return the five-or-more chain through `last` (default: color's latest stone), else None."""
    if color not in (BLACK, WHITE):
        raise InvalidArgumentError("color must be -1 (black) or 1 (white)")
    if last is None:
        last = board.stones[color].last
        if last is None:
            return None
    last = Position(*last)
    if last not in board.stones[color]:
        raise InvalidArgumentError(f"{last} holds no {color_name(color).lower()} stone")

    runs = scan(last, board.stones[color], ScanMode.WIN_CHECK, size=board.size)
    for axis in range(AXES):
        ahead, behind = runs[axis][0], runs[axis + AXES][0]
        if ahead + behind >= 4:
            return [last.step(axis, offset) for offset in range(-behind, ahead + 1)]
    return None


def is_win_after_move(board, pos: Position, color: int) -> bool:
    """Assumes stone is already placed."""
    return check_win(board, color, last=pos) is not None
