"""Line scanner: run-length profiles outward from a cell in all eight directions.

ForbidCheck profile per direction (counter index: meaning):
    0: own stones adjacent to the origin
    1: empty cells after them
    2: own stones after that gap
    3: empty cells after those
    4: own stones after the second gap
Each counter resumes at the cell where the previous one stopped, so an
opponent stone or the board edge leaves every later counter at zero.
"""

from __future__ import annotations

import enum

from .errors import InvalidArgumentError, OutOfBoundsError
from .position import DIRECTIONS, Position

DEFAULT_SIZE = 15


class ScanMode(enum.Enum):
    WIN_CHECK = 1
    FORBID_CHECK = 5

    @property
    def counters(self) -> int:
        return self.value


def scan(origin: Position, owner, mode: ScanMode, opponent=None, size: int = DEFAULT_SIZE) -> tuple[tuple[int, ...], ...]:
    """Return one counter tuple per direction (8 in total).

    owner / opponent are any containers of Position supporting `in`. The
    origin cell itself is never examined.
    """
    if not origin.in_bounds(size):
        raise OutOfBoundsError(f"scan origin {origin} is outside the {size}x{size} board")
    if mode is ScanMode.FORBID_CHECK and opponent is None:
        raise InvalidArgumentError("forbid-check scans need the opponent's stones")

    result = []
    for dx, dy in DIRECTIONS:
        counters = [0] * mode.counters
        x, y = origin.x + dx, origin.y + dy
        for level in range(mode.counters):
            want_stone = level % 2 == 0
            while 1 <= x <= size and 1 <= y <= size:
                cell = Position(x, y)
                if want_stone:
                    if cell not in owner:
                        break
                elif cell in owner or cell in opponent:
                    break
                counters[level] += 1
                x += dx
                y += dy
        result.append(tuple(counters))
    return tuple(result)
