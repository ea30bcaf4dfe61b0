"""Board coordinates, stone colors and the eight scan directions."""

from __future__ import annotations

from typing import NamedTuple

BLACK = -1
WHITE = 1
EMPTY = 0

# Indexed 0-7; opposite directions are (i, i + 4).
#   3 2 1
#   4 . 0
#   5 6 7
DIRECTIONS = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)
AXES = 4


def color_name(color: int) -> str:
    return "Black" if color == BLACK else "White"


class Position(NamedTuple):
    x: int  # 1-indexed column
    y: int  # 1-indexed row

    def step(self, direction: int, distance: int = 1) -> Position:
        """Return the cell `distance` steps away along DIRECTIONS[direction]."""
        dx, dy = DIRECTIONS[direction]
        return Position(self.x + dx * distance, self.y + dy * distance)

    def in_bounds(self, size: int) -> bool:
        return 1 <= self.x <= size and 1 <= self.y <= size

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


def parse_position(text: str) -> Position:
    """Parse 'x y' or 'x,y' (1-indexed) into a Position."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError("Invalid input format; expected two integers")
    try:
        return Position(int(parts[0]), int(parts[1]))
    except ValueError as exc:
        raise ValueError("Invalid input format; expected two integers") from exc
