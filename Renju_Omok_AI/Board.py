"""Board state container: one ordered stone set per color plus move history."""

from .engine.errors import InvalidArgumentError, OutOfBoundsError
from .engine.position import BLACK, EMPTY, WHITE, Position

DEFAULT_BOARD_SIZE = 15
MIN_BOARD_SIZE = 7
MAX_BOARD_SIZE = 19


class StoneSet:
    """Stones of one color in placement order, with constant-time membership."""

    def __init__(self, stones=()):
        self._order = []
        self._members = set()
        for pos in stones:
            self.append(pos)

    def append(self, pos):
        if pos in self._members:
            raise InvalidArgumentError(f"{pos} is already in this stone set")
        self._order.append(pos)
        self._members.add(pos)

    def pop(self):
        """Remove and return the most recently placed stone."""
        pos = self._order.pop()
        self._members.discard(pos)
        return pos

    def remove(self, pos):
        self._order.remove(pos)
        self._members.discard(pos)

    def clear(self):
        self._order.clear()
        self._members.clear()

    @property
    def last(self):
        return self._order[-1] if self._order else None

    def __contains__(self, pos):
        return pos in self._members

    def __iter__(self):
        return iter(self._order)

    def __len__(self):
        return len(self._order)

    def __eq__(self, other):
        if isinstance(other, StoneSet):
            return self._order == other._order
        return NotImplemented

    def __repr__(self):
        return f"StoneSet({self._order!r})"


class Board:
    def __init__(self, size=DEFAULT_BOARD_SIZE):
        if size % 2 == 0 or not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise ValueError(f"board size must be odd and within {MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}, got {size}")
        self.size = size
        self.stones = {BLACK: StoneSet(), WHITE: StoneSet()}
        # (position, color) in play order
        self.history = []

    @property
    def move_count(self):
        return len(self.history)

    def in_bounds(self, pos):
        x, y = pos
        return 1 <= x <= self.size and 1 <= y <= self.size

    def check_bounds(self, pos):
        if not self.in_bounds(pos):
            raise OutOfBoundsError(f"{pos} is outside the {self.size}x{self.size} board")

    def color_at(self, pos):
        if pos in self.stones[BLACK]:
            return BLACK
        if pos in self.stones[WHITE]:
            return WHITE
        return EMPTY

    def is_empty(self, pos):
        return self.in_bounds(pos) and self.color_at(pos) == EMPTY

    def place(self, pos, color):
        """Place a stone; raise if out of bounds or occupied."""
        pos = Position(*pos)
        if color not in (BLACK, WHITE):
            raise InvalidArgumentError("color must be -1 (black) or 1 (white)")
        self.check_bounds(pos)
        if self.color_at(pos) != EMPTY:
            raise InvalidArgumentError(f"{pos} is already occupied")
        self.stones[color].append(pos)
        self.history.append((pos, color))

    def undo(self):
        """Take back the last move. Returns (position, color) or None on an empty board."""
        if not self.history:
            return None
        pos, color = self.history.pop()
        self.stones[color].pop()
        return pos, color

    def clear(self):
        for stones in self.stones.values():
            stones.clear()
        self.history.clear()

    def empty_cells(self):
        """All empty cells, rows outer and columns inner."""
        return [
            Position(x, y)
            for y in range(1, self.size + 1)
            for x in range(1, self.size + 1)
            if self.color_at(Position(x, y)) == EMPTY
        ]

    def is_full(self):
        return self.move_count >= self.size * self.size

    def _push_stone(self, pos, color):
        """Hypothetical placement: no bounds check, not recorded in history."""
        self.stones[color].append(pos)

    def _pop_stone(self, pos, color):
        self.stones[color].remove(pos)
