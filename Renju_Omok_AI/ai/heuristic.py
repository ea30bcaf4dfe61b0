"""Five-cell window rating and one-ply move selection.

Every run of five consecutive cells (rows, columns, both diagonals) is rated by
how many stones each side has in it; a cell's score is the sum of the ratings
of all windows that contain it. The best empty, legal cell is played.
"""

from pathlib import Path

import yaml

from ..engine import renju_rules
from ..engine.errors import InvalidArgumentError, NoLegalMoveError
from ..engine.position import BLACK, WHITE, Position, color_name

WINDOW = 5

# (mover stones, opponent stones) -> score. Mover weights beat opponent
# weights at the same count, so the heuristic leans towards attack.
DEFAULT_RATING_TABLE = {
    (0, 0): 7,
    (1, 0): 35,
    (2, 0): 800,
    (3, 0): 15000,
    (4, 0): 800000,
    (0, 1): 15,
    (0, 2): 400,
    (0, 3): 1800,
    (0, 4): 100000,
}
BLOCKED_SCORE = 0
MASKED = -1


def load_rating_table(path="config/rating.yaml"):
    """Load window ratings from YAML; fallback to defaults on missing file."""
    if path is None:
        return dict(DEFAULT_RATING_TABLE)
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        # Allow running from repo root (e.g., `python -m Renju_Omok_AI.main`).
        candidate = Path(__file__).resolve().parents[1] / path
        if candidate.exists():
            path = candidate

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return dict(DEFAULT_RATING_TABLE)

    table = dict(DEFAULT_RATING_TABLE)
    for item in data.get("ratings", []):
        mover = int(item.get("mover", 0))
        opponent = int(item.get("opponent", 0))
        if (mover, opponent) not in table:
            raise InvalidArgumentError(f"no window holds {mover} mover and {opponent} opponent stones")
        score = int(item["score"])
        if score < 0:
            raise InvalidArgumentError(f"window score must not be negative, got {score} for ({mover}, {opponent})")
        table[(mover, opponent)] = score
    return table


def rate_window(mover_count, opp_count, table=None):
    """Score one window from its stone counts."""
    table = table or DEFAULT_RATING_TABLE
    if mover_count > 0 and opp_count > 0:
        return BLOCKED_SCORE
    try:
        return table[(mover_count, opp_count)]
    except KeyError:
        raise InvalidArgumentError(
            f"window holds {mover_count} mover and {opp_count} opponent stones; the game is already won"
        ) from None


def _all_lines(size):
    """Yield every row, column, and diagonal long enough to hold a window."""
    for y in range(1, size + 1):
        yield [Position(x, y) for x in range(1, size + 1)]
    for x in range(1, size + 1):
        yield [Position(x, y) for y in range(1, size + 1)]

    # Diagonals (top-left to bottom-right): main diagonal and upper half, then lower half
    for start_x in range(1, size - WINDOW + 2):
        yield [Position(start_x + i, 1 + i) for i in range(size - start_x + 1)]
    for start_y in range(2, size - WINDOW + 2):
        yield [Position(1 + i, start_y + i) for i in range(size - start_y + 1)]

    # Anti-diagonals (top-right to bottom-left): same split
    for start_x in range(size, WINDOW - 1, -1):
        yield [Position(start_x - i, 1 + i) for i in range(start_x)]
    for start_y in range(2, size - WINDOW + 2):
        yield [Position(size - i, start_y + i) for i in range(size - start_y + 1)]


def five_windows(size):
    """Yield every window of five consecutive cells as a tuple of positions."""
    for line in _all_lines(size):
        for start in range(len(line) - WINDOW + 1):
            yield tuple(line[start:start + WINDOW])


def score_cells(board, color, table=None):
    """Return a dict Position -> accumulated window score from `color`'s point of view."""
    if color not in (BLACK, WHITE):
        raise InvalidArgumentError("color must be -1 (black) or 1 (white)")
    mine = board.stones[color]
    theirs = board.stones[-color]
    scores = {
        Position(x, y): 0
        for y in range(1, board.size + 1)
        for x in range(1, board.size + 1)
    }
    for window in five_windows(board.size):
        mover_count = sum(1 for pos in window if pos in mine)
        opp_count = sum(1 for pos in window if pos in theirs)
        value = rate_window(mover_count, opp_count, table)
        for pos in window:
            scores[pos] += value
    return scores


def best_move(board, color, forbidden=None, *, advanced_rules=False, rating_table=None):
    """
    Pick the highest-scoring empty, legal cell for `color`.
    forbidden: precomputed forbidden-cell map; recomputed when omitted and
    Black moves under the advanced rules. Ties go to the first cell with rows
    outer and columns inner.
    """
    scores = score_cells(board, color, rating_table)

    if forbidden is None:
        forbidden = {}
        if advanced_rules and color == renju_rules.RESTRICTED_COLOR:
            forbidden = renju_rules.refresh_forbidden_cells(board)
    for pos in forbidden:
        scores[pos] = MASKED
    for stones in board.stones.values():
        for pos in stones:
            scores[pos] = MASKED

    best_score = MASKED
    best_pos = None
    for y in range(1, board.size + 1):
        for x in range(1, board.size + 1):
            pos = Position(x, y)
            if scores[pos] > best_score:
                best_score = scores[pos]
                best_pos = pos

    if best_pos is None:
        raise NoLegalMoveError(f"{color_name(color)} has no legal move")
    return best_pos
