"""Window enumeration, rating and one-ply move selection."""

import pytest

from Renju_Omok_AI.Board import Board
from Renju_Omok_AI.ai import heuristic
from Renju_Omok_AI.engine.errors import InvalidArgumentError, NoLegalMoveError
from Renju_Omok_AI.engine.position import BLACK, WHITE, Position
from Renju_Omok_AI.engine.renju_rules import ForbiddenKind


@pytest.mark.parametrize("size, expected", [(15, 572), (7, 60)])
def test_window_count(size, expected):
    windows = list(heuristic.five_windows(size))
    assert len(windows) == expected
    assert len(set(windows)) == expected


def test_windows_are_five_consecutive_cells():
    for window in heuristic.five_windows(7):
        dx = window[1].x - window[0].x
        dy = window[1].y - window[0].y
        assert all(b.x - a.x == dx and b.y - a.y == dy for a, b in zip(window, window[1:]))
        assert all(1 <= p.x <= 7 and 1 <= p.y <= 7 for p in window)


def test_rate_window():
    assert heuristic.rate_window(0, 0) == 7
    assert heuristic.rate_window(2, 0) == 800
    assert heuristic.rate_window(0, 4) == 100000
    assert heuristic.rate_window(1, 1) == 0
    with pytest.raises(InvalidArgumentError):
        heuristic.rate_window(5, 0)


def test_empty_board_scores_sum_over_windows():
    b = Board(size=7)
    scores = heuristic.score_cells(b, BLACK)
    assert sum(scores.values()) == 60 * 5 * 7


def test_empty_board_first_best_cell():
    b = Board(size=15)
    assert heuristic.best_move(b, BLACK) == Position(5, 5)
    assert heuristic.best_move(b, BLACK) == heuristic.best_move(b, BLACK)


def test_forbidden_cells_are_masked():
    b = Board(size=15)
    move = heuristic.best_move(b, BLACK, forbidden={Position(5, 5): ForbiddenKind.DOUBLE_THREE})
    assert move == Position(6, 5)


def test_advanced_rules_recompute_forbidden_for_black():
    b = Board(size=15)
    for pos in [(8, 7), (8, 9), (7, 8), (9, 8)]:
        b.place(pos, BLACK)
    for pos in [(1, 1), (15, 15), (1, 15), (15, 1)]:
        b.place(pos, WHITE)
    assert heuristic.best_move(b, BLACK) == Position(8, 8)
    assert heuristic.best_move(b, BLACK, advanced_rules=True) != Position(8, 8)


def test_completes_own_four():
    b = Board(size=15)
    for x in range(8, 12):
        b.place((x, 8), BLACK)
    b.place((7, 8), WHITE)
    assert heuristic.best_move(b, BLACK) == Position(12, 8)


def test_blocks_opponent_four():
    b = Board(size=15)
    for x in range(8, 12):
        b.place((x, 8), BLACK)
    b.place((7, 8), WHITE)
    assert heuristic.best_move(b, WHITE) == Position(12, 8)


def test_full_board_has_no_legal_move():
    b = Board(size=7)
    # Rows alternate in pairs so no line of five appears anywhere.
    for y in range(1, 8):
        for x in range(1, 8):
            color = BLACK if ((x + 2 * y) // 2) % 2 == 0 else WHITE
            b.place((x, y), color)
    with pytest.raises(NoLegalMoveError):
        heuristic.best_move(b, BLACK, forbidden={})


def test_rating_table_from_yaml(tmp_path):
    path = tmp_path / "rating.yaml"
    path.write_text("ratings:\n  - {mover: 0, opponent: 0, score: 1}\n", encoding="utf-8")
    table = heuristic.load_rating_table(path)
    assert table[(0, 0)] == 1
    assert table[(4, 0)] == heuristic.DEFAULT_RATING_TABLE[(4, 0)]


def test_rating_table_missing_file_uses_defaults(tmp_path):
    assert heuristic.load_rating_table(tmp_path / "nope.yaml") == heuristic.DEFAULT_RATING_TABLE


def test_rating_table_rejects_unknown_window(tmp_path):
    path = tmp_path / "rating.yaml"
    path.write_text("ratings:\n  - {mover: 2, opponent: 2, score: 1}\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError):
        heuristic.load_rating_table(path)


def test_bundled_rating_table_matches_defaults():
    assert heuristic.load_rating_table() == heuristic.DEFAULT_RATING_TABLE


def test_rating_table_rejects_negative_scores(tmp_path):
    path = tmp_path / "rating.yaml"
    path.write_text("ratings:\n  - {mover: 1, opponent: 0, score: -5}\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError):
        heuristic.load_rating_table(path)
