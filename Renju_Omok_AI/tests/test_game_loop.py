"""Tests for Omokgame turn handling and end-of-game state."""

import importlib
import random
import time

import pytest

from Renju_Omok_AI.AutoPlayer import AutoPlayer, RandomPlayer
from Renju_Omok_AI.Omokgame import GameStatus, Omokgame
from Renju_Omok_AI.Player import UNDO, Player, parse_command
from Renju_Omok_AI.engine.errors import ForbiddenMoveError, InvalidArgumentError
from Renju_Omok_AI.engine.position import BLACK, WHITE, Position
from Renju_Omok_AI.engine.renju_rules import ForbiddenKind

# Black builds _ 4 5 6 _ 8 9 on row 8; (7, 8) then makes six.
OVERLINE_SETUP = [(4, 8), (1, 1), (5, 8), (1, 3), (6, 8), (1, 5), (8, 8), (1, 7), (9, 8), (1, 9)]


class SeqPlayer(Player):
    """Deterministic player that plays a fixed move sequence."""

    def __init__(self, color, moves):
        super().__init__(color)
        self._moves = list(moves)
        self._idx = 0

    def next_move(self, game, deadline=None):
        if self._idx >= len(self._moves):
            raise ValueError("No more scripted moves")
        mv = self._moves[self._idx]
        self._idx += 1
        return mv


class ScriptedBot(SeqPlayer):
    """Scripted player that counts as automatic (no retries, skipped by undo)."""

    automatic = True


@pytest.fixture
def no_pause(monkeypatch):
    # Avoid the result pause in Omokgame when a renderer is set.
    omok_mod = importlib.import_module("Renju_Omok_AI.Omokgame")
    monkeypatch.setattr(omok_mod.time, "sleep", lambda *_: None)


def test_final_render_shows_winner(no_pause):
    black = SeqPlayer(BLACK, [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1)])
    white = SeqPlayer(WHITE, [(1, 2), (2, 2), (3, 2), (4, 2)])

    renders = []

    def renderer(game):
        renders.append((game.status, list(game.winning_chain)))

    closed = []
    game = Omokgame(
        board_size=7,
        move_timeout=5.0,
        black_player=black,
        white_player=white,
        logger=lambda *_: None,
        renderer=renderer,
        closer=lambda: closed.append(True),
    )
    result = game.play()

    assert result is GameStatus.BLACK_WINS
    assert renders[-1][0] is GameStatus.BLACK_WINS
    assert renders[-1][1] == [Position(x, 1) for x in range(1, 6)]
    assert len(renders) == 10
    assert closed == [True]


def test_occupied_cell_disqualifies():
    black = SeqPlayer(BLACK, [(4, 4), (5, 5)])
    white = ScriptedBot(WHITE, [(4, 4)])
    log = []
    game = Omokgame(board_size=7, black_player=black, white_player=white, logger=log.append)
    assert game.play() is GameStatus.BLACK_WINS
    assert any(line.startswith("Disqualification: White") for line in log)


def test_forbidden_move_disqualifies_black(no_pause):
    moves = OVERLINE_SETUP + [(7, 8)]
    black = ScriptedBot(BLACK, moves[0::2])
    white = ScriptedBot(WHITE, moves[1::2])
    game = Omokgame(
        board_size=15,
        advanced_rules=True,
        black_player=black,
        white_player=white,
        logger=lambda *_: None,
    )
    assert game.play() is GameStatus.WHITE_WINS
    assert game.last_foul is ForbiddenKind.OVERLINE
    assert game.board.move_count == 10


def test_human_retries_after_occupied_cell():
    black = SeqPlayer(BLACK, [(1, 1), (2, 2), (2, 1), (3, 1), (4, 1), (5, 1)])
    white = ScriptedBot(WHITE, [(2, 2), (1, 7), (2, 7), (3, 7)])
    log = []
    game = Omokgame(board_size=7, black_player=black, white_player=white, logger=log.append)
    assert game.play() is GameStatus.BLACK_WINS
    assert any(line.startswith("Rejected Black") for line in log)
    assert not any(line.startswith("Disqualification") for line in log)
    assert game.board.color_at((2, 2)) == WHITE


def test_human_foul_is_reported_and_retried(no_pause):
    black_moves = [(4, 8), (5, 8), (6, 8), (8, 8), (9, 8), (7, 8), (12, 12)]
    white_moves = [(1, 1), (1, 2), (1, 3), (15, 15), (1, 4), (1, 5)]
    fouls = []
    game = Omokgame(
        board_size=15,
        advanced_rules=True,
        black_player=SeqPlayer(BLACK, black_moves),
        white_player=ScriptedBot(WHITE, white_moves),
        logger=lambda *_: None,
        renderer=lambda g: fouls.append(g.last_foul),
    )
    assert game.play() is GameStatus.WHITE_WINS
    assert ForbiddenKind.OVERLINE in fouls
    assert game.board.is_empty((7, 8))
    assert game.board.color_at((12, 12)) == BLACK
    assert len(game.winning_chain) == 5
    assert game.last_foul is None


def test_human_retries_cannot_outlast_deadline():
    class Stubborn(Player):
        def next_move(self, game, deadline=None):
            time.sleep(0.02)
            return (4, 4)

    log = []
    game = Omokgame(
        board_size=7,
        black_player=ScriptedBot(BLACK, [(4, 4)]),
        white_player=Stubborn(WHITE),
        move_timeout=0.1,
        logger=log.append,
    )
    assert game.play() is GameStatus.BLACK_WINS
    assert any(line.startswith("Rejected White") for line in log)
    assert any(line.startswith("Disqualification: White") for line in log)


def test_place_rejects_forbidden_cell():
    game = Omokgame(board_size=15, advanced_rules=True, logger=lambda *_: None)
    for pos in OVERLINE_SETUP:
        game.place(pos)
    assert game.turn == BLACK
    assert game.forbidden[Position(7, 8)] is ForbiddenKind.OVERLINE
    assert Position(7, 8) not in game.legal_moves()

    with pytest.raises(ForbiddenMoveError) as excinfo:
        game.place((7, 8))
    assert excinfo.value.kind is ForbiddenKind.OVERLINE
    assert excinfo.value.position == Position(7, 8)
    assert game.board.is_empty((7, 8))
    assert game.turn == BLACK
    assert game.last_foul is ForbiddenKind.OVERLINE


def test_free_rules_let_black_play_overline():
    game = Omokgame(board_size=15, logger=lambda *_: None)
    for pos in OVERLINE_SETUP:
        game.place(pos)
    assert game.forbidden == {}
    game.place((7, 8))
    assert game.status is GameStatus.BLACK_WINS
    assert len(game.winning_chain) == 6


def test_place_after_game_over_rejected():
    game = Omokgame(board_size=7, logger=lambda *_: None)
    for x in range(1, 5):
        game.place((x, 1))
        game.place((x, 2))
    game.place((5, 1))
    assert game.is_over
    with pytest.raises(InvalidArgumentError):
        game.place((6, 6))


def test_advanced_rules_fixed_once_stones_are_down():
    game = Omokgame(board_size=7)
    game.advanced_rules = True
    game.place((4, 4))
    with pytest.raises(InvalidArgumentError):
        game.advanced_rules = False


def test_undo_gives_turn_back():
    game = Omokgame(board_size=7)
    game.place((4, 4))
    game.place((5, 5))
    assert game.undo() == (Position(5, 5), WHITE)
    assert game.turn == WHITE
    assert game.last_move == Position(4, 4)
    game.reset()
    assert game.board.move_count == 0
    assert game.turn == BLACK
    assert game.undo() is None


def test_undo_after_win_reopens_game():
    game = Omokgame(board_size=7, logger=lambda *_: None)
    for x in range(1, 5):
        game.place((x, 1))
        game.place((x, 2))
    game.place((5, 1))
    game.undo()
    assert game.status is GameStatus.ONGOING
    assert game.winning_chain == []
    assert game.turn == BLACK


def test_undo_turn_skips_automatic_reply():
    game = Omokgame(board_size=7, black_player=Player(BLACK), white_player=AutoPlayer(WHITE))
    game.place((4, 4))
    game.place((5, 5))
    undone = game.undo_turn()
    assert undone == [(Position(5, 5), WHITE), (Position(4, 4), BLACK)]
    assert game.turn == BLACK
    assert game.board.move_count == 0


def test_undo_command_in_loop():
    class UndoOnce(Player):
        def __init__(self, color):
            super().__init__(color)
            self.replies = iter([(4, 4), UNDO, (3, 3), (1, 1), (2, 1), (3, 1), (4, 1), (5, 1)])

        def next_move(self, game, deadline=None):
            return next(self.replies)

    white = ScriptedBot(WHITE, [(5, 5), (1, 7), (2, 7), (3, 7), (7, 3), (6, 6)])
    game = Omokgame(board_size=7, black_player=UndoOnce(BLACK), white_player=white, logger=lambda *_: None)
    assert game.play() is GameStatus.BLACK_WINS
    assert game.board.history[0] == (Position(3, 3), BLACK)


def test_draw_when_every_empty_cell_is_forbidden(monkeypatch):
    omok_mod = importlib.import_module("Renju_Omok_AI.Omokgame")
    monkeypatch.setattr(
        omok_mod,
        "refresh_forbidden_cells",
        lambda board: {pos: ForbiddenKind.DOUBLE_THREE for pos in board.empty_cells()},
    )
    game = Omokgame(board_size=7, advanced_rules=True)
    game.place((4, 4))
    assert game.status is GameStatus.ONGOING
    game.place((1, 1))
    assert game.status is GameStatus.DRAW
    assert game.legal_moves() == []


def test_full_board_is_a_draw():
    game = Omokgame(board_size=7, logger=lambda *_: None)
    cells = [Position(x, y) for y in range(1, 8) for x in range(1, 8)]
    # Pairwise stripes keep every line below five; play Black and White cells alternately.
    blacks = [p for p in cells if ((p.x + 2 * p.y) // 2) % 2 == 0]
    whites = [p for p in cells if ((p.x + 2 * p.y) // 2) % 2 == 1]
    order = []
    for i in range(max(len(blacks), len(whites))):
        if i < len(blacks):
            order.append(blacks[i])
        if i < len(whites):
            order.append(whites[i])
    assert len(blacks) == 25
    for pos in order:
        game.place(pos)
    assert game.status is GameStatus.DRAW


def test_suggest_move_matches_heuristic():
    game = Omokgame(board_size=15)
    assert game.suggest_move() == Position(5, 5)


def test_auto_player_opens_near_centre():
    game = Omokgame(board_size=15)
    move = AutoPlayer(BLACK, rng=random.Random(3)).next_move(game)
    assert 7 <= move.x <= 9 and 7 <= move.y <= 9


def test_auto_players_finish_deterministically():
    def run():
        game = Omokgame(
            board_size=7,
            advanced_rules=True,
            black_player=AutoPlayer(BLACK, rng=random.Random(5)),
            white_player=AutoPlayer(WHITE, rng=random.Random(5)),
            move_timeout=None,
            logger=lambda *_: None,
        )
        return game.play(), list(game.board.history)

    first = run()
    assert first[0] is not GameStatus.ONGOING
    assert run() == first


def test_random_players_finish():
    rng = random.Random(11)
    game = Omokgame(
        board_size=7,
        advanced_rules=True,
        black_player=RandomPlayer(BLACK, rng=rng),
        white_player=RandomPlayer(WHITE, rng=rng),
        move_timeout=None,
        logger=lambda *_: None,
    )
    assert game.play() in (GameStatus.BLACK_WINS, GameStatus.WHITE_WINS, GameStatus.DRAW)
    for pos, color in game.board.history:
        assert game.board.color_at(pos) == color


def test_parse_command():
    assert parse_command(" U ") == UNDO
    assert parse_command("3 4") == Position(3, 4)
    with pytest.raises(ValueError):
        parse_command("three four")
