"""Game state, turn management, and the game loop."""

import enum
import random
import time

from .Board import DEFAULT_BOARD_SIZE, Board
from .ai import heuristic
from .engine import referee
from .engine.errors import ForbiddenMoveError, InvalidArgumentError
from .engine.position import BLACK, WHITE, Position, color_name
from .engine.renju_rules import RESTRICTED_COLOR, check_win, refresh_forbidden_cells
from .Player import UNDO
from .utils import timer


class GameStatus(enum.IntEnum):
    ONGOING = 0
    BLACK_WINS = 1
    WHITE_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color):
        return cls.BLACK_WINS if color == BLACK else cls.WHITE_WINS


class Omokgame:
    def __init__(
        self,
        board_size=DEFAULT_BOARD_SIZE,
        advanced_rules=False,
        black_player=None,
        white_player=None,
        move_timeout=30.0,
        logger=print,
        rating_table=None,
        renderer=None,
        closer=None,
        result_pause=3.0,
    ):
        self.board = Board(size=board_size)
        self._advanced_rules = advanced_rules
        self.players = {BLACK: black_player, WHITE: white_player}
        self.move_timeout = move_timeout
        self.logger = logger
        self.rating_table = rating_table
        self.renderer = renderer
        self.closer = closer
        self.result_pause = result_pause

        self.turn = BLACK
        self.status = GameStatus.ONGOING
        self.winning_chain = []
        self.forbidden = {}
        self.last_foul = None

    @property
    def advanced_rules(self):
        return self._advanced_rules

    @advanced_rules.setter
    def advanced_rules(self, enabled):
        if self.board.move_count:
            raise InvalidArgumentError("advanced rules can only be switched on an empty board")
        self._advanced_rules = enabled
        self.refresh_forbidden()

    @property
    def is_over(self):
        return self.status is not GameStatus.ONGOING

    @property
    def last_move(self):
        return self.board.history[-1][0] if self.board.history else None

    def refresh_forbidden(self):
        """Recompute the forbidden cells for the side to move."""
        if self._advanced_rules and self.turn == RESTRICTED_COLOR and not self.is_over:
            self.forbidden = refresh_forbidden_cells(self.board)
        else:
            self.forbidden = {}
        return self.forbidden

    def legal_moves(self):
        if self.is_over:
            return []
        return [pos for pos in self.board.empty_cells() if pos not in self.forbidden]

    def place(self, pos):
        """Place a stone for the side to move and advance the game."""
        pos = Position(*pos)
        if self.is_over:
            raise InvalidArgumentError("game is already over")
        self.board.check_bounds(pos)
        if not self.board.is_empty(pos):
            raise InvalidArgumentError(f"{pos} is already occupied")
        if pos in self.forbidden:
            self.last_foul = self.forbidden[pos]
            self.logger(f"Rejected {color_name(self.turn)} {pos}: {self.last_foul.label}")
            raise ForbiddenMoveError(pos, self.last_foul)

        self.last_foul = None
        self.board.place(pos, self.turn)
        self._update_status()

    def _update_status(self):
        mover = self.turn
        self.turn = -mover

        chain = check_win(self.board, mover)
        if chain:
            self.status = GameStatus.win_for(mover)
            self.winning_chain = chain
            self.forbidden = {}
            return

        if self.board.is_full():
            self.status = GameStatus.DRAW
            self.forbidden = {}
            return

        self.refresh_forbidden()
        if self.forbidden and not self.legal_moves():
            # Black to move but every empty cell is a foul.
            self.status = GameStatus.DRAW

    def undo(self):
        """Take back the last move. Returns (position, color) or None."""
        undone = self.board.undo()
        if undone is None:
            return None
        self.turn = undone[1]
        self.status = GameStatus.ONGOING
        self.winning_chain = []
        self.last_foul = None
        self.refresh_forbidden()
        return undone

    def _is_automatic(self, color):
        return getattr(self.players.get(color), "automatic", False)

    def undo_turn(self):
        """Undo, then keep undoing automatic replies until a human is to move."""
        undone = [self.undo()]
        while self._is_automatic(self.turn) and self.board.history:
            undone.append(self.undo())
        return [mv for mv in undone if mv is not None]

    def reset(self):
        self.board.clear()
        self.turn = BLACK
        self.status = GameStatus.ONGOING
        self.winning_chain = []
        self.last_foul = None
        self.refresh_forbidden()

    def suggest_move(self, color=None):
        """Heuristic move for `color` (default: side to move)."""
        color = self.turn if color is None else color
        forbidden = self.forbidden if color == self.turn else None
        return heuristic.best_move(
            self.board,
            color,
            forbidden,
            advanced_rules=self._advanced_rules,
            rating_table=self.rating_table,
        )

    def random_move(self, rng=random):
        moves = self.legal_moves()
        if not moves:
            raise InvalidArgumentError("No legal moves left")
        return rng.choice(moves)

    def play(self):
        """Run a single game and return the final GameStatus."""
        retry_deadline = None
        try:
            while not self.is_over:
                if self.renderer:
                    self.renderer(self)

                color = self.turn
                player = self.players[color]
                # A retried move keeps the deadline of the original attempt.
                deadline = retry_deadline or timer.deadline_after(self.move_timeout)
                retry_deadline = None

                try:
                    move = player.next_move(self, deadline=deadline)
                    if move == UNDO:
                        for pos, undone_color in self.undo_turn():
                            self.logger(f"Undo: {'B' if undone_color == BLACK else 'W'} {pos}")
                        continue
                    referee.check_move(move, self.board, color, deadline, advanced_rules=self._advanced_rules)
                    self.place(move)
                except (TimeoutError, ValueError) as exc:
                    if isinstance(exc, ForbiddenMoveError):
                        self.last_foul = exc.kind
                    if isinstance(exc, InvalidArgumentError) and not self._is_automatic(color):
                        # Humans get the rejected cell reported and may try again.
                        self.logger(f"Rejected {color_name(color)}: {exc}")
                        retry_deadline = deadline
                        continue
                    self.logger(f"Disqualification: {color_name(color)} - {exc}")
                    self.status = GameStatus.win_for(-color)
                    break

                self.logger(f"Move {self.board.move_count}: {'B' if color == BLACK else 'W'} {move}")

            if self.status is GameStatus.DRAW:
                self.logger("Result: Draw")
            else:
                self.logger(f"Winner: {'Black' if self.status is GameStatus.BLACK_WINS else 'White'}")

            if self.renderer:
                self.renderer(self)
                # Pause to show the result
                time.sleep(self.result_pause)

            return self.status
        finally:
            if self.closer:
                self.closer()
