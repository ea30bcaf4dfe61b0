"""Automatic players: window-rating heuristic and random placement."""

import random

from .Player import Player
from .engine.position import Position

OPENING_SPREAD = 3


class AutoPlayer(Player):
    automatic = True

    def __init__(self, color, rng=None):
        super().__init__(color)
        self.rng = rng or random.Random()

    def next_move(self, game, deadline=None):
        board = game.board
        if board.move_count == 0:
            # Open somewhere in the 3x3 block around the centre.
            low = (board.size - 1) // 2
            return Position(low + self.rng.randrange(OPENING_SPREAD), low + self.rng.randrange(OPENING_SPREAD))
        return game.suggest_move(self.color)


class RandomPlayer(Player):
    """Uniformly random legal move (skips Black's forbidden cells)."""

    automatic = True

    def __init__(self, color, rng=None):
        super().__init__(color)
        self.rng = rng or random.Random()

    def next_move(self, game, deadline=None):
        return game.random_move(self.rng)
