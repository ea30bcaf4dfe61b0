"""Renju_Omok_AI package exports."""

from .Board import Board, StoneSet
from .Omokgame import GameStatus, Omokgame
from .Player import Player, HumanPlayer, GuiHumanPlayer
from .AutoPlayer import AutoPlayer, RandomPlayer

# Subpackages for rule engine, move heuristic, GUI, and helpers
from . import ai, engine, gui, utils

__all__ = [
    "Board",
    "StoneSet",
    "GameStatus",
    "Omokgame",
    "Player",
    "HumanPlayer",
    "GuiHumanPlayer",
    "AutoPlayer",
    "RandomPlayer",
    "ai",
    "engine",
    "gui",
    "utils",
]
