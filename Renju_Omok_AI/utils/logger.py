"""Lightweight logging utilities for matches and debugging."""

import datetime


def log_event(message, game_index=None):
    timestamp = datetime.datetime.now().strftime("%H:%M:%S")
    tag = f" [game {game_index}]" if game_index is not None else ""
    print(f"[{timestamp}]{tag} {message}")


def match_logger(game_index):
    """Logger bound to one game of a multi-game run."""
    def log(message):
        log_event(message, game_index=game_index)
    return log
