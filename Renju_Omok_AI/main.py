"""Entry point for Renju Omok matches. Load config, wire players, start Omokgame."""

import random
from pathlib import Path

import yaml

from .AutoPlayer import AutoPlayer, RandomPlayer
from .Omokgame import GameStatus, Omokgame
from .Player import GuiHumanPlayer, HumanPlayer
from .ai import heuristic
from .engine.position import BLACK, WHITE
from .utils.cli import parse_args
from .utils.logger import log_event, match_logger

PROJECT_DIR = Path(__file__).resolve().parent

DEFAULT_SETTINGS = {
    "board_size": 15,
    "advanced_rules": False,
    "move_timeout_seconds": 5,
    "mode": "human-vs-ai",
    "rating_table": "config/rating.yaml",
    "games": 1,
    "seed": None,
}


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a repo-relative path when invoked from outside `Renju_Omok_AI/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path):
    """Settings YAML merged over the defaults; a missing file means defaults only."""
    path = resolve_project_path(path)
    settings = dict(DEFAULT_SETTINGS)
    if not path.exists():
        return settings
    with open(path, "r", encoding="utf-8") as f:
        settings.update(yaml.safe_load(f) or {})
    return settings


def _pick(cli_value, settings, key):
    return cli_value if cli_value is not None else settings.get(key)


def build_players(mode, view=None, rng=None):
    """Return (black, white) players for a play mode."""
    rng = rng or random.Random()

    def human(color):
        return GuiHumanPlayer(color=color, view=view) if view else HumanPlayer(color=color)

    if mode == "ai-vs-ai":
        return AutoPlayer(BLACK, rng=rng), AutoPlayer(WHITE, rng=rng)
    if mode == "human-vs-ai":
        return human(BLACK), AutoPlayer(WHITE, rng=rng)
    if mode == "ai-vs-human":
        return AutoPlayer(BLACK, rng=rng), human(WHITE)
    if mode == "human-vs-human":
        return human(BLACK), human(WHITE)
    if mode == "random-vs-random":
        return RandomPlayer(BLACK, rng=rng), RandomPlayer(WHITE, rng=rng)
    raise ValueError(f"Unsupported mode: {mode}")


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(args.settings)

    board_size = _pick(args.board_size, settings, "board_size")
    move_timeout = _pick(args.timeout, settings, "move_timeout_seconds")
    mode = _pick(args.mode, settings, "mode")
    advanced_rules = bool(_pick(args.advanced_rules, settings, "advanced_rules"))
    games = _pick(args.games, settings, "games") or 1
    seed = _pick(args.seed, settings, "seed")

    rating_table = heuristic.load_rating_table(_pick(args.rating_table, settings, "rating_table"))
    rng = random.Random(seed)

    view = None
    if args.gui:
        from .gui.pygame_view import PygameView

        view = PygameView(board_size=board_size)

    black, white = build_players(mode, view=view, rng=rng)
    tally = {status: 0 for status in (GameStatus.BLACK_WINS, GameStatus.WHITE_WINS, GameStatus.DRAW)}
    try:
        for index in range(1, games + 1):
            game = Omokgame(
                board_size=board_size,
                advanced_rules=advanced_rules,
                black_player=black,
                white_player=white,
                move_timeout=move_timeout,
                logger=match_logger(index) if games > 1 else log_event,
                rating_table=rating_table,
                renderer=view.render if view else None,
            )
            tally[game.play()] += 1
    finally:
        if view:
            view.close()

    if games > 1:
        log_event(
            f"Tally over {games} games: Black {tally[GameStatus.BLACK_WINS]}, "
            f"White {tally[GameStatus.WHITE_WINS]}, Draw {tally[GameStatus.DRAW]}"
        )
    return tally


if __name__ == "__main__":
    main()
