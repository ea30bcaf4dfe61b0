"""CLI options for selecting players, board size, rules, and config paths."""

MODES = ["ai-vs-ai", "human-vs-ai", "ai-vs-human", "human-vs-human", "random-vs-random"]


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Renju Omok AI (five in a row, optional advanced rules)")
    parser.add_argument("--board-size", type=int, help="Board size (odd, 7 to 19)")
    parser.add_argument("--timeout", type=float, help="Seconds per move (default from settings)")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="Play mode (who plays black/white; default from settings or human-vs-ai)",
    )
    parser.add_argument(
        "--advanced-rules",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Forbid double-three, double-four and overline for Black",
    )
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--rating-table", default=None, help="Path to window rating YAML")
    parser.add_argument("--gui", action="store_true", help="Enable pygame GUI (mouse input for human)")
    parser.add_argument("--games", type=int, default=None, help="Number of games to play (automatic modes)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for openings and random players")
    return parser.parse_args(argv)
