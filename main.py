from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from config_io import load_config
from config_parsing import LOG_LEVELS, parse_game_config


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Play Candy Maze.")
    p.add_argument(
        "config",
        nargs="?",
        default="config.json",
        help="Path to the JSON config (default: config.json)",
    )
    p.add_argument("--seed", type=int, default=None, help="Fix the maze seed.")
    p.add_argument(
        "--size",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=None,
        help="Maze size in cells; even values are bumped to odd.",
    )
    p.add_argument("--log-level", choices=LOG_LEVELS, default=None)
    return p.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Config keys set on the command line win over the file."""
    maze: Dict[str, Any] = {}
    if args.seed is not None:
        maze["seed"] = args.seed
    if args.size is not None:
        maze["width"], maze["height"] = args.size

    overrides: Dict[str, Any] = {}
    if maze:
        overrides["maze"] = maze
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return overrides


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entrypoint for running the game from the command line."""
    args = parse_args(argv)
    cfg = parse_game_config(load_config(Path(args.config), build_overrides(args)))
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from game import Game  # local import keeps module load side effects minimal

    Game(cfg).run()


if __name__ == "__main__":
    main()
