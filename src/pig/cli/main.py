# src/pig/cli/main.py
"""
Command line interface for the :mod:`pig` package.

``pig play`` starts a hot-seat game in the terminal; ``pig config`` prints the
resolved configuration.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from pig.config import AppConfig, apply_dot_overrides, config_to_yaml, load_app_config
from pig.game.engine import TurnEngine
from pig.play import play
from pig.utils.logging import configure_logging

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="pig")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override configuration values",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Root logging level (default: logging.level from the config)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    play_parser = sub.add_parser("play", help="Play a two-player game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic dice")
    play_parser.add_argument(
        "--winning-score",
        dest="winning_score",
        type=int,
        default=None,
        help="Banked total that wins (default: 100)",
    )
    play_parser.add_argument(
        "--names",
        nargs=2,
        metavar=("PLAYER1", "PLAYER2"),
        default=None,
        help="Player names in seat order",
    )

    sub.add_parser("config", help="Print the resolved configuration as YAML")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Load YAML overlays, apply ``--set`` overrides and command flags."""
    cfg = load_app_config(args.config) if args.config is not None else AppConfig()
    cfg = apply_dot_overrides(cfg, list(args.overrides or []))
    if args.log_level is not None:
        cfg.logging.level = args.log_level
    if args.command == "play":
        if args.seed is not None:
            cfg.play.seed = args.seed
        if args.winning_score is not None:
            cfg.game.winning_score = args.winning_score
        if args.names is not None:
            cfg.game.player_names = list(args.names)
    return cfg


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the ``pig`` CLI dispatcher."""
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = resolve_config(args)
    configure_logging(level=cfg.logging.level, log_file=cfg.logging.log_file)

    LOGGER.info(
        "CLI arguments parsed",
        extra={
            "stage": "cli",
            "command": args.command,
            "config_path": str(args.config) if args.config is not None else None,
            "overrides": list(args.overrides or []),
        },
    )

    if args.command == "play":
        engine = TurnEngine(cfg.game_config(), record_history=cfg.play.record_history)
        LOGGER.info(
            "Dispatching play",
            extra={
                "stage": "cli",
                "command": "play",
                "seed": cfg.play.seed,
                "winning_score": engine.config.winning_score,
            },
        )
        play(engine, seed=cfg.play.seed)
    elif args.command == "config":
        sys.stdout.write(config_to_yaml(cfg))
    else:  # pragma: no cover - argparse enforces valid choices
        parser.error(f"Unknown command {args.command}")


if __name__ == "__main__":  # pragma: no cover
    main()
