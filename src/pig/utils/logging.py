# src/pig/utils/logging.py
"""Logging helpers for Pig."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(process)d] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | int) -> int:
    """Normalize a logging level string or integer to ``logging`` constants."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def configure_logging(*, level: str | int = "INFO", log_file: str | Path | None = None) -> None:
    """Configure root logging once.

    Parameters
    ----------
    level:
        Logging level as string (e.g., "INFO") or numeric (e.g., logging.INFO).
    log_file:
        Optional file to tee logs to. Parent dirs are created and UTF-8 is used.

    The console handler writes to stderr so the scoreboard printed on stdout
    stays readable.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(p, encoding="utf-8"))

    logging.basicConfig(
        level=parse_level(level),
        handlers=handlers,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,
    )


__all__ = ["configure_logging", "parse_level"]
