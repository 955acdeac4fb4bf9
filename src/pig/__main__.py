# src/pig/__main__.py
"""Command line entry point for the :mod:`pig` package.

When executed as ``python -m pig`` this module delegates to
:func:`pig.cli.main.main`.
"""

from __future__ import annotations

from pig.cli.main import main as cli_main


def main() -> None:
    """Invoke :func:`pig.cli.main.main`."""

    cli_main()


if __name__ == "__main__":  # pragma: no cover - direct execution path
    main()
