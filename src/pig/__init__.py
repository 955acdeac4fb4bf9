# src/pig/__init__.py
"""Pig - a two-player dice game built around a pure turn engine.

The public surface is loaded lazily on first attribute access.
"""

from __future__ import annotations

import tomllib
from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _v
from pathlib import Path

DIST_NAME = "pig-dice"

# Path to the project's pyproject.toml for local version fallback
PYPROJECT_TOML = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

__all__ = [  # loads lazily, that's why reportUnsupportedDunderAll is triggered
    "TurnEngine",  # pyright: ignore[reportUnsupportedDunderAll]
    "GameConfig",  # pyright: ignore[reportUnsupportedDunderAll]
    "GameState",  # pyright: ignore[reportUnsupportedDunderAll]
    "Phase",  # pyright: ignore[reportUnsupportedDunderAll]
    "GameEvent",  # pyright: ignore[reportUnsupportedDunderAll]
    "config_from_settings",  # pyright: ignore[reportUnsupportedDunderAll]
    "DieRoller",  # pyright: ignore[reportUnsupportedDunderAll]
    "ConsoleRenderer",  # pyright: ignore[reportUnsupportedDunderAll]
]

_LAZY_IMPORTS = {
    "TurnEngine": "pig.game.engine",
    "GameConfig": "pig.game.engine",
    "GameState": "pig.game.engine",
    "Phase": "pig.game.engine",
    "GameEvent": "pig.game.events",
    "config_from_settings": "pig.game.settings",
    "DieRoller": "pig.utils.random",
    "ConsoleRenderer": "pig.render.console",
}


def __getattr__(name: str):  # pragma: no cover - simple dynamic loader
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(module_name)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


def _read_version_from_toml() -> str:
    """Return the package version declared in ``pyproject.toml``."""
    with PYPROJECT_TOML.open("rb") as fh:
        data = tomllib.load(fh)
    return data["project"]["version"]


try:
    __version__ = _v(DIST_NAME)
except PackageNotFoundError:
    __version__ = _read_version_from_toml()
