"""Renderers that follow a :class:`~pig.game.engine.TurnEngine`."""

from pig.render.console import ConsoleRenderer

__all__ = ["ConsoleRenderer"]
