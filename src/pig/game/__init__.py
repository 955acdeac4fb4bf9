"""Game rules: the turn engine, its events, history and settings policy."""

from pig.game.engine import GameConfig, GameState, Phase, TurnEngine
from pig.game.events import GameEvent

__all__ = ["GameConfig", "GameEvent", "GameState", "Phase", "TurnEngine"]
