"""
Game events for rendering hooks and logging.
Events describe what an engine operation did; the engine dispatches them to
subscribers once the operation has finished mutating state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base event class. All events have a type and payload."""

    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": dict(self.payload)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=dict(data["payload"]))


# ===== Event Type Constants =====

GAME_RESET = "game_reset"
DIE_ROLLED = "die_rolled"
BUSTED = "busted"
HELD = "held"
TURN_SWITCHED = "turn_switched"
WINNER_ANNOUNCED = "winner_announced"
STATE_CHANGED = "state_changed"


# ===== Event Factory Functions =====

def game_reset(winning_score: int, player_names: tuple[str, str]) -> GameEvent:
    return GameEvent(GAME_RESET, {
        "winning_score": winning_score,
        "player_names": list(player_names),
    })


def die_rolled(player: int, value: int, pending_score: int) -> GameEvent:
    return GameEvent(DIE_ROLLED, {
        "player": player,
        "value": value,
        "pending_score": pending_score,
    })


def busted(player: int, value: int, forfeited: int) -> GameEvent:
    """Emitted when the bust face wipes out the active player's pending score."""
    return GameEvent(BUSTED, {
        "player": player,
        "value": value,
        "forfeited": forfeited,
    })


def held(player: int, banked: int, total: int) -> GameEvent:
    return GameEvent(HELD, {
        "player": player,
        "banked": banked,
        "total": total,
    })


def turn_switched(from_player: int, to_player: int) -> GameEvent:
    return GameEvent(TURN_SWITCHED, {
        "from_player": from_player,
        "to_player": to_player,
    })


def winner_announced(player: int, name: str, score: int) -> GameEvent:
    return GameEvent(WINNER_ANNOUNCED, {
        "player": player,
        "name": name,
        "score": score,
    })


def state_changed(state: dict[str, Any]) -> GameEvent:
    """Carries a full snapshot (``GameState.to_dict()``) for renderers."""
    return GameEvent(STATE_CHANGED, {"state": state})


__all__ = [
    "GameEvent",
    "GAME_RESET",
    "DIE_ROLLED",
    "BUSTED",
    "HELD",
    "TURN_SWITCHED",
    "WINNER_ANNOUNCED",
    "STATE_CHANGED",
    "game_reset",
    "die_rolled",
    "busted",
    "held",
    "turn_switched",
    "winner_announced",
    "state_changed",
]
