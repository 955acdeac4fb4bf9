"""
console.py - text scoreboard that follows a :class:`~pig.game.engine.TurnEngine`.

The renderer never changes game state.  It subscribes to the engine's
events and redraws on every ``state_changed`` snapshot, adding a banner
when a winner is announced.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

from pig.game import events
from pig.game.engine import GameConfig, GameState, TurnEngine
from pig.game.events import GameEvent

LOGGER = logging.getLogger(__name__)

ACTIVE_MARK = ">"
RULE = "-" * 40


def render_die(value: int | None) -> str:
    """Return the die as shown on the table; hidden when *value* is ``None``."""
    return "die: [ ]" if value is None else f"die: [{value}]"


def render_state(state: GameState, config: GameConfig) -> str:
    """Return a multi-line scoreboard for *state*.

    Only the active player shows a pending score; the other seat always
    shows ``0``.
    """
    width = max(len(name) for name in config.player_names)
    lines = [RULE, f"First to {config.winning_score} wins"]
    for seat, name in enumerate(config.player_names):
        marker = ACTIVE_MARK if seat == state.active_player and state.playing else " "
        if state.winner == seat:
            marker = "*"
        current = state.pending_score if seat == state.active_player else 0
        lines.append(f"{marker} {name:<{width}}  score {state.scores[seat]:>4}  current {current:>3}")
    lines.append(render_die(state.last_roll))
    lines.append(RULE)
    return "\n".join(lines)


def render_winner(name: str, score: int) -> str:
    return f"*** {name} wins with {score} points! ***"


class ConsoleRenderer:
    """Write a scoreboard to *stream* whenever the attached engine changes."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self._engine: TurnEngine | None = None
        self._detach: Callable[[], None] | None = None

    def attach(self, engine: TurnEngine) -> Callable[[], None]:
        """Subscribe to *engine*, replacing any previous attachment."""
        self.detach()
        self._engine = engine
        self._detach = engine.subscribe(self.handle)
        LOGGER.debug("Renderer attached", extra={"stage": "render"})
        return self.detach

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
        self._detach = None
        self._engine = None

    def handle(self, event: GameEvent) -> None:
        if self._engine is None:
            return
        if event.type == events.STATE_CHANGED:
            state = GameState.from_dict(event.payload["state"])
            self.write(render_state(state, self._engine.config))
        elif event.type == events.WINNER_ANNOUNCED:
            self.write(render_winner(event.payload["name"], event.payload["score"]))
        elif event.type == events.BUSTED:
            name = self._engine.config.player_names[event.payload["player"]]
            self.write(f"{name} rolled {event.payload['value']} and lost {event.payload['forfeited']} points")

    def show(self) -> None:
        """Redraw the current state without waiting for an event."""
        if self._engine is not None:
            self.write(render_state(self._engine.state, self._engine.config))

    def write(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()


__all__ = ["ConsoleRenderer", "render_die", "render_state", "render_winner"]
