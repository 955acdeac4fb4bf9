"""
play.py - hot-seat Pig in a terminal.

Wires the pieces together the way the browser page did: a die the session
rolls, the :class:`~pig.game.engine.TurnEngine` that applies the rules and a
:class:`~pig.render.console.ConsoleRenderer` that redraws after each action.
Keys::

    r  roll        h  hold        n  new game
    s  settings    ?  help        q  quit
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable

from pig.game.engine import GameState, TurnEngine
from pig.game.history import summarize
from pig.game.settings import config_from_settings
from pig.render.console import ConsoleRenderer
from pig.utils.random import DieRoller

LOGGER = logging.getLogger(__name__)

PROMPT = "[r]oll [h]old [n]ew [s]ettings [q]uit > "
HELP = "r: roll the die   h: bank your points   n: new game   s: change settings   q: quit"


class PlaySession:
    """Read keys until quit or end of input, driving one engine."""

    def __init__(
        self,
        engine: TurnEngine,
        roller: DieRoller,
        renderer: ConsoleRenderer | None = None,
        *,
        read: Callable[[str], str] = input,
    ) -> None:
        self.engine = engine
        self.roller = roller
        self.renderer = renderer or ConsoleRenderer()
        self.read = read
        self._handlers: dict[str, Callable[[], None]] = {
            "r": self.roll,
            "h": self.hold,
            "n": self.new_game,
            "s": self.settings,
            "?": self.help,
        }

    # ------------------------------ actions ------------------------------
    def roll(self) -> None:
        if self.roller.sides != self.engine.config.dice_sides:
            self.roller = DieRoller(self.engine.config.dice_sides, rng=self.roller.rng)
        self.engine.roll(self.roller.roll())

    def hold(self) -> None:
        result = self.engine.hold()
        if result.winner is not None:
            self.log_summary()

    def new_game(self) -> None:
        self.engine.reset()

    def settings(self) -> None:
        config = self.engine.config
        score = self.read(f"Winning score [{config.winning_score}]: ")
        first = self.read(f"Player 1 name [{config.player_names[0]}]: ")
        second = self.read(f"Player 2 name [{config.player_names[1]}]: ")
        names = [first or config.player_names[0], second or config.player_names[1]]
        if score.strip():
            new = config_from_settings(score, names, config)
        else:
            # blank keeps the running score unclamped, even one set outside the form's range
            new = dataclasses.replace(config, player_names=tuple(names))
        self.engine.reset(new)

    def help(self) -> None:
        self.renderer.write(HELP)

    def log_summary(self) -> None:
        history = self.engine.history
        if history is None or not len(history):
            return
        frame = summarize(history, self.engine.config.player_names)
        LOGGER.info("Game statistics\n%s", frame.to_string(), extra={"stage": "play"})

    # ------------------------------- loop --------------------------------
    def run(self) -> GameState:
        """Play until ``q`` or EOF and return the last snapshot."""
        self.renderer.attach(self.engine)
        self.renderer.show()
        try:
            while True:
                try:
                    key = self.read(PROMPT).strip().lower()[:1]
                except EOFError:
                    break
                if key == "q":
                    break
                self._handlers.get(key, self.help)()
        finally:
            self.renderer.detach()
        if self.engine.playing:
            self.log_summary()
        LOGGER.info(
            "Session over",
            extra={"stage": "play", "scores": list(self.engine.scores), "winner": self.engine.winner_name},
        )
        return self.engine.state


def play(
    engine: TurnEngine,
    *,
    seed: int | None = None,
    read: Callable[[str], str] = input,
    renderer: ConsoleRenderer | None = None,
) -> GameState:
    """Run an interactive session on *engine* with a freshly seeded die."""
    roller = DieRoller(engine.config.dice_sides, seed=seed)
    return PlaySession(engine, roller, renderer, read=read).run()


__all__ = ["HELP", "PROMPT", "PlaySession", "play"]
