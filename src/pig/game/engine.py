"""engine.py
============
Turn engine for a two-player game of Pig.

High-level flow
---------------
* TurnEngine.roll takes a die face chosen by the caller.  The bust face
  forfeits the pending score and passes the turn; any other face is added
  to the active player's pending score.
* TurnEngine.hold banks the pending score.  Reaching ``winning_score``
  finishes the game with the active player as winner; otherwise the turn
  passes.
* TurnEngine.reset starts a fresh game, optionally with a new config.

The engine keeps no global state and never touches a random source; the
front end rolls the die (see :class:`pig.utils.random.DieRoller`) and
renders whatever snapshot comes back.  Once a game is finished, ``roll``
and ``hold`` are silently ignored until the next ``reset``.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence

from pig.game import events
from pig.game.events import GameEvent
from pig.game.history import BUST, HOLD, ROLL, ActionHistory


__all__ = [
    "BUST_VALUE",
    "DEFAULT_DICE_SIDES",
    "DEFAULT_PLAYER_NAMES",
    "DEFAULT_WINNING_SCORE",
    "GameConfig",
    "GameState",
    "HoldResult",
    "Phase",
    "RollResult",
    "TurnEngine",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_WINNING_SCORE: int = 100
DEFAULT_PLAYER_NAMES: tuple[str, str] = ("Player 1", "Player 2")
DEFAULT_DICE_SIDES: int = 6
BUST_VALUE: int = 1

Listener = Callable[[GameEvent], None]


# ---------------------------------------------------------------------------
# Config normalisation
# ---------------------------------------------------------------------------


def _positive_int(value: Any, default: int, label: str) -> int:
    """Return *value* as a positive ``int`` or fall back to *default*."""
    if not isinstance(value, bool):
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            number = 0
        if isinstance(value, numbers.Real) and number != value:
            number = 0  # 20.9 is not silently truncated to 20
        if number > 0:
            return number
    LOGGER.warning(
        "Invalid %s %r; using %d",
        label,
        value,
        default,
        extra={"stage": "config"},
    )
    return default


def _player_names(value: Any) -> tuple[str, str]:
    """Coerce *value* into two non-blank names, defaulting per seat."""
    if isinstance(value, str) or not isinstance(value, Sequence) or len(value) != 2:
        LOGGER.warning(
            "Malformed player names %r; using defaults",
            value,
            extra={"stage": "config"},
        )
        return DEFAULT_PLAYER_NAMES
    names = []
    for seat, raw in enumerate(value):
        name = str(raw).strip() if raw is not None else ""
        names.append(name or DEFAULT_PLAYER_NAMES[seat])
    return names[0], names[1]


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Rules for one game.

    Attributes
    ----------
    winning_score
        Banked total that wins the game.  Any positive integer is accepted
        here; the settings form applies its own, narrower range.
    player_names
        Display names in seat order.
    dice_sides
        Number of faces on the die the front end rolls.
    bust_value
        Face that forfeits the pending score and passes the turn.

    Invalid values are replaced by the defaults instead of raising.
    """

    winning_score: int = DEFAULT_WINNING_SCORE
    player_names: tuple[str, str] = DEFAULT_PLAYER_NAMES
    dice_sides: int = DEFAULT_DICE_SIDES
    bust_value: int = BUST_VALUE

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "winning_score",
            _positive_int(self.winning_score, DEFAULT_WINNING_SCORE, "winning score"),
        )
        object.__setattr__(self, "player_names", _player_names(self.player_names))
        sides = _positive_int(self.dice_sides, DEFAULT_DICE_SIDES, "dice sides")
        if sides < 2:
            LOGGER.warning(
                "A %d-sided die cannot avoid the bust face; using %d",
                sides,
                DEFAULT_DICE_SIDES,
                extra={"stage": "config"},
            )
            sides = DEFAULT_DICE_SIDES
        object.__setattr__(self, "dice_sides", sides)
        bust = _positive_int(self.bust_value, BUST_VALUE, "bust value")
        if bust > sides:
            LOGGER.warning(
                "Bust value %d is not on a %d-sided die; using %d",
                bust,
                sides,
                BUST_VALUE,
                extra={"stage": "config"},
            )
            bust = BUST_VALUE
        object.__setattr__(self, "bust_value", bust)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


class Phase(Enum):
    """The only two states a game can be in."""

    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class GameState:
    """Read-only snapshot handed to renderers after every operation.

    ``last_roll`` is the face currently shown; ``None`` means the die is
    hidden (fresh game, or the game has just been won).
    """

    scores: tuple[int, int] = (0, 0)
    pending_score: int = 0
    active_player: int = 0
    playing: bool = True
    winner: int | None = None
    last_roll: int | None = None

    @property
    def phase(self) -> Phase:
        return Phase.IN_PROGRESS if self.playing else Phase.FINISHED

    def to_dict(self) -> dict[str, Any]:
        return {
            "scores": list(self.scores),
            "pending_score": self.pending_score,
            "active_player": self.active_player,
            "playing": self.playing,
            "winner": self.winner,
            "last_roll": self.last_roll,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        scores = data.get("scores") or (0, 0)
        return cls(
            scores=(int(scores[0]), int(scores[1])),
            pending_score=int(data.get("pending_score", 0)),
            active_player=int(data.get("active_player", 0)),
            playing=bool(data.get("playing", True)),
            winner=data.get("winner"),
            last_roll=data.get("last_roll"),
        )


@dataclass(frozen=True, slots=True)
class RollResult:
    """Outcome of :meth:`TurnEngine.roll`.

    ``ignored`` is true when the roll changed nothing (game finished or the
    face is not on the die).
    """

    value: int
    busted: bool
    ignored: bool
    state: GameState


@dataclass(frozen=True, slots=True)
class HoldResult:
    """Outcome of :meth:`TurnEngine.hold`; ``winner`` is set only when the hold won."""

    banked: int
    winner: int | None
    ignored: bool
    state: GameState


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class TurnEngine:
    """State machine for a single table of Pig."""

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        record_history: bool = True,
        history: ActionHistory | None = None,
    ) -> None:
        """Create the engine and start the first game.

        Inputs
        ------
        config
            Rules for the first game; defaults to :class:`GameConfig`.
        record_history
            Keep an :class:`ActionHistory` of rolls, busts and holds.
        history
            Pre-built history (e.g. with a fixed clock).  Implies
            ``record_history``.
        """
        self._config: GameConfig = config or GameConfig()
        self._history: ActionHistory | None = history
        if self._history is None and record_history:
            self._history = ActionHistory()
        self._listeners: list[Listener] = []
        self._queued: list[GameEvent] = []

        self._scores: list[int] = [0, 0]
        self._pending: int = 0
        self._active: int = 0
        self._playing: bool = True
        self._winner: int | None = None
        self._last_roll: int | None = None
        self.reset()

    # ---------------------------- accessors ----------------------------
    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        return GameState(
            scores=(self._scores[0], self._scores[1]),
            pending_score=self._pending,
            active_player=self._active,
            playing=self._playing,
            winner=self._winner,
            last_roll=self._last_roll,
        )

    @property
    def scores(self) -> tuple[int, int]:
        return self._scores[0], self._scores[1]

    @property
    def pending_score(self) -> int:
        return self._pending

    @property
    def active_player(self) -> int:
        return self._active

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def phase(self) -> Phase:
        return Phase.IN_PROGRESS if self._playing else Phase.FINISHED

    @property
    def winner(self) -> int | None:
        return self._winner

    @property
    def winner_name(self) -> str | None:
        if self._winner is None:
            return None
        return self._config.player_names[self._winner]

    @property
    def history(self) -> ActionHistory | None:
        return self._history

    # -------------------------- subscriptions --------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every :class:`GameEvent`.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: GameEvent) -> None:
        self._queued.append(event)

    def _flush(self) -> None:
        """Dispatch queued events, closing with a ``state_changed`` snapshot."""
        self._queued.append(events.state_changed(self.state.to_dict()))
        queued, self._queued = self._queued, []
        for event in queued:
            for listener in list(self._listeners):
                listener(event)

    # ---------------------------- gameplay -----------------------------
    def reset(self, config: GameConfig | None = None) -> GameState:
        """Start a new game.

        Inputs
        ------
        config
            Replacement rules.  ``None`` keeps the current config.

        Returns
        -------
        GameState
            Fresh snapshot: no score, player 0 to act, game in progress.
        """
        if config is not None:
            self._config = config
        self._scores = [0, 0]
        self._pending = 0
        self._active = 0
        self._playing = True
        self._winner = None
        self._last_roll = None
        self._queued = []
        if self._history is not None:
            self._history.clear()

        LOGGER.debug(
            "New game to %d between %s and %s",
            self._config.winning_score,
            *self._config.player_names,
            extra={"stage": "engine"},
        )
        self._emit(events.game_reset(self._config.winning_score, self._config.player_names))
        self._flush()
        return self.state

    def roll(self, random_value: int) -> RollResult:
        """Apply one die face chosen by the caller.

        Inputs
        ------
        random_value
            Face in ``[1, dice_sides]``.

        Returns
        -------
        RollResult
            The face, whether it busted, and the resulting snapshot.
        """
        if not self._playing:
            LOGGER.debug("Roll ignored: game is finished", extra={"stage": "engine"})
            return RollResult(random_value, busted=False, ignored=True, state=self.state)
        if (
            isinstance(random_value, bool)
            or not isinstance(random_value, numbers.Integral)
            or not 1 <= random_value <= self._config.dice_sides
        ):
            LOGGER.warning(
                "Roll ignored: %r is not a face of a %d-sided die",
                random_value,
                self._config.dice_sides,
                extra={"stage": "engine"},
            )
            return RollResult(random_value, busted=False, ignored=True, state=self.state)

        random_value = int(random_value)
        player = self._active
        self._last_roll = random_value
        if random_value == self._config.bust_value:
            forfeited = self._pending
            self._record(BUST, random_value, player)
            LOGGER.debug(
                "%s busted on %d, forfeiting %d",
                self._config.player_names[player],
                random_value,
                forfeited,
                extra={"stage": "engine"},
            )
            self._emit(events.busted(player, random_value, forfeited))
            self._switch_turn()
            self._flush()
            return RollResult(random_value, busted=True, ignored=False, state=self.state)

        self._pending += random_value
        self._record(ROLL, random_value, player)
        LOGGER.debug(
            "%s rolled %d, pending %d",
            self._config.player_names[player],
            random_value,
            self._pending,
            extra={"stage": "engine"},
        )
        self._emit(events.die_rolled(player, random_value, self._pending))
        self._flush()
        return RollResult(random_value, busted=False, ignored=False, state=self.state)

    def hold(self) -> HoldResult:
        """Bank the pending score for the active player.

        Returns
        -------
        HoldResult
            Points banked, the winner's index if this hold won, and the
            resulting snapshot.  The winner stays the active player.
        """
        if not self._playing:
            LOGGER.debug("Hold ignored: game is finished", extra={"stage": "engine"})
            return HoldResult(0, winner=self._winner, ignored=True, state=self.state)

        player = self._active
        banked = self._pending
        self._scores[player] += banked
        self._record(HOLD, banked, player)
        self._emit(events.held(player, banked, self._scores[player]))

        if self._scores[player] >= self._config.winning_score:
            self._playing = False
            self._winner = player
            self._pending = 0
            self._last_roll = None
            name = self._config.player_names[player]
            LOGGER.info(
                "%s wins with %d points",
                name,
                self._scores[player],
                extra={"stage": "engine", "scores": list(self._scores)},
            )
            self._emit(events.winner_announced(player, name, self._scores[player]))
            self._flush()
            return HoldResult(banked, winner=player, ignored=False, state=self.state)

        LOGGER.debug(
            "%s banked %d, total %d",
            self._config.player_names[player],
            banked,
            self._scores[player],
            extra={"stage": "engine"},
        )
        self._switch_turn()
        self._flush()
        return HoldResult(banked, winner=None, ignored=False, state=self.state)

    def _switch_turn(self) -> None:
        previous = self._active
        self._pending = 0
        self._active = 1 - self._active
        self._emit(events.turn_switched(previous, self._active))

    def _record(self, kind: str, value: int, player: int) -> None:
        if self._history is not None:
            self._history.append(kind, value, player)
