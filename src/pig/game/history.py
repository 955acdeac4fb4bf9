"""history.py
============
Append-only action log kept by :class:`~pig.game.engine.TurnEngine`.

The log is cosmetic: nothing in the rules reads it back. It exists so a
front end can show per-player statistics once a game is over. Records are
plain frozen dataclasses; :meth:`ActionHistory.to_frame` and
:func:`summarize` turn them into :mod:`pandas` tables.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Callable, Iterator, Sequence

import pandas as pd

__all__ = [
    "ROLL",
    "BUST",
    "HOLD",
    "ActionRecord",
    "ActionHistory",
    "summarize",
]

ROLL = "roll"
BUST = "bust"
HOLD = "hold"

RECORD_COLUMNS = ["kind", "value", "player", "timestamp"]
SUMMARY_COLUMNS = ["rolls", "busts", "holds", "points_banked", "best_hold"]


@dataclass(frozen=True, slots=True)
class ActionRecord:
    """One action taken during a game.

    Attributes
    ----------
    kind
        ``"roll"``, ``"bust"`` or ``"hold"``.
    value
        Die face for rolls and busts, points banked for holds.
    player
        Index of the player who acted.
    timestamp
        Seconds since the epoch, as returned by the history's clock.
    """

    kind: str
    value: int
    player: int
    timestamp: float


class ActionHistory:
    """Ordered, append-only sequence of :class:`ActionRecord`."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._records: list[ActionRecord] = []

    def append(self, kind: str, value: int, player: int) -> ActionRecord:
        record = ActionRecord(kind=kind, value=int(value), player=int(player), timestamp=self._clock())
        self._records.append(record)
        return record

    def clear(self) -> None:
        self._records.clear()

    @property
    def records(self) -> tuple[ActionRecord, ...]:
        return tuple(self._records)

    def __iter__(self) -> Iterator[ActionRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def to_frame(self) -> pd.DataFrame:
        """Return one row per record with a ``datetime64`` timestamp column."""
        frame = pd.DataFrame([asdict(r) for r in self._records], columns=RECORD_COLUMNS)
        frame["timestamp"] = pd.to_datetime(frame["timestamp"], unit="s")
        return frame


def summarize(history: ActionHistory, names: Sequence[str]) -> pd.DataFrame:
    """Per-player statistics for the actions in *history*.

    Parameters
    ----------
    history
        Log to summarise.
    names
        Player names in seat order; the result is indexed by these.

    Returns
    -------
    pandas.DataFrame
        Columns ``rolls`` (busts included), ``busts``, ``holds``,
        ``points_banked`` and ``best_hold``, one row per player.
    """
    frame = history.to_frame()
    rows = []
    for idx, name in enumerate(names):
        mine = frame[frame["player"] == idx]
        holds = mine[mine["kind"] == HOLD]
        rows.append(
            {
                "player": name,
                "rolls": int(mine["kind"].isin([ROLL, BUST]).sum()),
                "busts": int((mine["kind"] == BUST).sum()),
                "holds": len(holds),
                "points_banked": int(holds["value"].sum()) if len(holds) else 0,
                "best_hold": int(holds["value"].max()) if len(holds) else 0,
            }
        )
    return pd.DataFrame(rows, columns=["player", *SUMMARY_COLUMNS]).set_index("player")
