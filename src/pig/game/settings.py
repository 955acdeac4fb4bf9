"""Settings-form entry point.

Values typed into a settings form go through a stricter policy than a
:class:`~pig.game.engine.GameConfig` built in code: the winning score is
clamped to ``[MIN_SETTINGS_SCORE, MAX_SETTINGS_SCORE]`` and anything that
does not parse falls back to the current config instead of failing.
"""

from __future__ import annotations

import dataclasses
import logging
import numbers
from typing import Any, Sequence

from pig.game.engine import DEFAULT_PLAYER_NAMES, GameConfig

LOGGER = logging.getLogger(__name__)

MIN_SETTINGS_SCORE = 20
MAX_SETTINGS_SCORE = 300


def clamp_winning_score(raw: Any, fallback: int) -> int:
    """Parse *raw* and clamp it into the settings range.

    Unparsable input (``None``, ``""``, ``"abc"``) uses *fallback*, which is
    clamped as well.  Whole-valued numbers such as ``50.0`` are accepted;
    ``12.5`` is not.
    """
    if isinstance(raw, numbers.Real) and not isinstance(raw, bool) and float(raw).is_integer():
        raw = int(raw)
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        LOGGER.warning(
            "Unparsable winning score %r; keeping %d",
            raw,
            fallback,
            extra={"stage": "settings"},
        )
        value = fallback
    clamped = min(max(value, MIN_SETTINGS_SCORE), MAX_SETTINGS_SCORE)
    if clamped != value:
        LOGGER.warning(
            "Winning score %d clamped to %d",
            value,
            clamped,
            extra={"stage": "settings"},
        )
    return clamped


def _form_names(raw: Sequence[Any] | None) -> tuple[str, str]:
    names = list(raw or [])[:2]
    names += [""] * (2 - len(names))
    out = []
    for seat, name in enumerate(names):
        text = str(name).strip() if name is not None else ""
        out.append(text or DEFAULT_PLAYER_NAMES[seat])
    return out[0], out[1]


def config_from_settings(
    winning_score: Any,
    player_names: Sequence[Any] | None,
    base: GameConfig | None = None,
) -> GameConfig:
    """Build the config for the next game from raw settings input.

    Parameters
    ----------
    winning_score
        Text or number from the form.
    player_names
        Up to two names in seat order; blanks get the default seat name.
    base
        Config to derive from (die and bust value are kept).  Defaults to
        :class:`GameConfig`.
    """
    base = base or GameConfig()
    return dataclasses.replace(
        base,
        winning_score=clamp_winning_score(winning_score, base.winning_score),
        player_names=_form_names(player_names),
    )


__all__ = [
    "MAX_SETTINGS_SCORE",
    "MIN_SETTINGS_SCORE",
    "clamp_winning_score",
    "config_from_settings",
]
