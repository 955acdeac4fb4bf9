# src/pig/config.py
"""Configuration schema and helpers for the Pig front end.

Defines dataclasses describing the game rules, the console session and
logging, and includes utilities for loading YAML overlays and applying
``section.option=value`` overrides from the command line.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, get_args, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

from pig.game.engine import (
    BUST_VALUE,
    DEFAULT_DICE_SIDES,
    DEFAULT_PLAYER_NAMES,
    DEFAULT_WINNING_SCORE,
    GameConfig,
)

# ─────────────────────────────────────────────────────────────────────────────
# Dataclasses (schema)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class GameSection:
    """Rules used for every game started by the session."""

    winning_score: int = DEFAULT_WINNING_SCORE
    player_names: list[str] = field(default_factory=lambda: list(DEFAULT_PLAYER_NAMES))
    dice_sides: int = DEFAULT_DICE_SIDES
    bust_value: int = BUST_VALUE


@dataclass
class PlaySection:
    """Console session options."""

    seed: int | None = None
    record_history: bool = True


@dataclass
class LoggingSection:
    """Root logger settings."""

    level: str = "INFO"
    log_file: Path | None = None


@dataclass
class AppConfig:
    """Top-level configuration container."""

    game: GameSection = field(default_factory=GameSection)
    play: PlaySection = field(default_factory=PlaySection)
    logging: LoggingSection = field(default_factory=LoggingSection)

    def game_config(self) -> GameConfig:
        """Return the engine config described by the ``game`` section."""
        return GameConfig(
            winning_score=self.game.winning_score,
            player_names=tuple(self.game.player_names),  # type: ignore[arg-type]
            dice_sides=self.game.dice_sides,
            bust_value=self.game.bust_value,
        )


_SECTIONS: dict[str, type] = {
    "game": GameSection,
    "play": PlaySection,
    "logging": LoggingSection,
}


# ─────────────────────────────────────────────────────────────────────────────
# Loader (one or more YAML overlays; dotted keys allowed)
# ─────────────────────────────────────────────────────────────────────────────


def expand_dotted_keys(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a nested dict from *mapping*, splitting ``"a.b"`` keys."""
    result: dict[str, Any] = {}
    for raw_key, raw_value in mapping.items():
        value = expand_dotted_keys(raw_value) if isinstance(raw_value, Mapping) else raw_value
        parts = [p for p in str(raw_key).split(".") if p] if isinstance(raw_key, str) else [raw_key]
        if not parts:
            continue
        target = result
        for part in parts[:-1]:
            existing = target.setdefault(part, {})
            if not isinstance(existing, dict):
                raise TypeError(
                    f"Cannot expand dotted key {raw_key!r}; {part!r} is already set to a non-mapping value",
                )
            target = existing
        leaf = parts[-1]
        if isinstance(target.get(leaf), dict) and isinstance(value, dict):
            target[leaf].update(value)
        else:
            target[leaf] = value
    return result


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overlay`` onto ``base`` and return a new mapping."""
    result: dict[str, Any] = dict(base)
    for key, val in overlay.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(val, Mapping):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _annotation_contains(annotation: Any, target: type) -> bool:
    """Recursively inspect type annotations for the presence of ``target``."""
    if annotation is None:
        return False
    if annotation is target:
        return True
    origin = get_origin(annotation)
    if origin is None:
        return False
    if origin is target:
        return True
    return any(_annotation_contains(arg, target) for arg in get_args(annotation))


def _build(cls: type, section: Mapping[str, Any]) -> Any:
    """Instantiate a dataclass ``cls`` from a mapping of attributes."""
    if not isinstance(section, Mapping):
        raise TypeError(f"Section for {cls.__name__} must be a mapping")
    obj = cls()
    type_hints = get_type_hints(cls)
    for f in dataclasses.fields(cls):
        if f.name not in section:
            continue
        val = section[f.name]
        annotation = type_hints.get(f.name)
        if _annotation_contains(annotation, Path) and isinstance(val, str):
            val = Path(val)
        setattr(obj, f.name, val)
    return obj


def load_app_config(*overlays: Path) -> AppConfig:
    """Merge one or more YAML overlays into an :class:`AppConfig`.

    Files are read in the order provided, dotted keys are expanded, and later
    overlays always win. Keys outside the known sections are ignored.
    """
    data: dict[str, Any] = {}
    for path in overlays:
        with Path(path).open("r", encoding="utf-8") as fh:
            overlay = yaml.safe_load(fh) or {}
        if not isinstance(overlay, Mapping):
            raise TypeError(f"Config file {path} must contain a mapping")
        data = _deep_merge(data, expand_dotted_keys(overlay))

    return AppConfig(
        **{name: _build(cls, data.get(name) or {}) for name, cls in _SECTIONS.items()}
    )


def _coerce(value: str, current: Any, annotation: Any | None = None) -> Any:
    """Coerce ``value`` to the type of ``current``."""
    if value.lower() in {"none", "null", "~"} and (
        current is None or _annotation_contains(annotation, type(None))
    ):
        return None
    if isinstance(current, bool) or _annotation_contains(annotation, bool):
        val_lower = value.lower()
        if val_lower in {"1", "true", "yes", "on"}:
            return True
        if val_lower in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"Cannot parse boolean value from {value!r}")
    if isinstance(current, list) or _annotation_contains(annotation, list):
        return [part.strip() for part in value.split(",")]
    if (isinstance(current, int) and not isinstance(current, bool)) or _annotation_contains(
        annotation, int
    ):
        return int(value)
    if isinstance(current, Path) or _annotation_contains(annotation, Path):
        return Path(value)
    return value


def apply_dot_overrides(cfg: AppConfig, pairs: list[str]) -> AppConfig:
    """Apply ``section.option=value`` overrides to *cfg*."""
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid override {pair!r}")
        key, raw = pair.split("=", 1)
        if "." not in key:
            raise ValueError(f"Invalid override {pair!r}")
        section_name, option = key.split(".", 1)
        if section_name not in _SECTIONS:
            raise AttributeError(f"Unknown config section {section_name!r}")
        section = getattr(cfg, section_name)
        if not hasattr(section, option):
            raise AttributeError(f"Unknown option {option!r} in section {section_name!r}")
        current = getattr(section, option)
        annotation = get_type_hints(type(section)).get(option)
        setattr(section, option, _coerce(raw, current, annotation))
    return cfg


def config_to_yaml(cfg: AppConfig) -> str:
    """Render *cfg* as YAML (paths become strings)."""
    data = dataclasses.asdict(cfg)
    log_file = data["logging"]["log_file"]
    if log_file is not None:
        data["logging"]["log_file"] = str(log_file)
    return yaml.safe_dump(data, sort_keys=True)


__all__ = [
    "AppConfig",
    "GameSection",
    "LoggingSection",
    "PlaySection",
    "apply_dot_overrides",
    "config_to_yaml",
    "expand_dotted_keys",
    "load_app_config",
]
