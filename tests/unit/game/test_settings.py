from __future__ import annotations

import logging

import pytest

from pig.game.engine import GameConfig, TurnEngine
from pig.game.settings import (
    MAX_SETTINGS_SCORE,
    MIN_SETTINGS_SCORE,
    clamp_winning_score,
    config_from_settings,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("50", 50),
        (" 120 ", 120),
        ("5", MIN_SETTINGS_SCORE),
        (-3, MIN_SETTINGS_SCORE),
        ("1000", MAX_SETTINGS_SCORE),
        (300, 300),
        (20, 20),
    ],
)
def test_clamp_winning_score(raw, expected):
    assert clamp_winning_score(raw, 100) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", "abc", None, "12.5"])
def test_unparsable_score_keeps_fallback(raw, caplog):
    caplog.set_level(logging.WARNING)
    assert clamp_winning_score(raw, 80) == 80
    assert "Unparsable winning score" in caplog.text


@pytest.mark.unit
@pytest.mark.parametrize(("raw", "expected"), [(50.0, 50), (1000.0, MAX_SETTINGS_SCORE)])
def test_whole_float_from_numeric_form_is_parsed(raw, expected, caplog):
    caplog.set_level(logging.WARNING)
    assert clamp_winning_score(raw, 100) == expected
    assert "Unparsable" not in caplog.text


@pytest.mark.unit
def test_fractional_float_keeps_fallback():
    assert clamp_winning_score(12.5, 80) == 80


@pytest.mark.unit
def test_fallback_is_clamped_too():
    assert clamp_winning_score("nope", 1000) == MAX_SETTINGS_SCORE


@pytest.mark.unit
def test_config_from_settings_builds_clamped_config():
    base = GameConfig(winning_score=100, dice_sides=8, bust_value=2)
    cfg = config_from_settings("999", [" Ann ", "Bob"], base)
    assert cfg.winning_score == MAX_SETTINGS_SCORE
    assert cfg.player_names == ("Ann", "Bob")
    assert cfg.dice_sides == 8
    assert cfg.bust_value == 2


@pytest.mark.unit
@pytest.mark.parametrize("names", [None, [], [""], ["", None]])
def test_missing_names_get_seat_defaults(names):
    assert config_from_settings(50, names).player_names == ("Player 1", "Player 2")


@pytest.mark.unit
def test_settings_and_direct_config_differ():
    assert GameConfig(winning_score=10).winning_score == 10
    assert config_from_settings(10, ["A", "B"]).winning_score == MIN_SETTINGS_SCORE


@pytest.mark.unit
def test_settings_config_starts_new_game(engine):
    engine.roll(5)
    engine.reset(config_from_settings("25", ["Ann", "Bob"], engine.config))
    assert engine.config.winning_score == 25
    assert engine.scores == (0, 0)
    assert engine.pending_score == 0
