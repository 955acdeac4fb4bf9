from __future__ import annotations

import io

import pytest

from pig.game.engine import GameConfig, GameState, TurnEngine
from pig.render.console import ConsoleRenderer, render_die, render_state, render_winner


@pytest.mark.unit
def test_render_state_marks_active_player():
    cfg = GameConfig(winning_score=50, player_names=("Ann", "Bob"))
    state = GameState(scores=(12, 7), pending_score=9, active_player=1, last_roll=4)
    text = render_state(state, cfg)
    lines = text.splitlines()
    assert "First to 50 wins" in text
    assert lines[2].startswith("  Ann")
    assert "score   12" in lines[2]
    assert "current   0" in lines[2]
    assert lines[3].startswith("> Bob")
    assert "current   9" in lines[3]
    assert "die: [4]" in text


@pytest.mark.unit
def test_render_state_hides_die_and_stars_winner():
    cfg = GameConfig()
    state = GameState(scores=(100, 3), playing=False, winner=0)
    text = render_state(state, cfg)
    assert render_die(None) in text
    assert text.splitlines()[2].startswith("* Player 1")
    assert ">" not in text


@pytest.mark.unit
def test_renderer_redraws_on_every_action():
    out = io.StringIO()
    engine = TurnEngine(GameConfig(winning_score=10, player_names=("Ann", "Bob")))
    renderer = ConsoleRenderer(out)
    renderer.attach(engine)

    engine.roll(6)
    assert "die: [6]" in out.getvalue()

    engine.roll(1)
    assert "Ann rolled 1 and lost 6 points" in out.getvalue()

    engine.roll(5)
    engine.roll(5)
    engine.hold()
    assert render_winner("Bob", 10) in out.getvalue()


@pytest.mark.unit
def test_detach_stops_output():
    out = io.StringIO()
    engine = TurnEngine()
    renderer = ConsoleRenderer(out)
    detach = renderer.attach(engine)
    detach()
    engine.roll(3)
    renderer.show()
    assert out.getvalue() == ""


@pytest.mark.unit
def test_attach_replaces_previous_engine():
    out = io.StringIO()
    first, second = TurnEngine(), TurnEngine()
    renderer = ConsoleRenderer(out)
    renderer.attach(first)
    renderer.attach(second)
    first.roll(3)
    assert out.getvalue() == ""
    second.roll(4)
    assert "die: [4]" in out.getvalue()
