from __future__ import annotations

from pathlib import Path

import pytest
import yaml

import pig.cli.main as cli_main


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch, preserve_root_logger):
    captured: dict[str, object] = {}

    def fake_configure(**kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(cli_main, "configure_logging", fake_configure)
    return captured


@pytest.fixture
def captured_play(monkeypatch):
    captured: dict[str, object] = {}

    def fake_play(engine, *, seed):
        captured["engine"] = engine
        captured["seed"] = seed

    monkeypatch.setattr(cli_main, "play", fake_play)
    return captured


@pytest.mark.unit
def test_main_dispatches_play(captured_play):
    cli_main.main(["play", "--seed", "123", "--winning-score", "40", "--names", "Ann", "Bob"])

    engine = captured_play["engine"]
    assert captured_play["seed"] == 123
    assert engine.config.winning_score == 40
    assert engine.config.player_names == ("Ann", "Bob")
    assert engine.playing


@pytest.mark.unit
def test_direct_winning_score_is_not_clamped(captured_play):
    cli_main.main(["play", "--winning-score", "5"])
    assert captured_play["engine"].config.winning_score == 5


@pytest.mark.unit
def test_config_file_and_overrides(tmp_path: Path, captured_play, _quiet_logging):
    cfg_path = tmp_path / "pig.yaml"
    cfg_path.write_text(
        yaml.safe_dump({"game": {"winning_score": 60}, "logging": {"level": "DEBUG"}})
    )

    cli_main.main(
        [
            "--config",
            str(cfg_path),
            "--set",
            "play.record_history=false",
            "--set",
            "game.player_names=Ann,Bob",
            "play",
        ]
    )

    engine = captured_play["engine"]
    assert engine.config.winning_score == 60
    assert engine.config.player_names == ("Ann", "Bob")
    assert engine.history is None
    assert _quiet_logging["level"] == "DEBUG"


@pytest.mark.unit
def test_log_level_flag_wins(captured_play, _quiet_logging):
    cli_main.main(["--log-level", "warning", "play"])
    assert _quiet_logging["level"] == "warning"


@pytest.mark.unit
def test_config_command_prints_yaml(capsys):
    cli_main.main(["--set", "game.winning_score=77", "config"])
    data = yaml.safe_load(capsys.readouterr().out)
    assert data["game"]["winning_score"] == 77
    assert data["game"]["player_names"] == ["Player 1", "Player 2"]


@pytest.mark.unit
def test_bad_override_propagates():
    with pytest.raises(AttributeError):
        cli_main.main(["--set", "game.colour=red", "config"])


@pytest.mark.unit
def test_command_required():
    with pytest.raises(SystemExit):
        cli_main.main([])
