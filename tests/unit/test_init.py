import importlib
import importlib.metadata

import pytest

import pig


def test_version_from_metadata(monkeypatch):
    monkeypatch.setattr(importlib.metadata, "version", lambda _pkg: "9.9.9")
    mod = importlib.reload(pig)
    assert mod.__version__ == "9.9.9"


def test_version_fallback(monkeypatch):
    def raise_pkg(_pkg):
        raise importlib.metadata.PackageNotFoundError

    monkeypatch.setattr(importlib.metadata, "version", raise_pkg)
    mod = importlib.reload(pig)
    assert mod.__version__ == mod._read_version_from_toml() == "0.1.0"


def test_lazy_exports_resolve():
    from pig.game.engine import TurnEngine

    assert pig.TurnEngine is TurnEngine
    assert callable(pig.config_from_settings)


def test_unknown_attribute():
    with pytest.raises(AttributeError):
        pig.not_a_thing  # noqa: B018
