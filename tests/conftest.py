# pragma: no cover
import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))
TEST_PATH = PROJECT_ROOT / "tests"
if TEST_PATH.exists():
    sys.path.insert(0, str(TEST_PATH))

from pig.game.engine import GameConfig, TurnEngine  # noqa: E402
from pig.game.history import ActionHistory  # noqa: E402


class FakeClock:
    """Monotonic clock ticking one second per call."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock: FakeClock) -> TurnEngine:
    """Engine with default rules and a deterministic history clock."""
    return TurnEngine(history=ActionHistory(clock=clock))


@pytest.fixture
def short_game(clock: FakeClock) -> TurnEngine:
    """Engine playing to 20, as in the walkthrough scenario."""
    return TurnEngine(GameConfig(winning_score=20), history=ActionHistory(clock=clock))


@pytest.fixture
def recorded_events(engine: TurnEngine) -> list:
    seen: list = []
    engine.subscribe(seen.append)
    return seen


@pytest.fixture
def capinfo(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO)
    return caplog


@pytest.fixture
def preserve_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
