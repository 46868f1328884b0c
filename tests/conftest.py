"""
Qwinto - Test Configuration and Fixtures

Common fixtures and helpers for all test modules.
"""

import pytest

from qwinto.config.settings import get_settings
from qwinto.engine import ACTION_ACCEPT, QwintoGame, QwintoState
from qwinto.engine.params import GameConfig


# =============================================================================
# HELPERS
# =============================================================================

def advance_to_submit(state: QwintoState, dice: int, outcome: int) -> QwintoState:
    """Select dice, roll outcome and accept it."""
    state.apply_action(dice)
    state.apply_action(outcome)
    state.apply_action(ACTION_ACCEPT)
    return state


# =============================================================================
# GAME FIXTURES
# =============================================================================

@pytest.fixture
def one_player_game() -> QwintoGame:
    return QwintoGame()


@pytest.fixture
def two_player_game() -> QwintoGame:
    return QwintoGame({"players": 2})


@pytest.fixture
def three_player_game() -> QwintoGame:
    return QwintoGame({"players": 3})


@pytest.fixture
def default_config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def two_player_config() -> GameConfig:
    return GameConfig(num_players=2)


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Settings never leak between tests."""
    for name in (
        "QWINTO_PLAYERS", "QWINTO_RETURNS_TYPE", "QWINTO_TERMINATION_POINTS",
        "QWINTO_MISS_POINTS", "QWINTO_NUM_DICE_ROLLS", "QWINTO_DEBUG", "QWINTO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def to_submit():
    """Helper driving a state from SelectDice to SubmitPoints."""
    return advance_to_submit
