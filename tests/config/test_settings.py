"""Tests for qwinto/config/settings.py - environment-driven settings."""

import logging

import pytest
from pydantic import ValidationError

from qwinto.config.settings import Settings, configure_logging, get_settings
from qwinto.engine import GameConfig, QwintoGame, ReturnsType, load_game


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.players == 1
        assert settings.returns_type == "total_points"
        assert settings.termination_points == -20
        assert settings.miss_points == -5
        assert settings.num_dice_rolls == 2
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_reads_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("QWINTO_PLAYERS", "3")
        monkeypatch.setenv("QWINTO_RETURNS_TYPE", "win_loss")
        settings = Settings(_env_file=None)
        assert settings.players == 3
        assert settings.returns_type == "win_loss"

    @pytest.mark.parametrize("name, value", [
        ("QWINTO_PLAYERS", "11"),
        ("QWINTO_PLAYERS", "0"),
        ("QWINTO_RETURNS_TYPE", "best"),
    ])
    def test_invalid_env(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_game_parameters_load(self, monkeypatch):
        monkeypatch.setenv("QWINTO_PLAYERS", "2")
        monkeypatch.setenv("QWINTO_RETURNS_TYPE", "point_difference")
        game = load_game("qwinto", Settings(_env_file=None).game_parameters())
        assert game.config == GameConfig(num_players=2, returns_type=ReturnsType.POINT_DIFFERENCE)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    def test_uses_log_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        configure_logging(Settings(_env_file=None, log_level="warning"))
        assert calls[0]["level"] == "WARNING"

    def test_debug_overrides_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        configure_logging(Settings(_env_file=None, debug=True))
        assert calls[0]["level"] == logging.DEBUG

    def test_engine_logs_game_over(self, caplog, to_submit):
        state = QwintoGame().new_initial_state()
        with caplog.at_level(logging.INFO, logger="qwinto.engine.state"):
            for _ in range(4):
                to_submit(state, 1, 2)
                state.apply_actions([27])
        assert "Game over" in caplog.text
