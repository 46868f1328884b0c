"""
Tests for parameter validation and parsing.
"""

import pytest

from qwinto.engine.base import ReturnsType
from qwinto.engine.params import DEFAULT_PARAMETERS, GameConfig, parse_parameters
from qwinto.engine.validators import (
    validate_negative_points,
    validate_player_count,
    validate_returns_type,
    validate_roll_budget,
)


class TestValidators:
    """Individual validators."""

    @pytest.mark.parametrize("count", [1, 2, 10])
    def test_player_count_valid(self, count):
        assert validate_player_count(count) == count

    @pytest.mark.parametrize("count", [0, 11, -1])
    def test_player_count_range(self, count):
        with pytest.raises(ValueError, match="must be 1-10"):
            validate_player_count(count)

    @pytest.mark.parametrize("count", ["2", 2.0, True])
    def test_player_count_type(self, count):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_player_count(count)

    def test_negative_points(self):
        assert validate_negative_points(-5, "Miss points") == -5
        with pytest.raises(ValueError, match="Miss points must be negative, got 0"):
            validate_negative_points(0, "Miss points")

    def test_roll_budget(self):
        assert validate_roll_budget(1) == 1
        with pytest.raises(ValueError, match="at least 1"):
            validate_roll_budget(0)

    def test_returns_type(self):
        assert validate_returns_type("win_loss") == ReturnsType.WIN_LOSS
        assert validate_returns_type(ReturnsType.TOTAL_POINTS) == ReturnsType.TOTAL_POINTS
        with pytest.raises(ValueError, match="got 'best'"):
            validate_returns_type("best")


class TestGameConfig:
    """Validated configuration."""

    def test_defaults(self):
        config = GameConfig()
        assert config.num_players == 1
        assert config.termination_points == -20
        assert config.miss_points == -5
        assert config.num_dice_rolls == 2
        assert config.returns_type == ReturnsType.TOTAL_POINTS

    def test_string_returns_type_normalized(self):
        assert GameConfig(returns_type="point_difference").returns_type == ReturnsType.POINT_DIFFERENCE

    def test_invalid(self):
        with pytest.raises(ValueError):
            GameConfig(num_players=12)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GameConfig().num_players = 2


class TestParseParameters:
    """Named parameters to GameConfig."""

    def test_none(self):
        assert parse_parameters(None) == GameConfig()

    def test_defaults_round_trip(self):
        assert parse_parameters(DEFAULT_PARAMETERS) == GameConfig()

    def test_partial(self):
        assert parse_parameters({"players": 5}).num_players == 5

    def test_unknown(self):
        with pytest.raises(ValueError, match=r"Unknown game parameters: \['seed'\]"):
            parse_parameters({"seed": 1})
