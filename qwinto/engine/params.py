"""
Qwinto - Game Parameters

Parsing and validation of the parameters a game is created with. Values
are fixed for the life of a game.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from qwinto.engine.base import (
    DEFAULT_MISS_POINTS,
    DEFAULT_NUM_DICE_ROLLS,
    DEFAULT_NUM_PLAYERS,
    DEFAULT_TERMINATION_POINTS,
    ReturnsType,
)
from qwinto.engine.validators import (
    validate_negative_points,
    validate_player_count,
    validate_returns_type,
    validate_roll_budget,
)


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game.

    Attributes:
        num_players: Number of players (1-10)
        termination_points: Game ends once any miss accumulator reaches this
        miss_points: Penalty added to the roller's accumulator on a miss
        num_dice_rolls: Rolls allowed per round, first roll included
        returns_type: How terminal scores are reported
    """
    num_players: int = DEFAULT_NUM_PLAYERS
    termination_points: int = DEFAULT_TERMINATION_POINTS
    miss_points: int = DEFAULT_MISS_POINTS
    num_dice_rolls: int = DEFAULT_NUM_DICE_ROLLS
    returns_type: ReturnsType = ReturnsType.TOTAL_POINTS

    def __post_init__(self) -> None:
        """Validate configuration."""
        validate_player_count(self.num_players)
        validate_negative_points(self.termination_points, "Termination points")
        validate_negative_points(self.miss_points, "Miss points")
        validate_roll_budget(self.num_dice_rolls)
        if not isinstance(self.returns_type, ReturnsType):
            # Accept the string form and store the enum
            object.__setattr__(self, "returns_type", validate_returns_type(self.returns_type))


# Parameter name -> GameConfig field
PARAMETER_FIELDS = {
    "players": "num_players",
    "termination_points": "termination_points",
    "miss_points": "miss_points",
    "num_dice_rolls": "num_dice_rolls",
    "returns_type": "returns_type",
}

DEFAULT_PARAMETERS: dict[str, Any] = {
    "players": DEFAULT_NUM_PLAYERS,
    "termination_points": DEFAULT_TERMINATION_POINTS,
    "miss_points": DEFAULT_MISS_POINTS,
    "num_dice_rolls": DEFAULT_NUM_DICE_ROLLS,
    "returns_type": ReturnsType.TOTAL_POINTS.value,
}


def parse_parameters(params: Mapping[str, Any] | None = None) -> GameConfig:
    """
    Build a GameConfig from named parameters.

    Args:
        params: Parameter values by name; missing names take their defaults

    Returns:
        Validated GameConfig

    Raises:
        ValueError: On unknown names or invalid values
    """
    params = dict(params or {})
    unknown = sorted(set(params) - set(PARAMETER_FIELDS))
    if unknown:
        raise ValueError(f"Unknown game parameters: {unknown}")

    merged = {**DEFAULT_PARAMETERS, **params}
    return GameConfig(**{PARAMETER_FIELDS[name]: value for name, value in merged.items()})
