"""
Qwinto - Input Validation Utilities

Provides validation functions for game parameters. All validators either
return validated data or raise descriptive ValueError exceptions.
"""

from qwinto.engine.base import MAX_PLAYERS, MIN_PLAYERS, ReturnsType


def validate_player_count(count: int) -> int:
    """
    Validate number of players.

    Args:
        count: Number of players

    Returns:
        Validated count

    Raises:
        ValueError: If count is not 1-10
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if not (MIN_PLAYERS <= count <= MAX_PLAYERS):
        raise ValueError(f"Player count must be {MIN_PLAYERS}-{MAX_PLAYERS}, got {count}.")

    return count


def validate_negative_points(points: int, name: str) -> int:
    """
    Validate a penalty or threshold that must be strictly negative.

    Args:
        points: Value to validate
        name: Parameter name used in the error message

    Returns:
        Validated points

    Raises:
        ValueError: If points is not a negative integer
    """
    if not isinstance(points, int) or isinstance(points, bool):
        raise ValueError(f"{name} must be an integer, got {type(points).__name__}.")

    if points >= 0:
        raise ValueError(f"{name} must be negative, got {points}.")

    return points


def validate_roll_budget(rolls: int) -> int:
    """Validate the number of rolls allowed per round (first roll included)."""
    if not isinstance(rolls, int) or isinstance(rolls, bool):
        raise ValueError(f"Roll budget must be an integer, got {type(rolls).__name__}.")

    if rolls < 1:
        raise ValueError(f"Roll budget must be at least 1, got {rolls}.")

    return rolls


def validate_returns_type(returns_type: str | ReturnsType) -> ReturnsType:
    """
    Validate and normalize the returns type.

    Args:
        returns_type: A ReturnsType or its string value

    Returns:
        The matching ReturnsType

    Raises:
        ValueError: If the name is unknown
    """
    if isinstance(returns_type, ReturnsType):
        return returns_type

    try:
        return ReturnsType(returns_type)
    except ValueError:
        valid = sorted(r.value for r in ReturnsType)
        raise ValueError(f"Returns type must be one of {valid}, got {returns_type!r}.") from None
