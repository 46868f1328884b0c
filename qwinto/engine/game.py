"""
Qwinto - Game Definition and Registry

QwintoGame holds the parameters of a game and the facts an orchestrator
needs before any state exists (action counts, utility bounds, observation
shape). Games are created by name through a small registry.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from qwinto.engine.base import MAX_PLAYERS, MIN_PLAYERS, NUM_DISTINCT_ACTIONS, ReturnsType
from qwinto.engine.chance import MAX_CHANCE_OUTCOMES
from qwinto.engine.observation import observation_shape, observation_size
from qwinto.engine.params import DEFAULT_PARAMETERS, GameConfig, parse_parameters
from qwinto.engine.rules import QwintoEngine
from qwinto.engine.state import QwintoState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameType:
    """Static description of a game, independent of its parameters."""
    short_name: str
    long_name: str
    dynamics: str
    chance_mode: str
    information: str
    utility: str
    reward_model: str
    min_num_players: int
    max_num_players: int
    provides_observation_tensor: bool
    parameter_specification: Mapping[str, Any] = field(default_factory=dict)


GAME_TYPE = GameType(
    short_name="qwinto",
    long_name="Qwinto",
    dynamics="simultaneous",
    chance_mode="explicit_stochastic",
    information="perfect_information",
    utility="general_sum",
    reward_model="terminal",
    min_num_players=MIN_PLAYERS,
    max_num_players=MAX_PLAYERS,
    provides_observation_tensor=True,
    parameter_specification=dict(DEFAULT_PARAMETERS),
)


class QwintoGame:
    """
    A Qwinto game with fixed parameters.

    Attributes:
        params: Every parameter by name, defaults filled in
        config: The validated GameConfig
    """

    # Three nodes per round over the longest plausible game
    MAX_GAME_LENGTH = 3 * 31

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self.config: GameConfig = parse_parameters(params)
        self.params: dict[str, Any] = {**DEFAULT_PARAMETERS, **(params or {})}
        logger.info("Created %r", self)

    def get_type(self) -> GameType:
        return GAME_TYPE

    def num_players(self) -> int:
        return self.config.num_players

    def num_distinct_actions(self) -> int:
        return NUM_DISTINCT_ACTIONS

    def max_chance_outcomes(self) -> int:
        return MAX_CHANCE_OUTCOMES

    def max_game_length(self) -> int:
        return self.MAX_GAME_LENGTH

    def min_points(self) -> int:
        """
        Lowest final score: a sheet with nothing written that took every
        miss until its accumulator crossed the threshold.
        """
        misses_to_end = -(self.config.termination_points // -self.config.miss_points)
        return misses_to_end * self.config.miss_points

    def min_utility(self) -> float:
        """Lowest possible return under the configured returns type."""
        if self.config.returns_type == ReturnsType.WIN_LOSS:
            return -1.0
        if self.config.returns_type == ReturnsType.POINT_DIFFERENCE:
            return float(self.min_points() - QwintoEngine.MAX_POINTS)
        return float(self.min_points())

    def max_utility(self) -> float:
        """Highest possible return under the configured returns type."""
        if self.config.returns_type == ReturnsType.WIN_LOSS:
            return 1.0
        if self.config.returns_type == ReturnsType.POINT_DIFFERENCE:
            return float(QwintoEngine.MAX_POINTS - self.min_points())
        return float(QwintoEngine.MAX_POINTS)

    def observation_tensor_shape(self) -> list[int]:
        return observation_shape(self.config)

    def observation_tensor_size(self) -> int:
        return observation_size(self.config)

    def new_initial_state(self) -> QwintoState:
        """Empty sheets, player 0 to select dice."""
        return QwintoState(self)

    def __repr__(self) -> str:
        args = ",".join(f"{name}={value}" for name, value in sorted(self.params.items()))
        return f"{GAME_TYPE.short_name}({args})"


# =============================================================================
# REGISTRY
# =============================================================================

GameFactory = Callable[[Mapping[str, Any] | None], QwintoGame]

_REGISTRY: dict[str, tuple[GameType, GameFactory]] = {}


def register_game(game_type: GameType, factory: GameFactory) -> None:
    """Make a game loadable by its short name."""
    if game_type.short_name in _REGISTRY:
        logger.warning("Replacing registered game %s", game_type.short_name)
    _REGISTRY[game_type.short_name] = (game_type, factory)


def registered_names() -> list[str]:
    return sorted(_REGISTRY)


def load_game(name: str, params: Mapping[str, Any] | None = None) -> QwintoGame:
    """
    Create a registered game.

    Args:
        name: Short name the game was registered under
        params: Game parameters; defaults for any that are missing. When None,
                the parameters come from the QWINTO_* settings.

    Raises:
        ValueError: If no game is registered under name or a parameter is invalid
    """
    if name not in _REGISTRY:
        raise ValueError(f"Unknown game {name!r}; registered: {registered_names()}")
    if params is None:
        # config.settings imports engine.base
        from qwinto.config.settings import get_settings
        params = get_settings().game_parameters()
    _, factory = _REGISTRY[name]
    return factory(params)


register_game(GAME_TYPE, QwintoGame)
