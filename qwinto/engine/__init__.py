"""
Qwinto Game Engine.

Pure Python game logic with no UI or storage dependencies.
Handles dice selection and rolls, simultaneous score submission,
placement rules, scoring and termination.
"""

from qwinto.engine.base import (
    ACTION_ACCEPT,
    ACTION_MISS,
    ACTION_REROLL,
    ACTION_SKIP,
    CHANCE_PLAYER_ID,
    SIMULTANEOUS_PLAYER_ID,
    TERMINAL_PLAYER_ID,
    ChanceTurn,
    ContractViolation,
    Die,
    JointResolution,
    Phase,
    PlayerTurn,
    ReturnsType,
    RoundState,
    Scoresheet,
    SimultaneousTurn,
    TerminalTurn,
    Turn,
)
from qwinto.engine.game import GAME_TYPE, QwintoGame, load_game, register_game, registered_names
from qwinto.engine.params import GameConfig
from qwinto.engine.rules import QwintoEngine
from qwinto.engine.state import QwintoState

__all__ = [
    # Data Classes
    "GameConfig",
    "JointResolution",
    "RoundState",
    "Scoresheet",
    # Enums
    "Die",
    "Phase",
    "ReturnsType",
    # Turns
    "ChanceTurn",
    "PlayerTurn",
    "SimultaneousTurn",
    "TerminalTurn",
    "Turn",
    # Actions & ids
    "ACTION_ACCEPT",
    "ACTION_MISS",
    "ACTION_REROLL",
    "ACTION_SKIP",
    "CHANCE_PLAYER_ID",
    "SIMULTANEOUS_PLAYER_ID",
    "TERMINAL_PLAYER_ID",
    # Errors
    "ContractViolation",
    # Engine
    "GAME_TYPE",
    "QwintoEngine",
    "QwintoGame",
    "QwintoState",
    "load_game",
    "register_game",
    "registered_names",
]
