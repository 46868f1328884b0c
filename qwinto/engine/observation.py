"""
Qwinto - Observation Encoding

Fixed-length numeric vectors for learning agents. The layout is:

    3            one-hot phase (Select, Roll, Submit)
    R            one-hot rolls used (i == rolls used, i in 0..R-1)
    3            selected dice, masked bit values (Orange 1, Yellow 4, Purple 2)
    18           one-hot current sum (1..18)
    N            one-hot roller
    28 * N       every player's 27 cells then miss accumulator

where R is the roll budget and N the number of players. Qwinto is a perfect
information game, so every player sees the same vector.
"""

from typing import Sequence

import numpy as np

from qwinto.engine.base import (
    MAX_OUTCOME,
    NUM_DICE,
    NUM_DISTINCT_ACTIONS,
    SHEET_SIZE,
    ContractViolation,
    Die,
    Phase,
    RoundState,
    Scoresheet,
)
from qwinto.engine.params import GameConfig

_PHASES = (Phase.SELECT_DICE, Phase.ROLL_DICE, Phase.SUBMIT_POINTS)
_DICE_ORDER = (Die.ORANGE, Die.YELLOW, Die.PURPLE)


def observation_size(config: GameConfig) -> int:
    """Length of the observation vector."""
    return (
        len(_PHASES)
        + config.num_dice_rolls
        + NUM_DICE
        + MAX_OUTCOME
        + config.num_players
        + config.num_players * SHEET_SIZE
    )


def observation_shape(config: GameConfig) -> list[int]:
    return [observation_size(config)]


def encode_observation(
    config: GameConfig,
    round_state: RoundState,
    sheets: Sequence[Scoresheet],
    player: int,
) -> np.ndarray:
    """
    Encode the state as seen by player.

    Args:
        config: Game configuration
        round_state: Current round
        sheets: Every player's sheet
        player: Observing player

    Returns:
        float64 vector of length observation_size(config)

    Raises:
        ContractViolation: If player is out of range
    """
    if not (0 <= player < config.num_players):
        raise ContractViolation(f"Player {player} is out of range for {config.num_players} players")

    obs = np.zeros(observation_size(config), dtype=np.float64)
    idx = 0

    # Phase
    obs[idx + _PHASES.index(round_state.phase)] = 1
    idx += len(_PHASES)

    # Rolls used
    if round_state.rolls_used < config.num_dice_rolls:
        obs[idx + round_state.rolls_used] = 1
    idx += config.num_dice_rolls

    # Dice
    for die in _DICE_ORDER:
        obs[idx] = int(round_state.dice & die)
        idx += 1

    # Current sum
    if round_state.outcome > 0:
        obs[idx + round_state.outcome - 1] = 1
    idx += MAX_OUTCOME

    # Roller
    obs[idx + round_state.roller] = 1
    idx += config.num_players

    # Boards
    for sheet in sheets:
        obs[idx:idx + SHEET_SIZE] = sheet.as_vector()
        idx += SHEET_SIZE

    return obs


def legal_actions_mask(legal_actions: Sequence[int]) -> np.ndarray:
    """0/1 mask over every distinct action id."""
    mask = np.zeros(NUM_DISTINCT_ACTIONS, dtype=np.int8)
    mask[np.asarray(legal_actions, dtype=np.intp)] = 1
    return mask
