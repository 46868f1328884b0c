"""
Qwinto - Game State

QwintoState is the object an orchestrator drives. It holds the immutable
round state and scoresheets and swaps them for new ones as decisions are
applied, so clones never share anything that changes.

Protocol:
    - whose_turn() names the next node: a PlayerTurn (the roller),
      a ChanceTurn, a SimultaneousTurn or a TerminalTurn
    - roller and chance nodes take apply_action(action)
    - the simultaneous node takes apply_actions([one action per player])
"""

import logging
import random
from typing import TYPE_CHECKING, Sequence

import numpy as np

from qwinto.engine.base import (
    ACTION_ACCEPT,
    ACTION_MISS,
    ACTION_REROLL,
    ACTION_SKIP,
    CHANCE_PLAYER_ID,
    NUM_CELLS,
    NUM_FIELDS,
    ROW_DICE,
    SIMULTANEOUS_PLAYER_ID,
    TERMINAL_PLAYER_ID,
    ChanceTurn,
    ContractViolation,
    Die,
    Phase,
    PlayerTurn,
    RoundState,
    Scoresheet,
    SimultaneousTurn,
    TerminalTurn,
    Turn,
)
from qwinto.engine.chance import outcomes_for, sample_outcome
from qwinto.engine.events import EventPayload, make_payload, make_submission_payload
from qwinto.engine.observation import encode_observation, legal_actions_mask
from qwinto.engine.params import GameConfig
from qwinto.engine.rules import QwintoEngine

if TYPE_CHECKING:
    from qwinto.engine.game import QwintoGame

logger = logging.getLogger(__name__)

_DIE_NAMES = ((Die.ORANGE, "Orange"), (Die.YELLOW, "Yellow"), (Die.PURPLE, "Purple"))


def dice_to_string(dice: Die) -> str:
    """Names of the selected dice, e.g. 'Orange, Purple'."""
    return ", ".join(name for die, name in _DIE_NAMES if dice & die)


def _cells(values: Sequence[int]) -> str:
    return "|".join(f"{v:2d}" for v in values)


def sheet_to_string(sheet: Scoresheet) -> str:
    """Render a sheet with its rows staggered as on the printed sheet."""
    orange, yellow, purple = (sheet.row(r) for r in range(3))
    lines = [
        f"      |{_cells(orange[:3])}|  |{_cells(orange[3:])}|",
        f"    {_cells(yellow[:5])}|  |{_cells(yellow[5:])}|",
        f"|{_cells(purple[:4])}|  |{_cells(purple[4:])}|",
        f"Miss: {sheet.misses}",
    ]
    return "\n".join(lines)


class QwintoState:
    """
    A Qwinto game in progress.

    Attributes:
        game: The game this state belongs to
        config: Parameters of that game
    """

    def __init__(self, game: "QwintoGame") -> None:
        self.game = game
        self.config: GameConfig = game.config
        self._round = RoundState()
        self._sheets: tuple[Scoresheet, ...] = tuple(
            Scoresheet.empty() for _ in range(self.config.num_players)
        )
        self._history: list[EventPayload] = []

    # =========================================================================
    # INSPECTION
    # =========================================================================

    @property
    def round_state(self) -> RoundState:
        return self._round

    @property
    def sheets(self) -> tuple[Scoresheet, ...]:
        return self._sheets

    @property
    def history(self) -> tuple[EventPayload, ...]:
        """Every decision applied so far, oldest first."""
        return tuple(self._history)

    @property
    def num_players(self) -> int:
        return self.config.num_players

    def whose_turn(self) -> Turn:
        """The kind of node the game is at."""
        if self.is_terminal():
            return TerminalTurn()
        if self._round.awaiting_chance:
            return ChanceTurn()
        if self._round.phase == Phase.SUBMIT_POINTS:
            return SimultaneousTurn()
        return PlayerTurn(self._round.roller)

    def current_player(self) -> int:
        """Player id of the next node; negative ids mark non-player nodes."""
        return self.whose_turn().player_id

    def is_chance_node(self) -> bool:
        return isinstance(self.whose_turn(), ChanceTurn)

    def is_simultaneous_node(self) -> bool:
        return isinstance(self.whose_turn(), SimultaneousTurn)

    def is_terminal(self) -> bool:
        return QwintoEngine.is_game_over(self.config, self._sheets)

    def returns(self) -> list[float]:
        """Per-player returns; all zero until the game is over."""
        return QwintoEngine.returns(self.config, self._sheets)

    def score(self, player: int) -> int:
        """Current score of a player's sheet, as it would count at the end."""
        return QwintoEngine.total_score(self._sheets[player])

    def legal_actions(self, player: int | None = None) -> list[int]:
        """
        Legal actions for a player.

        Args:
            player: Player index, or CHANCE_PLAYER_ID; defaults to the player
                    of the current node

        Returns:
            Sorted action ids; empty if the player has nothing to decide

        Raises:
            ContractViolation: When asked for the simultaneous node as a whole
        """
        if player is None:
            player = self.current_player()

        if player == TERMINAL_PLAYER_ID or self.is_terminal():
            return []

        if player == CHANCE_PLAYER_ID:
            if not self._round.awaiting_chance:
                return []
            return QwintoEngine.legal_outcomes(self._round)

        if player == SIMULTANEOUS_PLAYER_ID:
            raise ContractViolation("Query legal actions of each player at a simultaneous node")

        return QwintoEngine.legal_actions(self.config, self._round, self._sheets, player)

    def legal_actions_mask(self, player: int | None = None) -> np.ndarray:
        return legal_actions_mask(self.legal_actions(player))

    def chance_outcomes(self) -> list[tuple[int, float]]:
        """
        Distribution of the pending roll.

        Raises:
            ContractViolation: If the state is not at a chance node
        """
        if not self.is_chance_node():
            raise ContractViolation("Chance outcomes requested outside a chance node")
        return list(outcomes_for(self._round.dice))

    def sample_chance_outcome(self, rng: random.Random | None = None) -> int:
        """Draw the pending roll's sum."""
        if not self.is_chance_node():
            raise ContractViolation("Chance outcome sampled outside a chance node")
        return sample_outcome(self._round.dice, rng)

    def observation_tensor(self, player: int) -> np.ndarray:
        return encode_observation(self.config, self._round, self._sheets, player)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def apply_action(self, action: int) -> None:
        """
        Apply the decision of the roller or the outcome of a roll.

        Raises:
            ContractViolation: At a simultaneous or terminal node, or if the
                               action is not legal
        """
        turn = self.whose_turn()

        if isinstance(turn, TerminalTurn):
            raise ContractViolation("Game is over; no actions can be applied")
        if isinstance(turn, SimultaneousTurn):
            raise ContractViolation("Submissions must be applied together with apply_actions")

        if isinstance(turn, ChanceTurn):
            new_round = QwintoEngine.apply_outcome(self._round, action)
        elif self._round.phase == Phase.SELECT_DICE:
            new_round = QwintoEngine.select_dice(self._round, action)
        else:
            new_round = QwintoEngine.decide_roll(self.config, self._round, action)

        self._history.append(make_payload(self._round, action))
        self._round = new_round

    def apply_actions(self, actions: Sequence[int]) -> None:
        """
        Apply every player's SubmitPoints action as one batch.

        Nothing changes unless the whole batch is legal.

        Raises:
            ContractViolation: Outside the simultaneous node, on wrong arity or
                               on any illegal action
        """
        if not self.is_simultaneous_node():
            raise ContractViolation(
                f"Joint actions applied outside a simultaneous node (phase {self._round.phase.value})"
            )

        actions = tuple(actions)
        resolution = QwintoEngine.resolve_submissions(self.config, self._round, self._sheets, actions)

        self._history.append(make_submission_payload(self._round, actions))
        self._sheets = resolution.sheets
        self._round = self._round.next_round(self.config.num_players)

        if self.is_terminal():
            logger.info("Game over after %d decisions; returns %s", len(self._history), self.returns())

    def clone(self) -> "QwintoState":
        """Independent copy; applying actions to one never affects the other."""
        state = QwintoState.__new__(QwintoState)
        state.game = self.game
        state.config = self.config
        state._round = self._round
        state._sheets = self._sheets
        state._history = list(self._history)
        return state

    # =========================================================================
    # RENDERING
    # =========================================================================

    def action_to_string(self, player: int, action: int) -> str:
        """Human-readable description of an action at the current node."""
        if player == CHANCE_PLAYER_ID:
            if not (1 <= action <= 18):
                raise ContractViolation(f"Invalid dice outcome {action}")
            return f"Dice outcome {action}"

        if self._round.phase == Phase.SELECT_DICE:
            return f"[P{player}] Dice: {dice_to_string(Die(action))}"

        if self._round.phase == Phase.ROLL_DICE:
            if action == ACTION_REROLL:
                return f"[P{player}] Reroll"
            if action == ACTION_ACCEPT:
                return f"[P{player}] Take outcome {self._round.outcome}"
            raise ContractViolation(f"Invalid roll decision {action}")

        if action == ACTION_MISS:
            return f"[P{player}] Miss"
        if action == ACTION_SKIP:
            return f"[P{player}] Skip"
        if not (0 <= action < NUM_CELLS):
            raise ContractViolation(f"Invalid submission {action}")
        row, column = divmod(action, NUM_FIELDS)
        return f"[P{player}] Field: {action} ({dice_to_string(ROW_DICE[row])} {column})"

    def __str__(self) -> str:
        lines = [
            f"Current player: {self._round.roller}",
            f"Phase: {self._round.phase.value}",
            f"Dice: {dice_to_string(self._round.dice)}",
            f"Roll: {self._round.outcome}",
        ]
        for sheet in self._sheets:
            lines.append(sheet_to_string(sheet))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"QwintoState(roller={self._round.roller}, phase={self._round.phase.value}, "
            f"dice={int(self._round.dice)}, outcome={self._round.outcome}, "
            f"rolls_used={self._round.rolls_used})"
        )
