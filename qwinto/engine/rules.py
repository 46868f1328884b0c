"""
Qwinto - Rules Engine

Legal moves, transitions and scoring for Qwinto. All methods are stateless
class methods that take immutable state and return new state.

Round structure:
    - SelectDice: the roller picks any non-empty set of the three colored dice
    - RollDice: the dice are rolled; the roller may re-roll while the roll
      budget lasts, then accepts the sum
    - SubmitPoints: every player at once writes the sum into a legal cell of
      a row matching a rolled color. Other players may skip; the roller may
      instead take a miss penalty
    - The next player in turn order becomes the roller

Placement rules:
    - The cell is empty
    - Values in a row strictly increase left to right (gaps allowed)
    - A value appears at most once per column (see columns.py)

Scoring:
    - Full row: value of its last cell; otherwise one point per filled cell
    - Complete triple column: value of that column's bonus cell
    - Plus the miss accumulator
"""

import logging
from typing import ClassVar, Sequence

from qwinto.engine.base import (
    ACTION_ACCEPT,
    ACTION_MISS,
    ACTION_REROLL,
    ACTION_SKIP,
    NUM_CELLS,
    NUM_DICE,
    NUM_FIELDS,
    MAX_OUTCOME,
    ContractViolation,
    Die,
    JointResolution,
    Phase,
    ReturnsType,
    RoundState,
    Scoresheet,
)
from qwinto.engine.chance import outcomes_for
from qwinto.engine.columns import BONUS_CELLS, COLUMN_GROUPS, die_of, group_of, row_of
from qwinto.engine.params import GameConfig

logger = logging.getLogger(__name__)


class QwintoEngine:
    """
    Stateless engine for Qwinto.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    # Every non-empty subset of the three dice, ascending
    SELECTIONS: ClassVar[tuple[int, ...]] = tuple(range(1, int(Die.ORANGE | Die.YELLOW | Die.PURPLE) + 1))

    # Three full rows ending in 18 plus the best bonus cell of each triple column
    MAX_POINTS: ClassVar[int] = NUM_DICE * MAX_OUTCOME + 12 + 11 + 14 + 16 + 18

    # =========================================================================
    # PLACEMENT
    # =========================================================================

    @classmethod
    def row_allows(cls, sheet: Scoresheet, cell: int, value: int) -> bool:
        """True if writing value into cell keeps its row strictly increasing."""
        row = sheet.row(row_of(cell))
        offset = cell % NUM_FIELDS
        left = row[:offset]
        right = row[offset + 1:]
        return all(v < value for v in left) and all(v == 0 or v > value for v in right)

    @classmethod
    def column_allows(cls, sheet: Scoresheet, cell: int, value: int) -> bool:
        """True if no other cell in the column of cell already holds value."""
        return all(sheet.cells[other] != value for other in group_of(cell) if other != cell)

    @classmethod
    def is_legal_cell(cls, sheet: Scoresheet, cell: int, dice: Die, value: int) -> bool:
        """
        Check whether value may be written into cell.

        Args:
            sheet: The player's sheet
            cell: Cell index (0-26)
            dice: Dice selected this round; only their rows are eligible
            value: Rolled sum

        Returns:
            True if the cell is empty and both row and column rules hold
        """
        if not (die_of(cell) & dice):
            return False
        if sheet.is_filled(cell):
            return False
        return cls.row_allows(sheet, cell, value) and cls.column_allows(sheet, cell, value)

    @classmethod
    def legal_cells(cls, sheet: Scoresheet, dice: Die, value: int) -> list[int]:
        """All cells value may be written into, ascending."""
        return [cell for cell in range(NUM_CELLS) if cls.is_legal_cell(sheet, cell, dice, value)]

    @classmethod
    def legal_submissions(cls, round_state: RoundState, sheet: Scoresheet, player: int) -> list[int]:
        """
        Legal SubmitPoints actions for one player.

        The roller can always miss; everyone else can always skip.
        """
        actions = cls.legal_cells(sheet, round_state.dice, round_state.outcome)
        actions.append(ACTION_MISS if player == round_state.roller else ACTION_SKIP)
        return sorted(actions)

    # =========================================================================
    # LEGAL ACTIONS
    # =========================================================================

    @classmethod
    def legal_actions(
        cls,
        config: GameConfig,
        round_state: RoundState,
        sheets: Sequence[Scoresheet],
        player: int,
    ) -> list[int]:
        """
        Legal actions for a player at a decision node.

        Args:
            config: Game configuration
            round_state: Current round
            sheets: Every player's sheet
            player: Player index

        Returns:
            Sorted action ids; empty when the player has no decision to make
        """
        if not (0 <= player < config.num_players):
            raise ContractViolation(f"Player {player} is out of range for {config.num_players} players")

        if round_state.awaiting_chance:
            return []

        if round_state.phase == Phase.SUBMIT_POINTS:
            return cls.legal_submissions(round_state, sheets[player], player)

        if player != round_state.roller:
            return []

        if round_state.phase == Phase.SELECT_DICE:
            return list(cls.SELECTIONS)

        actions = []
        if round_state.rolls_used < config.num_dice_rolls:
            actions.append(ACTION_REROLL)
        actions.append(ACTION_ACCEPT)
        return actions

    @classmethod
    def legal_outcomes(cls, round_state: RoundState) -> list[int]:
        """Sums that can be rolled with the selected dice."""
        if not round_state.awaiting_chance:
            raise ContractViolation("No roll is pending")
        return [total for total, _ in outcomes_for(round_state.dice)]

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    @classmethod
    def select_dice(cls, round_state: RoundState, action: int) -> RoundState:
        """Apply the roller's dice selection; the first roll becomes pending."""
        if round_state.phase != Phase.SELECT_DICE or round_state.awaiting_chance:
            raise ContractViolation(f"Cannot select dice in phase {round_state.phase.value}")
        if action not in cls.SELECTIONS:
            raise ContractViolation(f"Invalid dice selection {action}")

        logger.debug("Player %d selected dice %d", round_state.roller, action)
        return RoundState(
            roller=round_state.roller,
            dice=Die(action),
            outcome=0,
            rolls_used=1,
            phase=Phase.ROLL_DICE,
            awaiting_chance=True,
        )

    @classmethod
    def apply_outcome(cls, round_state: RoundState, outcome: int) -> RoundState:
        """Record a rolled sum; the roller decides next."""
        if outcome not in cls.legal_outcomes(round_state):
            raise ContractViolation(
                f"Outcome {outcome} cannot be rolled with dice {int(round_state.dice)}"
            )

        logger.debug("Rolled %d with dice %d", outcome, round_state.dice)
        return RoundState(
            roller=round_state.roller,
            dice=round_state.dice,
            outcome=outcome,
            rolls_used=round_state.rolls_used,
            phase=Phase.ROLL_DICE,
            awaiting_chance=False,
        )

    @classmethod
    def decide_roll(cls, config: GameConfig, round_state: RoundState, action: int) -> RoundState:
        """Apply the roller's re-roll or accept decision."""
        if round_state.phase != Phase.ROLL_DICE or round_state.awaiting_chance:
            raise ContractViolation(f"Cannot decide on a roll in phase {round_state.phase.value}")

        if action == ACTION_REROLL:
            if round_state.rolls_used >= config.num_dice_rolls:
                raise ContractViolation(f"Roll budget of {config.num_dice_rolls} is exhausted")
            logger.debug("Player %d re-rolls", round_state.roller)
            return RoundState(
                roller=round_state.roller,
                dice=round_state.dice,
                outcome=round_state.outcome,
                rolls_used=round_state.rolls_used + 1,
                phase=Phase.ROLL_DICE,
                awaiting_chance=True,
            )

        if action == ACTION_ACCEPT:
            logger.debug("Player %d accepts %d", round_state.roller, round_state.outcome)
            return RoundState(
                roller=round_state.roller,
                dice=round_state.dice,
                outcome=round_state.outcome,
                rolls_used=round_state.rolls_used,
                phase=Phase.SUBMIT_POINTS,
                awaiting_chance=False,
            )

        raise ContractViolation(f"Invalid roll decision {action}")

    @classmethod
    def resolve_submissions(
        cls,
        config: GameConfig,
        round_state: RoundState,
        sheets: Sequence[Scoresheet],
        actions: Sequence[int],
    ) -> JointResolution:
        """
        Validate and apply one SubmitPoints action per player.

        Every action is checked against the sheets as they were before the
        batch; nothing is applied unless all of them are legal.

        Args:
            config: Game configuration
            round_state: Current round, in SubmitPoints
            sheets: Every player's sheet
            actions: One action per player, in player order

        Returns:
            JointResolution holding the updated sheets

        Raises:
            ContractViolation: On wrong phase, wrong arity or any illegal action
        """
        if round_state.phase != Phase.SUBMIT_POINTS:
            raise ContractViolation(f"Cannot submit points in phase {round_state.phase.value}")
        if len(actions) != config.num_players:
            raise ContractViolation(
                f"Expected {config.num_players} actions, got {len(actions)}"
            )

        for player, action in enumerate(actions):
            if action == ACTION_SKIP and player == round_state.roller:
                raise ContractViolation(f"Roller {player} cannot skip")
            if action == ACTION_MISS and player != round_state.roller:
                raise ContractViolation(f"Player {player} cannot miss; only the roller can")
            if action not in cls.legal_submissions(round_state, sheets[player], player):
                raise ContractViolation(
                    f"Player {player} cannot write {round_state.outcome} into cell {action}"
                )

        new_sheets = []
        placements = []
        missed = []
        skipped = []
        for player, (sheet, action) in enumerate(zip(sheets, actions)):
            if action == ACTION_SKIP:
                skipped.append(player)
                new_sheets.append(sheet)
            elif action == ACTION_MISS:
                missed.append(player)
                new_sheets.append(sheet.with_miss(config.miss_points))
            else:
                placements.append((player, action))
                new_sheets.append(sheet.with_value(action, round_state.outcome))

        logger.debug(
            "Resolved %d: placed=%s missed=%s skipped=%s",
            round_state.outcome, placements, missed, skipped,
        )
        return JointResolution(
            sheets=tuple(new_sheets),
            placements=tuple(placements),
            missed=tuple(missed),
            skipped=tuple(skipped),
        )

    # =========================================================================
    # SCORING
    # =========================================================================

    @classmethod
    def row_score(cls, sheet: Scoresheet, row_index: int) -> int:
        """
        Score one row.

        A full row scores the value in its last cell; otherwise each filled
        cell scores one point.
        """
        row = sheet.row(row_index)
        filled = sum(1 for v in row if v > 0)
        if filled == NUM_FIELDS:
            return row[-1]
        return filled

    @classmethod
    def column_bonus(cls, sheet: Scoresheet) -> int:
        """Sum of bonus cells over every complete triple column."""
        return sum(
            sheet.cells[bonus_cell]
            for members, bonus_cell in BONUS_CELLS.items()
            if all(sheet.is_filled(cell) for cell in members)
        )

    @classmethod
    def total_score(cls, sheet: Scoresheet) -> int:
        """Final score of a sheet: rows, column bonuses and misses."""
        rows = sum(cls.row_score(sheet, r) for r in range(NUM_DICE))
        return rows + cls.column_bonus(sheet) + sheet.misses

    @classmethod
    def is_game_over(cls, config: GameConfig, sheets: Sequence[Scoresheet]) -> bool:
        """True once any miss accumulator reaches the termination threshold."""
        return any(sheet.misses <= config.termination_points for sheet in sheets)

    @classmethod
    def returns(cls, config: GameConfig, sheets: Sequence[Scoresheet]) -> list[float]:
        """
        Per-player returns.

        Zero for everyone until the game is over, then according to the
        configured ReturnsType:
            - total_points: each player's score
            - point_difference: score minus the average score
            - win_loss: +1 split among top scorers, -1 split among bottom scorers
        """
        if not cls.is_game_over(config, sheets):
            return [0.0] * len(sheets)

        scores = [cls.total_score(sheet) for sheet in sheets]

        if config.returns_type == ReturnsType.TOTAL_POINTS:
            return [float(s) for s in scores]

        if config.returns_type == ReturnsType.POINT_DIFFERENCE:
            average = sum(scores) / len(scores)
            return [s - average for s in scores]

        best = max(scores)
        worst = min(scores)
        winners = [p for p, s in enumerate(scores) if s == best]
        losers = [p for p, s in enumerate(scores) if s == worst]
        returns = [0.0] * len(scores)
        for p in winners:
            returns[p] += 1.0 / len(winners)
        for p in losers:
            returns[p] -= 1.0 / len(losers)
        return returns

    # =========================================================================
    # INVARIANTS
    # =========================================================================

    @classmethod
    def row_is_increasing(cls, sheet: Scoresheet, row_index: int) -> bool:
        """True if the filled cells of a row strictly increase left to right."""
        filled = [v for v in sheet.row(row_index) if v > 0]
        return all(a < b for a, b in zip(filled, filled[1:]))

    @classmethod
    def columns_are_unique(cls, sheet: Scoresheet) -> bool:
        """True if no column holds the same value twice."""
        for members in COLUMN_GROUPS:
            values = [sheet.cells[cell] for cell in members if sheet.is_filled(cell)]
            if len(values) != len(set(values)):
                return False
        return True
