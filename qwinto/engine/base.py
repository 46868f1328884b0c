"""
Qwinto - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Scoresheets and round state are immutable (frozen dataclasses)
so a state can be branched by copying references instead of buffers.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, IntFlag


# Board geometry
NUM_DICE = 3
NUM_FIELDS = 9
NUM_CELLS = NUM_DICE * NUM_FIELDS
SHEET_SIZE = NUM_CELLS + 1  # 27 cells followed by the miss accumulator

# Largest possible sum of three D6
MAX_OUTCOME = 18

# Action ids in the RollDice phase
ACTION_REROLL = 0
ACTION_ACCEPT = 1

# Reserved action ids in the SubmitPoints phase
ACTION_MISS = NUM_CELLS
ACTION_SKIP = NUM_CELLS + 1
NUM_DISTINCT_ACTIONS = NUM_CELLS + 2

# Player ids for non-player nodes
CHANCE_PLAYER_ID = -1
SIMULTANEOUS_PLAYER_ID = -2
TERMINAL_PLAYER_ID = -4

DEFAULT_NUM_PLAYERS = 1
DEFAULT_MISS_POINTS = -5
DEFAULT_TERMINATION_POINTS = -20
DEFAULT_NUM_DICE_ROLLS = 2
MIN_PLAYERS = 1
MAX_PLAYERS = 10


class ContractViolation(RuntimeError):
    """An orchestrator broke the engine's calling contract.

    Raised for illegal actions, wrong-phase calls and malformed joint
    actions. Never caught inside the engine.
    """


class Die(IntFlag):
    """Colored dice; a selection is the bitwise OR of its members."""
    NONE = 0
    ORANGE = 1
    PURPLE = 2
    YELLOW = 4


# Row order on the scoresheet
ROW_DICE = (Die.ORANGE, Die.YELLOW, Die.PURPLE)


class Phase(Enum):
    """Phases of a single round."""
    SELECT_DICE = "Select"
    ROLL_DICE = "Roll"
    SUBMIT_POINTS = "Submit"


class ReturnsType(Enum):
    """How terminal scores are turned into returns."""
    WIN_LOSS = "win_loss"
    POINT_DIFFERENCE = "point_difference"
    TOTAL_POINTS = "total_points"


# =============================================================================
# WHOSE TURN
# =============================================================================

@dataclass(frozen=True)
class PlayerTurn:
    """A single player (the roller) decides."""
    player: int

    @property
    def player_id(self) -> int:
        return self.player


@dataclass(frozen=True)
class ChanceTurn:
    """The dice are rolled."""

    @property
    def player_id(self) -> int:
        return CHANCE_PLAYER_ID


@dataclass(frozen=True)
class SimultaneousTurn:
    """Every player submits points at once."""

    @property
    def player_id(self) -> int:
        return SIMULTANEOUS_PLAYER_ID


@dataclass(frozen=True)
class TerminalTurn:
    """Nobody moves; the game is over."""

    @property
    def player_id(self) -> int:
        return TERMINAL_PLAYER_ID


Turn = PlayerTurn | ChanceTurn | SimultaneousTurn | TerminalTurn


# =============================================================================
# SCORESHEET & ROUND
# =============================================================================

@dataclass(frozen=True)
class Scoresheet:
    """
    One player's sheet.

    Attributes:
        cells: 27 cell values, row-major (Orange 0-8, Yellow 9-17,
               Purple 18-26); 0 means empty
        misses: Miss accumulator, 0 or negative
    """
    cells: tuple[int, ...] = field(default=(0,) * NUM_CELLS)
    misses: int = 0

    def __post_init__(self) -> None:
        """Validate sheet structure."""
        if len(self.cells) != NUM_CELLS:
            raise ValueError(f"Scoresheet must have exactly {NUM_CELLS} cells, got {len(self.cells)}")
        for i, value in enumerate(self.cells):
            if not (0 <= value <= MAX_OUTCOME):
                raise ValueError(f"Invalid value {value} in cell {i}")
        if self.misses > 0:
            raise ValueError(f"Miss accumulator cannot be positive, got {self.misses}")

    @classmethod
    def empty(cls) -> "Scoresheet":
        """Create an empty sheet."""
        return cls()

    @classmethod
    def from_rows(
        cls,
        orange: tuple[int, ...] = (),
        yellow: tuple[int, ...] = (),
        purple: tuple[int, ...] = (),
        misses: int = 0,
    ) -> "Scoresheet":
        """Build a sheet from (possibly short) rows, padding with empty cells."""
        cells: list[int] = []
        for row in (orange, yellow, purple):
            if len(row) > NUM_FIELDS:
                raise ValueError(f"Row has {len(row)} cells (max {NUM_FIELDS})")
            cells.extend(row)
            cells.extend([0] * (NUM_FIELDS - len(row)))
        return cls(cells=tuple(cells), misses=misses)

    def row(self, row_index: int) -> tuple[int, ...]:
        """Values of one row, left to right."""
        if not (0 <= row_index < NUM_DICE):
            raise ValueError(f"Row index must be 0-{NUM_DICE - 1}, got {row_index}")
        start = row_index * NUM_FIELDS
        return self.cells[start:start + NUM_FIELDS]

    def is_filled(self, cell: int) -> bool:
        return self.cells[cell] != 0

    def with_value(self, cell: int, value: int) -> "Scoresheet":
        """Return a new sheet with value written into an empty cell."""
        if self.is_filled(cell):
            raise ContractViolation(f"Cell {cell} already holds {self.cells[cell]}")
        cells = list(self.cells)
        cells[cell] = value
        return replace(self, cells=tuple(cells))

    def with_miss(self, points: int) -> "Scoresheet":
        """Return a new sheet with the miss penalty added."""
        return replace(self, misses=self.misses + points)

    def as_vector(self) -> tuple[int, ...]:
        """The 28 raw values used in observations: cells then misses."""
        return self.cells + (self.misses,)


@dataclass(frozen=True)
class RoundState:
    """
    State of the round in progress.

    Attributes:
        roller: Player selecting and rolling dice this round
        dice: Selected dice (Die.NONE until chosen)
        outcome: Current dice sum, 0 until rolled
        rolls_used: Rolls taken this round, first roll included
        phase: Current phase
        awaiting_chance: True while a roll is pending
    """
    roller: int = 0
    dice: Die = Die.NONE
    outcome: int = 0
    rolls_used: int = 0
    phase: Phase = Phase.SELECT_DICE
    awaiting_chance: bool = False

    @property
    def num_dice(self) -> int:
        """Number of selected dice."""
        return bin(int(self.dice)).count("1")

    def next_round(self, num_players: int) -> "RoundState":
        """Fresh round for the next roller."""
        return RoundState(roller=(self.roller + 1) % num_players)


@dataclass(frozen=True)
class JointResolution:
    """
    Outcome of a validated SubmitPoints batch.

    Only built once every player's action has been checked, so holding one
    means the whole batch is legal.

    Attributes:
        sheets: Every player's sheet after the batch
        placements: (player, cell) pairs that were written
        missed: Players charged the miss penalty
        skipped: Players who skipped
    """
    sheets: tuple[Scoresheet, ...]
    placements: tuple[tuple[int, int], ...]
    missed: tuple[int, ...]
    skipped: tuple[int, ...]
