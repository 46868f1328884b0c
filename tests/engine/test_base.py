"""
Qwinto - Base Classes Tests

Tests for dataclasses, enums and turn markers.
"""

import pytest

from qwinto.engine.base import (
    ACTION_MISS,
    ACTION_SKIP,
    CHANCE_PLAYER_ID,
    NUM_CELLS,
    NUM_DISTINCT_ACTIONS,
    ROW_DICE,
    SHEET_SIZE,
    SIMULTANEOUS_PLAYER_ID,
    TERMINAL_PLAYER_ID,
    ChanceTurn,
    ContractViolation,
    Die,
    Phase,
    PlayerTurn,
    ReturnsType,
    RoundState,
    Scoresheet,
    SimultaneousTurn,
    TerminalTurn,
)


class TestDie:
    """Tests for Die flag."""

    def test_bit_values(self):
        assert Die.ORANGE == 1
        assert Die.PURPLE == 2
        assert Die.YELLOW == 4

    def test_row_order(self):
        assert ROW_DICE == (Die.ORANGE, Die.YELLOW, Die.PURPLE)

    def test_selection_combines(self):
        assert Die(7) == Die.ORANGE | Die.YELLOW | Die.PURPLE
        assert Die(5) & Die.YELLOW
        assert not Die(5) & Die.PURPLE


class TestEnums:
    """Tests for Phase and ReturnsType."""

    def test_phase_values(self):
        assert Phase.SELECT_DICE.value == "Select"
        assert Phase.ROLL_DICE.value == "Roll"
        assert Phase.SUBMIT_POINTS.value == "Submit"

    def test_returns_type_values(self):
        assert {r.value for r in ReturnsType} == {"win_loss", "point_difference", "total_points"}


class TestActionIds:
    """Reserved action ids sit right after the cells."""

    def test_miss_and_skip(self):
        assert ACTION_MISS == NUM_CELLS == 27
        assert ACTION_SKIP == 28
        assert NUM_DISTINCT_ACTIONS == 29

    def test_sheet_size(self):
        assert SHEET_SIZE == 28


class TestTurns:
    """Tests for turn markers."""

    def test_player_turn(self):
        assert PlayerTurn(3).player_id == 3

    def test_marker_ids(self):
        assert ChanceTurn().player_id == CHANCE_PLAYER_ID == -1
        assert SimultaneousTurn().player_id == SIMULTANEOUS_PLAYER_ID == -2
        assert TerminalTurn().player_id == TERMINAL_PLAYER_ID == -4

    def test_markers_compare_by_value(self):
        assert PlayerTurn(1) == PlayerTurn(1)
        assert PlayerTurn(1) != PlayerTurn(2)
        assert ChanceTurn() == ChanceTurn()


class TestScoresheet:
    """Tests for Scoresheet dataclass."""

    def test_empty(self):
        sheet = Scoresheet.empty()
        assert sheet.cells == (0,) * 27
        assert sheet.misses == 0

    def test_validation_cell_count(self):
        with pytest.raises(ValueError, match="exactly 27 cells"):
            Scoresheet(cells=(0,) * 26)

    def test_validation_cell_values(self):
        with pytest.raises(ValueError, match="Invalid value 19 in cell 0"):
            Scoresheet(cells=(19,) + (0,) * 26)

    def test_validation_misses(self):
        with pytest.raises(ValueError, match="cannot be positive"):
            Scoresheet(misses=5)

    def test_from_rows_pads(self):
        sheet = Scoresheet.from_rows(orange=(1, 2), yellow=(0, 5), purple=(0, 0, 9), misses=-5)
        assert sheet.row(0) == (1, 2, 0, 0, 0, 0, 0, 0, 0)
        assert sheet.cells[10] == 5
        assert sheet.cells[20] == 9
        assert sheet.misses == -5

    def test_from_rows_too_long(self):
        with pytest.raises(ValueError, match="Row has 10 cells"):
            Scoresheet.from_rows(orange=tuple(range(1, 11)))

    def test_row_invalid_index(self):
        with pytest.raises(ValueError, match="Row index must be 0-2"):
            Scoresheet.empty().row(3)

    def test_with_value_returns_new_sheet(self):
        sheet = Scoresheet.empty()
        updated = sheet.with_value(4, 7)
        assert updated.cells[4] == 7
        assert sheet.cells[4] == 0

    def test_with_value_never_overwrites(self):
        sheet = Scoresheet.empty().with_value(4, 7)
        with pytest.raises(ContractViolation, match="already holds 7"):
            sheet.with_value(4, 9)

    def test_with_miss(self):
        sheet = Scoresheet.empty().with_miss(-5).with_miss(-5)
        assert sheet.misses == -10

    def test_as_vector(self):
        sheet = Scoresheet.from_rows(orange=(3,), misses=-5)
        vector = sheet.as_vector()
        assert len(vector) == 28
        assert vector[0] == 3
        assert vector[-1] == -5

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Scoresheet.empty().misses = -5


class TestRoundState:
    """Tests for RoundState dataclass."""

    def test_defaults(self):
        state = RoundState()
        assert state.roller == 0
        assert state.dice == Die.NONE
        assert state.outcome == 0
        assert state.rolls_used == 0
        assert state.phase == Phase.SELECT_DICE
        assert not state.awaiting_chance

    @pytest.mark.parametrize("dice, expected", [(1, 1), (3, 2), (6, 2), (7, 3), (0, 0)])
    def test_num_dice(self, dice, expected):
        assert RoundState(dice=Die(dice)).num_dice == expected

    def test_next_round_resets_and_advances(self):
        state = RoundState(roller=2, dice=Die(7), outcome=12, rolls_used=2, phase=Phase.SUBMIT_POINTS)
        nxt = state.next_round(3)
        assert nxt == RoundState(roller=0)
