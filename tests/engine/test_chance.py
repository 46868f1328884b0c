"""
Tests for dice sum distributions.
"""

import random

import pytest

from qwinto.engine.base import ContractViolation, Die
from qwinto.engine.chance import (
    DISTRIBUTIONS,
    MAX_CHANCE_OUTCOMES,
    SUM_COUNTS,
    count_dice,
    outcomes_for,
    sample_outcome,
)


class TestDistributions:
    """Exact dice sum tables."""

    def test_one_die(self):
        assert SUM_COUNTS[1] == {v: 1 for v in range(1, 7)}

    def test_two_dice(self):
        counts = [1, 2, 3, 4, 5, 6, 5, 4, 3, 2, 1]
        assert SUM_COUNTS[2] == dict(zip(range(2, 13), counts))

    def test_three_dice(self):
        counts = [1, 3, 6, 10, 15, 21, 25, 27, 27, 25, 21, 15, 10, 6, 3, 1]
        assert SUM_COUNTS[3] == dict(zip(range(3, 19), counts))

    @pytest.mark.parametrize("num_dice", [1, 2, 3])
    def test_probabilities_sum_to_one(self, num_dice):
        total = sum(p for _, p in DISTRIBUTIONS[num_dice])
        assert abs(total - 1.0) <= 1e-9

    def test_two_dice_seven(self):
        assert dict(DISTRIBUTIONS[2])[7] == pytest.approx(6 / 36)

    def test_max_chance_outcomes(self):
        assert MAX_CHANCE_OUTCOMES == 16


class TestOutcomesFor:
    """Lookup by dice selection."""

    @pytest.mark.parametrize("dice, num_dice", [
        (Die.ORANGE, 1), (Die.YELLOW, 1), (Die.PURPLE, 1),
        (Die.ORANGE | Die.PURPLE, 2), (Die.YELLOW | Die.PURPLE, 2),
        (Die.ORANGE | Die.YELLOW | Die.PURPLE, 3),
    ])
    def test_uses_die_count(self, dice, num_dice):
        assert count_dice(dice) == num_dice
        assert outcomes_for(dice) == DISTRIBUTIONS[num_dice]

    def test_no_dice(self):
        with pytest.raises(ContractViolation, match="Cannot roll 0 dice"):
            outcomes_for(Die.NONE)

    def test_unknown_bits(self):
        with pytest.raises(ContractViolation, match="Unknown dice bits"):
            outcomes_for(Die(8))


class TestSampleOutcome:
    """Random draws."""

    def test_range_one_die(self):
        rng = random.Random(0)
        values = {sample_outcome(Die.YELLOW, rng) for _ in range(300)}
        assert values == {1, 2, 3, 4, 5, 6}

    def test_range_three_dice(self):
        rng = random.Random(1)
        for _ in range(300):
            assert 3 <= sample_outcome(Die(7), rng) <= 18

    def test_reproducible(self):
        a = [sample_outcome(Die(3), random.Random(42)) for _ in range(5)]
        b = [sample_outcome(Die(3), random.Random(42)) for _ in range(5)]
        assert a == b
