"""
Qwinto - Chance Outcomes

Probability of every dice sum for one, two or three D6, computed once at
import time by enumerating all face combinations. No randomness involved
except in sample_outcome().

Constants:
    SUM_COUNTS      - Dict: number of dice → {sum: number of face combinations}
    DISTRIBUTIONS   - Dict: number of dice → tuple of (sum, probability)
    MAX_CHANCE_OUTCOMES - Largest number of distinct sums (16, for three dice)
"""

import itertools
import random
from collections import Counter

from qwinto.engine.base import NUM_DICE, ContractViolation, Die

DIE_FACES = 6


def _sum_counts(num_dice: int) -> dict[int, int]:
    """Number of ordered face combinations producing each sum."""
    counts = Counter(
        sum(faces)
        for faces in itertools.product(range(1, DIE_FACES + 1), repeat=num_dice)
    )
    return dict(sorted(counts.items()))


SUM_COUNTS: dict[int, dict[int, int]] = {
    n: _sum_counts(n) for n in range(1, NUM_DICE + 1)
}

DISTRIBUTIONS: dict[int, tuple[tuple[int, float], ...]] = {
    n: tuple((total, count / DIE_FACES ** n) for total, count in counts.items())
    for n, counts in SUM_COUNTS.items()
}

MAX_CHANCE_OUTCOMES = max(len(outcomes) for outcomes in DISTRIBUTIONS.values())


def count_dice(dice: Die) -> int:
    """Number of dice in a selection."""
    return bin(int(dice)).count("1")


def outcomes_for(dice: Die) -> tuple[tuple[int, float], ...]:
    """
    Distribution of the sum rolled with the selected dice.

    Args:
        dice: Selected dice bitmask

    Returns:
        Tuple of (sum, probability), ascending by sum

    Raises:
        ContractViolation: If no dice (or an unknown bit) are selected
    """
    if int(dice) & ~int(Die.ORANGE | Die.YELLOW | Die.PURPLE):
        raise ContractViolation(f"Unknown dice bits in selection {int(dice)}")
    num_dice = count_dice(dice)
    if num_dice not in DISTRIBUTIONS:
        raise ContractViolation(f"Cannot roll {num_dice} dice")
    return DISTRIBUTIONS[num_dice]


def sample_outcome(dice: Die, rng: random.Random | None = None) -> int:
    """Draw a sum for the selected dice."""
    rng = rng or random
    outcomes = outcomes_for(dice)
    values = [total for total, _ in outcomes]
    weights = [probability for _, probability in outcomes]
    return rng.choices(values, weights=weights, k=1)[0]
