"""
Qwinto - Round Event Definitions

Event types and payloads recorded in a playthrough's history.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from qwinto.engine.base import (
    ACTION_ACCEPT,
    ACTION_MISS,
    ACTION_REROLL,
    ACTION_SKIP,
    CHANCE_PLAYER_ID,
    SIMULTANEOUS_PLAYER_ID,
    Phase,
    RoundState,
)


class RoundEvent(Enum):
    """Events that can occur during a round."""

    DICE_SELECTED = auto()
    DICE_ROLLED = auto()
    REROLL_REQUESTED = auto()
    OUTCOME_ACCEPTED = auto()
    POINTS_SUBMITTED = auto()


@dataclass(frozen=True)
class EventPayload:
    """
    One applied decision.

    Attributes:
        event: What happened
        player: Deciding player id (CHANCE_PLAYER_ID or SIMULTANEOUS_PLAYER_ID
                for non-player nodes)
        actions: The action applied, or one action per player for a submission
        roller: Roller of the round the decision belongs to
    """
    event: RoundEvent
    player: int
    actions: tuple[int, ...]
    roller: int


_ROLL_DECISIONS: dict[int, RoundEvent] = {
    ACTION_REROLL: RoundEvent.REROLL_REQUESTED,
    ACTION_ACCEPT: RoundEvent.OUTCOME_ACCEPTED,
}


def classify_action(round_state: RoundState, action: int) -> RoundEvent:
    """Determine the event a single (roller or chance) action produces."""
    if round_state.awaiting_chance:
        return RoundEvent.DICE_ROLLED
    if round_state.phase == Phase.SELECT_DICE:
        return RoundEvent.DICE_SELECTED
    if round_state.phase == Phase.ROLL_DICE and action in _ROLL_DECISIONS:
        return _ROLL_DECISIONS[action]
    raise ValueError(f"Action {action} has no event in phase {round_state.phase.value}")


def make_payload(round_state: RoundState, action: int) -> EventPayload:
    """Build the history entry for a single action."""
    event = classify_action(round_state, action)
    player = CHANCE_PLAYER_ID if event == RoundEvent.DICE_ROLLED else round_state.roller
    return EventPayload(event=event, player=player, actions=(action,), roller=round_state.roller)


def make_submission_payload(round_state: RoundState, actions: tuple[int, ...]) -> EventPayload:
    """Build the history entry for a SubmitPoints batch."""
    return EventPayload(
        event=RoundEvent.POINTS_SUBMITTED,
        player=SIMULTANEOUS_PLAYER_ID,
        actions=actions,
        roller=round_state.roller,
    )


def count_misses(history: Sequence[EventPayload], player: int) -> int:
    """How many times player took the miss penalty."""
    return sum(
        1 for entry in history
        if entry.event == RoundEvent.POINTS_SUBMITTED and entry.actions[player] == ACTION_MISS
    )


def count_skips(history: Sequence[EventPayload], player: int) -> int:
    """How many submissions player skipped."""
    return sum(
        1 for entry in history
        if entry.event == RoundEvent.POINTS_SUBMITTED and entry.actions[player] == ACTION_SKIP
    )
