"""
Mastery classification.

A policy layered on top of the memory model: once a card is judged
durable it leaves the active review pool.
"""

from __future__ import annotations

from typing import Optional

from srs_core.fsrs.config import MasteryPolicy
from srs_core.fsrs.constants import Grade
from srs_core.fsrs.memory_state import CardScheduleState


def is_mastered(
    new_state: CardScheduleState,
    grade: Grade,
    policy: Optional[MasteryPolicy] = None,
) -> bool:
    """
    Decide whether a freshly scheduled card counts as mastered.

    Mastered when either:
    1. stability >= policy.stability_threshold (memory is very stable), or
    2. repetitions >= policy.repetitions_threshold and the grade that
       produced this state was not FORGOT

    Args:
        new_state: State returned by the scheduler for this review
        grade: Grade that produced `new_state`
        policy: Thresholds (defaults: 30 days, 5 repetitions)
    """
    policy = policy or MasteryPolicy()

    if new_state.stability >= policy.stability_threshold:
        return True

    return new_state.repetitions >= policy.repetitions_threshold and grade != Grade.FORGOT
