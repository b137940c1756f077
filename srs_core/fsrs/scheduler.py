"""
Scheduler - FSRS Algorithm Logic

Pure scheduling and state updates (no database calls).

Main workflow:
1. Load card state (caller's responsibility)
2. Measure elapsed time and retrievability
3. Apply the memory model (initial path on a first review)
4. Invert the forgetting curve to get the next interval
5. Return the new state + interval as a ReviewOutcome

Persisting the new state and appending the review log is the caller's job
(see srs_core.fsrs.database).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from srs_core.fsrs import memory_model, memory_state
from srs_core.fsrs.config import SchedulerConfig
from srs_core.fsrs.constants import CardPhase, Grade
from srs_core.fsrs.errors import InvalidCardStateError
from srs_core.fsrs.memory_state import CardScheduleState

logger = logging.getLogger(__name__)


# Phase transitions: (from phase, grade was FORGOT) -> to phase
_TRANSITIONS: dict[tuple[CardPhase, bool], CardPhase] = {
    (CardPhase.NEW, True): CardPhase.LEARNING,
    (CardPhase.NEW, False): CardPhase.LEARNING,
    (CardPhase.LEARNING, True): CardPhase.RELEARNING,
    (CardPhase.LEARNING, False): CardPhase.REVIEW,
    (CardPhase.REVIEW, True): CardPhase.RELEARNING,
    (CardPhase.REVIEW, False): CardPhase.REVIEW,
    (CardPhase.RELEARNING, True): CardPhase.RELEARNING,
    (CardPhase.RELEARNING, False): CardPhase.REVIEW,
}


@dataclass(frozen=True)
class ReviewOutcome:
    """
    Result of scheduling one review.

    `scheduled_days` is the interval used to compute `state.due`.
    `elapsed_days` and `retrievability` describe the card at review time
    (retrievability is None on a first review).
    """
    state: CardScheduleState
    scheduled_days: float
    grade: Grade
    elapsed_days: float
    retrievability: Optional[float]


def next_phase(current: CardPhase, grade: Grade) -> CardPhase:
    """Lifecycle transition for one review."""
    return _TRANSITIONS[(current, grade == Grade.FORGOT)]


def _coerce_grade(grade: Grade) -> Grade:
    if isinstance(grade, Grade):
        return grade
    try:
        return Grade(grade)
    except ValueError as e:
        raise InvalidCardStateError(f"Unknown grade: {grade!r}") from e


def compute_review(
    card: CardScheduleState,
    grade: Grade,
    now: datetime,
    config: Optional[SchedulerConfig] = None,
) -> ReviewOutcome:
    """
    Process a review and return the new card state.

    This is the only state-transition entry point. No database calls,
    and `card` itself is never modified.

    Args:
        card: Current state as loaded from the card store
        grade: Learner feedback (FORGOT, HARD, GOOD, EASY)
        now: Review timestamp
        config: Scheduling parameters (defaults if omitted)

    Returns:
        ReviewOutcome with the new state and its scheduled interval

    Raises:
        InvalidCardStateError: if the card state, grade or timestamp is malformed
    """
    config = config or SchedulerConfig()
    grade = _coerce_grade(grade)
    card = memory_state.validate_state(card)
    now = memory_state.coerce_timestamp(now)

    logger.debug(
        "Scheduling card: due=%s S=%.4f D=%.4f reps=%d lapses=%d state=%s grade=%s",
        card.due.isoformat(), card.stability, card.difficulty,
        card.repetitions, card.lapses, card.state.value, grade.value,
    )

    # Older card-store rows carry no review timestamp; fall back to due
    anchor = card.last_review or card.due
    elapsed = memory_state.elapsed_days_since(anchor, now)

    if card.is_first_review:
        retrievability = None
    else:
        retrievability = memory_state.calculate_retrievability(card.stability, elapsed)

    update = memory_model.apply_memory_update(
        stability=card.stability,
        difficulty=card.difficulty,
        retrievability=retrievability,
        grade=grade,
        weights=config.weights,
    )

    interval = memory_state.interval_for_retention(update.stability, config.desired_retention)
    scheduled_days = min(max(interval, 0.0), config.maximum_interval)

    if grade == Grade.FORGOT:
        repetitions, lapses = card.repetitions, card.lapses + 1
    else:
        repetitions, lapses = card.repetitions + 1, card.lapses

    new_card = CardScheduleState(
        due=now + timedelta(days=scheduled_days),
        stability=update.stability,
        difficulty=update.difficulty,
        repetitions=repetitions,
        state=next_phase(card.state, grade),
        lapses=lapses,
        last_review=now,
    )

    logger.debug(
        "Scheduled card: due=%s S=%.4f D=%.4f state=%s scheduled_days=%.4f",
        new_card.due.isoformat(), new_card.stability, new_card.difficulty,
        new_card.state.value, scheduled_days,
    )

    return ReviewOutcome(
        state=new_card,
        scheduled_days=scheduled_days,
        grade=grade,
        elapsed_days=elapsed,
        retrievability=retrievability,
    )
