"""
Preview Generator

Shows, before a grade is chosen, when the card would come back for each
possible grade ("if you answer X, you'll see this again in Y").
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from srs_core.fsrs.config import SchedulerConfig
from srs_core.fsrs.constants import Grade
from srs_core.fsrs.memory_state import CardScheduleState
from srs_core.fsrs.scheduler import compute_review

MINUTES_PER_DAY = 24 * 60
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class IntervalPreview:
    """Interval a grade would produce, plus its display label."""
    scheduled_days: float
    label: str


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_interval(days: float) -> str:
    """
    Human-readable label for an interval in days.

    - < 1 day: minutes ("10m", never below "1m")
    - < 7 days: days ("3d")
    - < 30 days: weeks ("2w")
    - < 365 days: 30-day months ("4mo")
    - otherwise: years ("1y")

    Each unit is rounded to the nearest whole number.

    Raises:
        ValueError: for negative or non-finite input
    """
    if isinstance(days, bool) or not isinstance(days, (int, float)) or not math.isfinite(days):
        raise ValueError(f"Interval must be a finite number of days, got {days!r}")
    if days < 0:
        raise ValueError(f"Interval must not be negative, got {days!r}")

    if days < 1:
        return f"{max(1, _round_half_up(days * MINUTES_PER_DAY))}m"
    if days < DAYS_PER_WEEK:
        return f"{_round_half_up(days)}d"
    if days < DAYS_PER_MONTH:
        return f"{_round_half_up(days / DAYS_PER_WEEK)}w"
    if days < DAYS_PER_YEAR:
        return f"{_round_half_up(days / DAYS_PER_MONTH)}mo"
    return f"{_round_half_up(days / DAYS_PER_YEAR)}y"


def preview_all_grades(
    card: CardScheduleState,
    now: datetime,
    config: Optional[SchedulerConfig] = None,
) -> dict[Grade, IntervalPreview]:
    """
    Compute the interval every grade would produce, without committing.

    Each entry equals what compute_review would return for that grade.
    `card` is immutable, so previewing can never alter a later review.

    Returns:
        Mapping of all four grades (FORGOT..EASY) to their preview

    Raises:
        InvalidCardStateError: if the card state is malformed
    """
    config = config or SchedulerConfig()
    previews: dict[Grade, IntervalPreview] = {}

    for grade in Grade:
        outcome = compute_review(card, grade, now, config)
        previews[grade] = IntervalPreview(
            scheduled_days=outcome.scheduled_days,
            label=format_interval(outcome.scheduled_days),
        )

    return previews
