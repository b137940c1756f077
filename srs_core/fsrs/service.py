"""
Scheduler service object.

Binds one SchedulerConfig so callers can construct it once and pass the
instance around instead of threading `config=` through every call.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from srs_core.fsrs import mastery, memory_state, preview, scheduler
from srs_core.fsrs.config import SchedulerConfig
from srs_core.fsrs.constants import Grade
from srs_core.fsrs.memory_state import CardScheduleState
from srs_core.fsrs.preview import IntervalPreview
from srs_core.fsrs.scheduler import ReviewOutcome


class Scheduler:
    """Stateless apart from its immutable configuration; safe to share."""

    def __init__(self, config: Optional[SchedulerConfig] = None):
        self.config = config or SchedulerConfig()

    def initial_state(self, now: datetime) -> CardScheduleState:
        return memory_state.initial_state(now)

    def compute_review(
        self,
        card: CardScheduleState,
        grade: Grade,
        now: datetime,
    ) -> ReviewOutcome:
        return scheduler.compute_review(card, grade, now, self.config)

    def preview_all_grades(
        self,
        card: CardScheduleState,
        now: datetime,
    ) -> dict[Grade, IntervalPreview]:
        return preview.preview_all_grades(card, now, self.config)

    def is_mastered(self, new_state: CardScheduleState, grade: Grade) -> bool:
        return mastery.is_mastered(new_state, grade, self.config.mastery)

    def __repr__(self) -> str:
        return (
            f"<Scheduler(retention={self.config.desired_retention}, "
            f"max_interval={self.config.maximum_interval})>"
        )
