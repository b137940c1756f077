"""
Constants for the learning dashboard.
"""

from __future__ import annotations

from typing import Final

from srs_core.fsrs.constants import CardPhase


ACTIVITY_WINDOW_DAYS: Final[int] = 365
WEEKLY_WINDOW_DAYS: Final[int] = 7
DEFAULT_DAILY_GOAL: Final[int] = 10

IN_PROGRESS_PHASES: Final[list[str]] = [
    CardPhase.LEARNING.value,
    CardPhase.REVIEW.value,
    CardPhase.RELEARNING.value,
]
