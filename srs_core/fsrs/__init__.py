"""
FSRS - Free Spaced Repetition Scheduler

Review scheduling engine for the flashcard application.

This package implements:
- Power-law forgetting curve: R = (1 + Δt / (9·S))^-1
- Grade-dependent stability and difficulty updates
- Interval selection targeting a desired retention
- Mastery classification and per-grade interval previews

Quick start:
    from datetime import datetime, timezone
    from srs_core import fsrs

    now = datetime.now(timezone.utc)
    card = fsrs.initial_state(now)

    # Show the learner what each answer would do
    previews = fsrs.preview_all_grades(card, now)

    # Process a review (algorithm only, no DB calls)
    outcome = fsrs.compute_review(card, fsrs.Grade.GOOD, now)
    mastered = fsrs.is_mastered(outcome.state, fsrs.Grade.GOOD)
"""

# Core scheduler API (algorithm logic)
from srs_core.fsrs.scheduler import ReviewOutcome, compute_review, next_phase
from srs_core.fsrs.preview import IntervalPreview, format_interval, preview_all_grades
from srs_core.fsrs.mastery import is_mastered
from srs_core.fsrs.service import Scheduler

# Configuration
from srs_core.fsrs.config import MasteryPolicy, SchedulerConfig, load_config

# Errors
from srs_core.fsrs.errors import (
    CardNotFoundError,
    InvalidCardStateError,
    SrsError,
    StaleCardStateError,
)

# Constants and parameters
from srs_core.fsrs.constants import (
    CardPhase,
    Grade,
    DEFAULT_DESIRED_RETENTION,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_WEIGHTS,
    INITIAL_DIFFICULTY_SEED,
    INITIAL_STABILITY_SEED,
    S_MIN,
    D_MIN,
    D_MAX,
)

# Memory state (for advanced usage)
from srs_core.fsrs.memory_state import (
    CardScheduleState,
    calculate_retrievability,
    initial_state,
    interval_for_retention,
)


__all__ = [
    # Core algorithm
    "compute_review",
    "next_phase",
    "ReviewOutcome",
    "preview_all_grades",
    "format_interval",
    "IntervalPreview",
    "is_mastered",
    "Scheduler",

    # Configuration
    "SchedulerConfig",
    "MasteryPolicy",
    "load_config",

    # Errors
    "SrsError",
    "InvalidCardStateError",
    "CardNotFoundError",
    "StaleCardStateError",

    # Enums
    "Grade",
    "CardPhase",

    # Memory state
    "CardScheduleState",
    "calculate_retrievability",
    "initial_state",
    "interval_for_retention",

    # Parameters
    "DEFAULT_DESIRED_RETENTION",
    "DEFAULT_MAXIMUM_INTERVAL",
    "DEFAULT_WEIGHTS",
    "INITIAL_STABILITY_SEED",
    "INITIAL_DIFFICULTY_SEED",
    "S_MIN",
    "D_MIN",
    "D_MAX",
]
