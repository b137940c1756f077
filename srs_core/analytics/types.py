"""
Types for the learning dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class CardCounts:
    """Card totals by lifecycle bucket."""
    total: int
    mastered: int
    learning: int  # LEARNING/REVIEW/RELEARNING and not mastered
    new: int


@dataclass(frozen=True)
class LearningStats:
    """
    Precomputed KPIs and series for one user's dashboard.
    """
    cards: CardCounts
    today_reviewed: int
    today_target: int
    streak_days: int
    weekly_progress: pd.Series  # review count per UTC day, last 7 days
