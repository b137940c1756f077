"""
Metric computations for the learning dashboard.
"""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from srs_core.analytics.constants import IN_PROGRESS_PHASES, WEEKLY_WINDOW_DAYS
from srs_core.analytics.types import CardCounts
from srs_core.fsrs.constants import CardPhase
from srs_core.fsrs.memory_state import coerce_timestamp


def utc_day(now: datetime) -> pd.Timestamp:
    """
    Midnight (UTC) of the day containing `now`.
    """
    return pd.Timestamp(coerce_timestamp(now)).floor("D")


def compute_daily_activity(events_df: pd.DataFrame) -> pd.Series:
    """
    Review count per UTC day, active days only (heatmap input).
    """
    if events_df.empty:
        return pd.Series(dtype="int64")
    return events_df.groupby("day_utc").size().sort_index().astype("int64")


def compute_today_reviewed(events_df: pd.DataFrame, today: pd.Timestamp) -> int:
    """
    Number of reviews logged on `today` (a UTC day).
    """
    if events_df.empty:
        return 0
    return int((events_df["day_utc"] == today).sum())


def compute_streak_days(events_df: pd.DataFrame, today: pd.Timestamp) -> int:
    """
    Consecutive review days ending today or yesterday.

    A streak is still alive if the learner has not reviewed yet today but
    did yesterday.
    """
    if events_df.empty:
        return 0

    days = sorted(events_df["day_utc"].unique(), reverse=True)
    streak = 0
    cursor = today
    for day in days:
        gap = (cursor - pd.Timestamp(day)).days
        if gap in (0, 1):
            streak += 1
            cursor = pd.Timestamp(day)
        else:
            break
    return streak


def compute_weekly_progress(events_df: pd.DataFrame, today: pd.Timestamp) -> pd.Series:
    """
    Review count per UTC day for the last seven days, zero-filled.
    """
    day_index = pd.date_range(
        end=today, periods=WEEKLY_WINDOW_DAYS, freq="D"
    )
    if events_df.empty:
        return pd.Series(0, index=day_index, dtype="int64")

    counts = events_df.groupby("day_utc").size()
    counts.index = pd.DatetimeIndex(counts.index).as_unit(day_index.unit)
    return counts.reindex(day_index, fill_value=0).astype("int64")


def compute_card_counts(cards_df: pd.DataFrame) -> CardCounts:
    """
    Totals of mastered, in-progress and new cards.
    """
    if cards_df.empty:
        return CardCounts(total=0, mastered=0, learning=0, new=0)

    mastered = cards_df["is_mastered"].astype(bool)
    in_progress = cards_df["state"].isin(IN_PROGRESS_PHASES) & ~mastered
    new = cards_df["state"] == CardPhase.NEW.value

    return CardCounts(
        total=int(len(cards_df)),
        mastered=int(mastered.sum()),
        learning=int(in_progress.sum()),
        new=int(new.sum()),
    )
