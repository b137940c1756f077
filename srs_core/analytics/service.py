"""
Service layer to assemble the learning dashboard.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pandas as pd
from sqlalchemy.orm import Session

from srs_core.analytics.constants import ACTIVITY_WINDOW_DAYS, DEFAULT_DAILY_GOAL
from srs_core.analytics.metrics import (
    compute_card_counts,
    compute_daily_activity,
    compute_streak_days,
    compute_today_reviewed,
    compute_weekly_progress,
    utc_day,
)
from srs_core.analytics.queries import load_cards_df, load_review_events_df
from srs_core.analytics.types import LearningStats


def get_yearly_activity(session: Session, user_id: str, now: datetime) -> pd.DataFrame:
    """
    Review counts per day over the past year, for the activity heatmap.

    Returns:
        DataFrame with columns `date` (YYYY-MM-DD) and `count`, active days only
    """
    since = now - timedelta(days=ACTIVITY_WINDOW_DAYS)
    events_df = load_review_events_df(session, user_id, since=since, until=now)
    daily = compute_daily_activity(events_df)
    if daily.empty:
        return pd.DataFrame(columns=["date", "count"])

    return pd.DataFrame({
        "date": daily.index.strftime("%Y-%m-%d"),
        "count": daily.to_numpy(),
    })


def build_learning_stats(
    session: Session,
    user_id: str,
    now: datetime,
    daily_goal: int = DEFAULT_DAILY_GOAL,
) -> LearningStats:
    """
    Build all KPI values and series needed by the dashboard.

    Reviews logged after `now` are ignored.
    """
    today = utc_day(now)
    events_df = load_review_events_df(session, user_id, until=now)
    cards_df = load_cards_df(session, user_id)

    return LearningStats(
        cards=compute_card_counts(cards_df),
        today_reviewed=compute_today_reviewed(events_df, today),
        today_target=daily_goal,
        streak_days=compute_streak_days(events_df, today),
        weekly_progress=compute_weekly_progress(events_df, today),
    )
