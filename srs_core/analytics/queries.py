"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import pandas as pd
from sqlalchemy.orm import Session

from srs_core.fsrs import database


def load_review_events_df(
    session: Session,
    user_id: str,
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
) -> pd.DataFrame:
    """
    Load a user's review log into a dataframe with a UTC day column.
    """
    rows = database.get_review_log(session, user_id, since=since, until=until)
    if not rows:
        return pd.DataFrame(columns=["card_id", "grade", "timestamp", "day_utc"])

    df = pd.DataFrame(rows).rename(columns={"reviewed_at": "timestamp"})
    df = df[["card_id", "grade", "timestamp"]].copy()
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, errors="coerce")
    df = df.dropna(subset=["card_id", "timestamp"])
    df["day_utc"] = df["timestamp"].dt.floor("D")
    df = df.sort_values("timestamp").reset_index(drop=True)
    return df


def load_cards_df(session: Session, user_id: str) -> pd.DataFrame:
    """
    Load phase and mastery flag of every card a user owns.
    """
    rows = database.get_card_rows(session, user_id)
    if not rows:
        return pd.DataFrame(columns=["card_id", "state", "is_mastered"])
    return pd.DataFrame(rows)
