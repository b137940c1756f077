from datetime import timedelta

import pandas as pd
import pytest

from srs_core.analytics import build_learning_stats, get_yearly_activity
from srs_core.analytics.metrics import (
    compute_card_counts,
    compute_daily_activity,
    compute_streak_days,
    compute_today_reviewed,
    compute_weekly_progress,
    utc_day,
)
from srs_core.fsrs import database
from srs_core.fsrs.constants import Grade


def _events(*timestamps):
    df = pd.DataFrame({
        "card_id": [f"c{i}" for i in range(len(timestamps))],
        "timestamp": pd.to_datetime(list(timestamps), utc=True),
    })
    df["day_utc"] = df["timestamp"].dt.floor("D")
    return df


@pytest.fixture
def today(now):
    return utc_day(now)


def test_utc_day(now):
    assert utc_day(now) == pd.Timestamp("2026-03-14", tz="UTC")


def test_streak_counts_consecutive_days(today):
    events = _events(
        "2026-03-14 08:00", "2026-03-14 09:00", "2026-03-13 22:00",
        "2026-03-12 07:00", "2026-03-09 07:00",
    )
    assert compute_streak_days(events, today) == 3


def test_streak_survives_until_today_is_over(today):
    events = _events("2026-03-13 10:00", "2026-03-12 10:00")
    assert compute_streak_days(events, today) == 2


def test_streak_broken(today):
    assert compute_streak_days(_events("2026-03-11 10:00"), today) == 0
    assert compute_streak_days(_events(), today) == 0


def test_today_reviewed(today):
    events = _events("2026-03-14 01:00", "2026-03-14 23:59", "2026-03-13 23:59")
    assert compute_today_reviewed(events, today) == 2


def test_weekly_progress_is_zero_filled(today):
    events = _events("2026-03-14 01:00", "2026-03-14 02:00", "2026-03-10 12:00", "2026-03-01 12:00")
    weekly = compute_weekly_progress(events, today)

    assert len(weekly) == 7
    assert weekly.index[-1] == today
    assert weekly.tolist() == [0, 0, 1, 0, 0, 0, 2]


def test_daily_activity(today):
    events = _events("2026-03-14 01:00", "2026-03-14 02:00", "2026-03-10 12:00")
    daily = compute_daily_activity(events)
    assert daily.tolist() == [1, 2]


def test_card_counts():
    cards = pd.DataFrame([
        {"card_id": "a", "state": "new", "is_mastered": False},
        {"card_id": "b", "state": "learning", "is_mastered": False},
        {"card_id": "c", "state": "review", "is_mastered": True},
        {"card_id": "d", "state": "relearning", "is_mastered": False},
    ])
    counts = compute_card_counts(cards)
    assert (counts.total, counts.mastered, counts.learning, counts.new) == (4, 1, 2, 1)


@pytest.mark.parametrize("state", ["learning", "review", "relearning"])
def test_card_counts_treat_relearning_as_in_progress(state):
    cards = pd.DataFrame([{"card_id": "a", "state": state, "is_mastered": False}])
    counts = compute_card_counts(cards)
    assert (counts.learning, counts.new, counts.mastered) == (1, 0, 0)


def test_mastered_relearning_card_is_counted_once():
    cards = pd.DataFrame([{"card_id": "a", "state": "relearning", "is_mastered": True}])
    counts = compute_card_counts(cards)
    assert (counts.learning, counts.mastered) == (0, 1)


def test_learning_stats_from_store(session, now):
    database.create_card(session, "a", "user-1", now - timedelta(days=2))
    database.create_card(session, "b", "user-1", now - timedelta(days=2))
    database.create_card(session, "c", "user-1", now)
    session.commit()

    database.review_card(session, "a", Grade.GOOD, now - timedelta(days=2))
    database.review_card(session, "a", Grade.GOOD, now - timedelta(days=1))
    database.review_card(session, "b", Grade.EASY, now - timedelta(days=1))
    database.review_card(session, "b", Grade.HARD, now)

    stats = build_learning_stats(session, "user-1", now, daily_goal=15)

    assert stats.cards.total == 3
    assert stats.cards.new == 1
    assert stats.cards.learning == 2
    assert stats.today_reviewed == 1
    assert stats.today_target == 15
    assert stats.streak_days == 3
    assert stats.weekly_progress.tolist()[-3:] == [1, 2, 1]


def test_learning_stats_ignore_reviews_after_now(session, now):
    database.create_card(session, "a", "user-1", now - timedelta(days=1))
    session.commit()

    database.review_card(session, "a", Grade.GOOD, now - timedelta(days=1))
    database.review_card(session, "a", Grade.GOOD, now)
    database.review_card(session, "a", Grade.GOOD, now + timedelta(days=1))

    stats = build_learning_stats(session, "user-1", now)

    assert stats.streak_days == 2
    assert stats.today_reviewed == 1
    assert stats.weekly_progress.sum() == 2

    activity = get_yearly_activity(session, "user-1", now)
    assert activity["date"].tolist() == ["2026-03-13", "2026-03-14"]


def test_learning_stats_for_empty_user(session, now):
    stats = build_learning_stats(session, "nobody", now)
    assert stats.cards.total == 0
    assert stats.streak_days == 0
    assert stats.weekly_progress.sum() == 0


def test_yearly_activity(session, now):
    database.create_card(session, "a", "user-1", now)
    session.commit()
    database.review_card(session, "a", Grade.GOOD, now - timedelta(days=400))
    database.review_card(session, "a", Grade.GOOD, now - timedelta(days=3))
    database.review_card(session, "a", Grade.GOOD, now)

    activity = get_yearly_activity(session, "user-1", now)
    assert activity.to_dict("records") == [
        {"date": "2026-03-11", "count": 1},
        {"date": "2026-03-14", "count": 1},
    ]
    assert get_yearly_activity(session, "nobody", now).empty
