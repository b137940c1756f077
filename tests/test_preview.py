import math

import pytest

from srs_core.fsrs.config import SchedulerConfig
from srs_core.fsrs.constants import Grade
from srs_core.fsrs.memory_state import initial_state
from srs_core.fsrs.preview import format_interval, preview_all_grades
from srs_core.fsrs.scheduler import compute_review


@pytest.mark.parametrize("days,label", [
    (0, "1m"),
    (0.0001, "1m"),
    (10 / 1440, "10m"),
    (0.5, "720m"),
    (1, "1d"),
    (2.4, "2d"),
    (6.6, "7d"),
    (7, "1w"),
    (10.5, "2w"),
    (29, "4w"),
    (30, "1mo"),
    (45, "2mo"),
    (364, "12mo"),
    (365, "1y"),
    (912.5, "3y"),
])
def test_format_interval(days, label):
    assert format_interval(days) == label


@pytest.mark.parametrize("days", [-0.5, math.nan, math.inf, "3d", None])
def test_format_interval_rejects_bad_input(days):
    with pytest.raises(ValueError):
        format_interval(days)


def test_preview_has_one_entry_per_grade(now, review_card_state):
    previews = preview_all_grades(review_card_state(), now)
    assert list(previews) == [Grade.FORGOT, Grade.HARD, Grade.GOOD, Grade.EASY]


def test_preview_matches_compute_review(now, review_card_state, config):
    card = review_card_state(stability=12.0, difficulty=6.5)
    previews = preview_all_grades(card, now, config)

    for grade, preview in previews.items():
        outcome = compute_review(card, grade, now, config)
        assert preview.scheduled_days == outcome.scheduled_days
        assert preview.label == format_interval(outcome.scheduled_days)


def test_preview_labels_for_new_card(now):
    previews = preview_all_grades(initial_state(now), now)
    assert previews[Grade.FORGOT].label == "576m"
    assert previews[Grade.GOOD].label == "2d"
    assert previews[Grade.EASY].label == "6d"


def test_preview_is_idempotent(now, review_card_state):
    card = review_card_state()
    assert preview_all_grades(card, now) == preview_all_grades(card, now)


def test_preview_does_not_change_later_review(now, review_card_state):
    card = review_card_state(stability=3.0)
    before = compute_review(card, Grade.GOOD, now)
    preview_all_grades(card, now)
    assert compute_review(card, Grade.GOOD, now) == before


def test_preview_respects_config(now, review_card_state):
    card = review_card_state(stability=300.0)
    previews = preview_all_grades(card, now, SchedulerConfig(maximum_interval=20))
    assert previews[Grade.EASY].scheduled_days == 20
    assert previews[Grade.EASY].label == "3w"
