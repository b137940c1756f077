import pytest

from srs_core.fsrs.constants import D_MAX, D_MIN, DEFAULT_WEIGHTS, Grade
from srs_core.fsrs.errors import InvalidCardStateError
from srs_core.fsrs.memory_model import (
    apply_memory_update,
    initial_difficulty,
    initial_stability,
    update_difficulty,
    update_stability_on_failure,
    update_stability_on_success,
)

W = DEFAULT_WEIGHTS
GRADES = [Grade.FORGOT, Grade.HARD, Grade.GOOD, Grade.EASY]


def test_grades_are_ordered_but_not_numbers():
    assert GRADES == sorted(GRADES)
    assert Grade.FORGOT < Grade.EASY
    assert Grade.GOOD >= Grade.HARD
    assert Grade("good") is Grade.GOOD
    with pytest.raises(TypeError):
        Grade.GOOD + 1


def test_initial_stability_matches_weights():
    assert [initial_stability(g, W) for g in GRADES] == [0.4, 0.6, 2.4, 5.8]


def test_initial_difficulty_decreases_with_grade():
    values = [initial_difficulty(g, W) for g in GRADES]
    assert values == sorted(values, reverse=True)
    assert initial_difficulty(Grade.GOOD, W) == pytest.approx(4.93)
    assert all(D_MIN <= d <= D_MAX for d in values)


def test_failure_sharply_reduces_stability():
    new_s = update_stability_on_failure(40.0, 5.0, 0.9, W)
    assert 0 < new_s < 40.0 / 2


def test_failure_never_raises_stability():
    # Tiny stabilities would otherwise grow from the lapse formula
    assert update_stability_on_failure(0.2, 5.0, 0.2, W) <= 0.2


def test_harder_items_lose_more_stability():
    easy_item = update_stability_on_failure(40.0, 2.0, 0.9, W)
    hard_item = update_stability_on_failure(40.0, 9.0, 0.9, W)
    assert hard_item < easy_item


def test_success_increases_stability_more_for_higher_grades():
    values = [update_stability_on_success(10.0, 5.0, 0.9, g, W) for g in GRADES[1:]]
    assert 10.0 < values[0] < values[1] < values[2]


def test_success_near_forgetting_point_gains_more():
    fresh = update_stability_on_success(10.0, 5.0, 0.95, Grade.GOOD, W)
    decayed = update_stability_on_success(10.0, 5.0, 0.6, Grade.GOOD, W)
    assert decayed > fresh


def test_success_with_full_retrievability_keeps_stability():
    assert update_stability_on_success(10.0, 5.0, 1.0, Grade.EASY, W) == pytest.approx(10.0)


def test_success_update_rejects_forgot():
    with pytest.raises(ValueError):
        update_stability_on_success(10.0, 5.0, 0.9, Grade.FORGOT, W)


def test_difficulty_drift_by_grade():
    assert update_difficulty(5.0, Grade.FORGOT, W) > 5.0
    assert update_difficulty(5.0, Grade.HARD, W) > 5.0
    assert update_difficulty(5.0, Grade.GOOD, W) == pytest.approx(5.0, abs=0.05)
    assert update_difficulty(5.0, Grade.EASY, W) < 5.0


def test_difficulty_is_clamped():
    assert update_difficulty(10.0, Grade.FORGOT, W) == D_MAX
    assert update_difficulty(1.0, Grade.EASY, W) == D_MIN


def test_apply_memory_update_initial_path():
    update = apply_memory_update(0.1, 5.0, None, Grade.GOOD, W)
    assert update.stability == 2.4
    assert update.retrievability is None


def test_apply_memory_update_review_path():
    update = apply_memory_update(40.0, 5.0, 0.9, Grade.FORGOT, W)
    assert update.stability < 40.0
    assert update.difficulty > 5.0
    assert update.retrievability == 0.9


@pytest.mark.parametrize("stability,difficulty,retrievability", [
    (-1.0, 5.0, 0.9),
    (0.0, 5.0, 0.9),
    (10.0, 11.0, 0.9),
    (10.0, 5.0, 1.5),
    (10.0, 5.0, -0.1),
])
def test_apply_memory_update_rejects_invalid_input(stability, difficulty, retrievability):
    with pytest.raises(InvalidCardStateError):
        apply_memory_update(stability, difficulty, retrievability, Grade.GOOD, W)
