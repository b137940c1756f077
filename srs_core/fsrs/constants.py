"""
FSRS Constants and Parameters

All tunable parameters of the scheduling engine in one place.
Defaults follow the FSRS v4 population-level priors.
"""

from __future__ import annotations

from enum import Enum
from functools import total_ordering
from typing import Final


# ---- Grades ----

@total_ordering
class Grade(Enum):
    """
    Learner feedback on a retrieval attempt.

    Ordered (FORGOT < HARD < GOOD < EASY) but deliberately not an IntEnum,
    so ratings cannot leak into arithmetic. Values are the rating names
    stored by the card store and review log.
    """
    FORGOT = "forgot"  # Retrieval failed
    HARD = "hard"      # Retrieved with high effort
    GOOD = "good"      # Retrieved normally
    EASY = "easy"      # Retrieved fluently

    @property
    def rank(self) -> int:
        """1-based position of the grade (FORGOT=1 ... EASY=4)."""
        return _GRADE_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Grade):
            return NotImplemented
        return self.rank < other.rank


_GRADE_RANK: Final[dict[Grade, int]] = {
    Grade.FORGOT: 1,
    Grade.HARD: 2,
    Grade.GOOD: 3,
    Grade.EASY: 4,
}


# ---- Card lifecycle ----

class CardPhase(Enum):
    """Lifecycle phase of a card."""
    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"


# Integer codes used by older card-store rows (0=New ... 3=Relearning)
LEGACY_PHASE_CODES: Final[dict[int, CardPhase]] = {
    0: CardPhase.NEW,
    1: CardPhase.LEARNING,
    2: CardPhase.REVIEW,
    3: CardPhase.RELEARNING,
}


# ---- Global Constants ----

S_MIN = 0.01     # Stability floor (days); keeps R well-defined
D_MIN = 1.0      # Minimum difficulty
D_MAX = 10.0     # Maximum difficulty

DECAY = -1.0           # Exponent of the power-law forgetting curve
FACTOR = 1.0 / 9.0     # Scales t/S so that R(t=S) = 0.9

INITIAL_STABILITY_SEED = 0.1   # Stability of a card that was never reviewed
INITIAL_DIFFICULTY_SEED = 5.0  # Middle of the 1-10 scale


# ---- Scheduling defaults ----

DEFAULT_DESIRED_RETENTION = 0.9  # Target recall probability at due time
DEFAULT_MAXIMUM_INTERVAL = 365.0  # Days
MAXIMUM_INTERVAL_CAP = 36500.0  # Largest accepted maximum_interval (~100 years)


# ---- Mastery policy defaults ----

MASTERY_STABILITY_THRESHOLD = 30.0  # stability >= 30 days counts as mastered
MASTERY_REPETITIONS_THRESHOLD = 5   # or >= 5 successful reviews without a lapse


# ---- Memory model weights ----
# w[0]-w[3]   initial stability for FORGOT, HARD, GOOD, EASY
# w[4]-w[5]   initial difficulty intercept / slope
# w[6]-w[7]   difficulty step / mean-reversion weight
# w[8]-w[10]  recall stability: gain, stability decay, retrievability factor
# w[11]-w[14] lapse stability: base, difficulty exp, stability exp, R factor
# w[15]       hard penalty
# w[16]       easy bonus

DEFAULT_WEIGHTS: Final[tuple[float, ...]] = (
    0.4, 0.6, 2.4, 5.8,
    4.93, 0.94,
    0.86, 0.01,
    1.49, 0.14, 0.94,
    2.18, 0.05, 0.34, 1.26,
    0.29,
    2.61,
)

WEIGHT_COUNT: Final[int] = len(DEFAULT_WEIGHTS)
