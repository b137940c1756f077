"""
Memory Model - Stability and Difficulty Updates

Implements the per-review updates of stability (S) and difficulty (D).

Key principles:
- Successful recall of a nearly forgotten item (low R) is the strongest
  evidence of durability, so it produces the largest stability gains
- Higher grades produce larger gains (Hard < Good < Easy)
- A lapse sharply reduces stability, more so for hard, decayed items
- Difficulty mean-reverts while drifting up on Forgot/Hard, down on Easy

All functions are pure; invalid ranges are rejected, never corrected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from srs_core.fsrs.constants import D_MAX, D_MIN, S_MIN, Grade
from srs_core.fsrs.errors import InvalidCardStateError


@dataclass(frozen=True)
class MemoryUpdate:
    """Result of one memory-model step."""
    stability: float
    difficulty: float
    retrievability: Optional[float]  # None on the initial path


def clamp_difficulty(difficulty: float) -> float:
    """Clip difficulty to [D_MIN, D_MAX]."""
    return max(D_MIN, min(D_MAX, difficulty))


def initial_stability(grade: Grade, weights: Sequence[float]) -> float:
    """
    Stability after the first-ever review.

    S_0 = w[grade - 1]
    """
    return max(S_MIN, weights[grade.rank - 1])


def initial_difficulty(grade: Grade, weights: Sequence[float]) -> float:
    """
    Difficulty after the first-ever review.

    D_0 = w[4] - w[5] * (grade - 3), clipped to [1, 10]
    """
    return clamp_difficulty(weights[4] - weights[5] * (grade.rank - 3))


def update_stability_on_success(
    stability: float,
    difficulty: float,
    retrievability: float,
    grade: Grade,
    weights: Sequence[float],
) -> float:
    """
    Update stability after successful retrieval (Hard/Good/Easy).

    Formula:
        S_new = S * (1 + e^w8 * (11 - D) * S^(-w9)
                     * (e^(w10 * (1 - R)) - 1) * hard_penalty * easy_bonus)

    Where:
        - (e^(w10 * (1 - R)) - 1) rewards well-spaced success
        - (11 - D) reduces gains for difficult items
        - S^(-w9) makes already-stable memories grow more slowly

    The growth factor is never below 1, so success never lowers stability.
    """
    if grade == Grade.FORGOT:
        raise ValueError("Use update_stability_on_failure for FORGOT")

    hard_penalty = weights[15] if grade == Grade.HARD else 1.0
    easy_bonus = weights[16] if grade == Grade.EASY else 1.0

    growth = (
        math.exp(weights[8])
        * (11.0 - difficulty)
        * stability ** (-weights[9])
        * (math.exp(weights[10] * (1.0 - retrievability)) - 1.0)
        * hard_penalty
        * easy_bonus
    )
    return max(S_MIN, stability * (1.0 + growth))


def update_stability_on_failure(
    stability: float,
    difficulty: float,
    retrievability: float,
    weights: Sequence[float],
) -> float:
    """
    Update stability after a lapse (Forgot).

    Formula:
        S_new = w11 * D^(-w12) * ((S + 1)^w13 - 1) * e^(w14 * (1 - R))

    Capped at the current stability: forgetting never makes a memory
    more durable.
    """
    lapse_stability = (
        weights[11]
        * difficulty ** (-weights[12])
        * ((stability + 1.0) ** weights[13] - 1.0)
        * math.exp(weights[14] * (1.0 - retrievability))
    )
    return max(S_MIN, min(lapse_stability, stability))


def update_difficulty(
    difficulty: float,
    grade: Grade,
    weights: Sequence[float],
) -> float:
    """
    Update difficulty based on the grade.

    Formula:
        D_new = clip(w7 * D_0(Easy) + (1 - w7) * (D - w6 * (grade - 3)), 1, 10)

    Forgot and Hard push D up, Good leaves it nearly flat and Easy pulls
    it down; the w7 term slowly reverts D toward the easiest initial value.
    """
    target = initial_difficulty(Grade.EASY, weights)
    stepped = difficulty - weights[6] * (grade.rank - 3)
    return clamp_difficulty(weights[7] * target + (1.0 - weights[7]) * stepped)


def apply_memory_update(
    stability: float,
    difficulty: float,
    retrievability: Optional[float],
    grade: Grade,
    weights: Sequence[float],
) -> MemoryUpdate:
    """
    Apply one review to (S, D).

    This is the main entry point of the memory model. Pass
    `retrievability=None` for the card's first-ever review to take the
    initial path.

    Raises:
        InvalidCardStateError: if S, D or R are out of range
    """
    if retrievability is None:
        return MemoryUpdate(
            stability=initial_stability(grade, weights),
            difficulty=initial_difficulty(grade, weights),
            retrievability=None,
        )

    if not stability > 0:
        raise InvalidCardStateError(f"Stability must be positive, got {stability!r}")
    if not D_MIN <= difficulty <= D_MAX:
        raise InvalidCardStateError(f"Difficulty must be within [1, 10], got {difficulty!r}")
    if not 0.0 <= retrievability <= 1.0:
        raise InvalidCardStateError(f"Retrievability must be within [0, 1], got {retrievability!r}")

    if grade == Grade.FORGOT:
        new_stability = update_stability_on_failure(stability, difficulty, retrievability, weights)
    else:
        new_stability = update_stability_on_success(
            stability, difficulty, retrievability, grade, weights
        )

    return MemoryUpdate(
        stability=new_stability,
        difficulty=update_difficulty(difficulty, grade, weights),
        retrievability=retrievability,
    )
