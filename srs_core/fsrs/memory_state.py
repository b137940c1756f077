"""
Memory State - Card Scheduling State and Retrievability

Defines the card scheduling state and the derived quantities of the
power-law forgetting curve.

Key concepts:
- Stability (S): days until recall probability decays to 90%
- Difficulty (D): how hard the card is to stabilize (1-10 scale)
- Retrievability (R): probability of successful recall at time t
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Union

from srs_core.fsrs.constants import (
    D_MAX,
    D_MIN,
    DECAY,
    FACTOR,
    INITIAL_DIFFICULTY_SEED,
    INITIAL_STABILITY_SEED,
    LEGACY_PHASE_CODES,
    CardPhase,
)
from srs_core.fsrs.errors import InvalidCardStateError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class CardScheduleState:
    """
    Scheduling state for a single card.

    Immutable: the scheduler returns a new value for every review.
    """
    due: datetime
    stability: float  # S, in days
    difficulty: float  # D, range 1-10
    repetitions: int  # Successful reviews (lapses counted separately)
    state: CardPhase
    lapses: int = 0
    last_review: Optional[datetime] = None  # Anchor for elapsed time

    @property
    def is_first_review(self) -> bool:
        """True when the card has never been graded."""
        return self.repetitions == 0 and self.lapses == 0

    def to_dict(self) -> dict:
        """Serialize to plain values (ISO timestamps, phase name)."""
        data = asdict(self)
        data["due"] = self.due.isoformat()
        data["state"] = self.state.value
        data["last_review"] = self.last_review.isoformat() if self.last_review else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CardScheduleState":
        """Build and validate a state from card-store values."""
        return validate_state(
            cls(
                due=coerce_timestamp(data.get("due")),
                stability=data.get("stability", INITIAL_STABILITY_SEED),
                difficulty=data.get("difficulty", INITIAL_DIFFICULTY_SEED),
                repetitions=data.get("repetitions", 0),
                state=coerce_phase(data.get("state", CardPhase.NEW)),
                lapses=data.get("lapses", 0),
                last_review=(
                    coerce_timestamp(data["last_review"])
                    if data.get("last_review")
                    else None
                ),
            )
        )


def coerce_timestamp(value: Union[datetime, str, None]) -> datetime:
    """
    Normalize a timestamp to an aware UTC datetime.

    Naive datetimes are read as UTC. ISO-8601 strings are parsed.

    Raises:
        InvalidCardStateError: for missing or unparseable values
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidCardStateError(f"Invalid timestamp: {value!r}") from e

    if not isinstance(value, datetime):
        raise InvalidCardStateError(f"Expected a timestamp, got {value!r}")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def coerce_phase(value: Union[CardPhase, str, int]) -> CardPhase:
    """
    Accept a CardPhase, its name/value, or a legacy integer code (0-3).
    """
    if isinstance(value, CardPhase):
        return value
    if isinstance(value, bool):
        raise InvalidCardStateError(f"Unknown card phase: {value!r}")
    if isinstance(value, int):
        if value in LEGACY_PHASE_CODES:
            return LEGACY_PHASE_CODES[value]
        raise InvalidCardStateError(f"Unknown card phase code: {value}")
    if isinstance(value, str):
        try:
            return CardPhase(value.lower())
        except ValueError:
            pass
    raise InvalidCardStateError(f"Unknown card phase: {value!r}")


def validate_state(card: CardScheduleState) -> CardScheduleState:
    """
    Check a caller-supplied state and return a normalized copy.

    Recoverable values are clamped (zero stability -> seed, zero difficulty
    on a never-graded card -> seed, naive timestamps -> UTC). Anything else
    out of range is rejected.

    Raises:
        InvalidCardStateError: if the state is unrecoverably malformed
    """
    if not isinstance(card, CardScheduleState):
        raise InvalidCardStateError(f"Expected CardScheduleState, got {type(card).__name__}")

    stability = card.stability
    difficulty = card.difficulty

    if not _is_finite_number(stability) or stability < 0:
        raise InvalidCardStateError(f"Stability must be a non-negative number, got {stability!r}")
    if not _is_finite_number(difficulty):
        raise InvalidCardStateError(f"Difficulty must be a number, got {difficulty!r}")
    for name in ("repetitions", "lapses"):
        count = getattr(card, name)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidCardStateError(f"{name} must be a non-negative integer, got {count!r}")

    if stability == 0:
        logger.warning("Zero stability read from card state; using seed %.2f", INITIAL_STABILITY_SEED)
        stability = INITIAL_STABILITY_SEED

    if difficulty == 0 and card.is_first_review:
        difficulty = INITIAL_DIFFICULTY_SEED
    if not D_MIN <= difficulty <= D_MAX:
        raise InvalidCardStateError(
            f"Difficulty must be within [{D_MIN}, {D_MAX}], got {difficulty!r}"
        )

    return replace(
        card,
        due=coerce_timestamp(card.due),
        stability=float(stability),
        difficulty=float(difficulty),
        state=coerce_phase(card.state),
        last_review=coerce_timestamp(card.last_review) if card.last_review is not None else None,
    )


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def calculate_retrievability(stability: float, elapsed_days: float) -> float:
    """
    Calculate retrievability using the power-law forgetting curve.

    Formula: R = (1 + Δt / (9 · S)) ^ (-1)

    Where:
    - Δt = days since the previous review
    - S = stability (in days)

    Interpretation:
    - Immediately after review: R = 1.0
    - At Δt = S: R = 0.9
    - Decay slows as Δt grows relative to S

    Args:
        stability: Current stability in days (must be > 0)
        elapsed_days: Time since the previous review in days

    Returns:
        Retrievability between 0 and 1
    """
    if stability <= 0:
        raise InvalidCardStateError(f"Stability must be positive, got {stability!r}")
    if elapsed_days <= 0:
        return 1.0

    return (1.0 + FACTOR * elapsed_days / stability) ** DECAY


def interval_for_retention(stability: float, desired_retention: float) -> float:
    """
    Invert the forgetting curve: days until R drops to `desired_retention`.

    Formula: t = 9 · S · (1/r - 1)
    """
    return stability / FACTOR * (desired_retention ** (1.0 / DECAY) - 1.0)


def elapsed_days_since(anchor: datetime, now: datetime) -> float:
    """
    Days between `anchor` and `now`, clamped at zero for early reviews.
    """
    delta = coerce_timestamp(now) - coerce_timestamp(anchor)
    return max(0.0, delta.total_seconds() / SECONDS_PER_DAY)


def initial_state(now: datetime) -> CardScheduleState:
    """
    Seed state for a card that just entered the system.

    The card is due immediately, in NEW phase, with a small positive
    stability seed and mid-scale difficulty.
    """
    return CardScheduleState(
        due=coerce_timestamp(now),
        stability=INITIAL_STABILITY_SEED,
        difficulty=INITIAL_DIFFICULTY_SEED,
        repetitions=0,
        state=CardPhase.NEW,
        lapses=0,
        last_review=None,
    )
