"""
Scheduler configuration.

A SchedulerConfig is built once (from defaults, code, or the environment)
and passed into every scheduling call. It is immutable and validated at
construction time, so a bad configuration fails once instead of on every
review.
"""

from __future__ import annotations

import math
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from srs_core.fsrs.constants import (
    DEFAULT_DESIRED_RETENTION,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_WEIGHTS,
    MAXIMUM_INTERVAL_CAP,
    MASTERY_REPETITIONS_THRESHOLD,
    MASTERY_STABILITY_THRESHOLD,
    WEIGHT_COUNT,
)


class MasteryPolicy(BaseModel):
    """Thresholds for pulling a card out of the active review pool."""
    model_config = ConfigDict(frozen=True)

    stability_threshold: float = Field(MASTERY_STABILITY_THRESHOLD, gt=0)
    repetitions_threshold: int = Field(MASTERY_REPETITIONS_THRESHOLD, gt=0)


class SchedulerConfig(BaseModel):
    """Immutable, process-wide scheduling parameters."""
    model_config = ConfigDict(frozen=True)

    desired_retention: float = Field(
        DEFAULT_DESIRED_RETENTION,
        gt=0.0,
        lt=1.0,
        allow_inf_nan=False,
        description="Recall probability the scheduler targets at due time",
    )
    maximum_interval: float = Field(
        DEFAULT_MAXIMUM_INTERVAL,
        gt=0.0,
        le=MAXIMUM_INTERVAL_CAP,
        allow_inf_nan=False,
        description="Upper bound on scheduled interval, in days",
    )
    weights: tuple[float, ...] = Field(DEFAULT_WEIGHTS)
    mastery: MasteryPolicy = Field(default_factory=MasteryPolicy)

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, weights: tuple[float, ...]) -> tuple[float, ...]:
        if len(weights) != WEIGHT_COUNT:
            raise ValueError(f"expected {WEIGHT_COUNT} weights, got {len(weights)}")
        if not all(math.isfinite(w) for w in weights):
            raise ValueError("weights must be finite numbers")
        if any(w <= 0 for w in weights[:4]):
            raise ValueError("initial stabilities w[0]-w[3] must be positive")
        if list(weights[:4]) != sorted(weights[:4]):
            raise ValueError("initial stabilities w[0]-w[3] must be non-decreasing")
        if weights[6] < 0:
            raise ValueError("difficulty step w[6] must be >= 0")
        if not 0.0 <= weights[7] <= 1.0:
            raise ValueError("mean-reversion weight w[7] must be within [0, 1]")
        if weights[10] <= 0:
            raise ValueError("recall growth weight w[10] must be positive")
        if weights[11] <= 0 or weights[13] <= 0:
            raise ValueError("lapse weights w[11] and w[13] must be positive")
        if not 0.0 < weights[15] <= 1.0:
            raise ValueError("hard penalty w[15] must be within (0, 1]")
        if weights[16] < 1.0:
            raise ValueError("easy bonus w[16] must be >= 1")
        return weights


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


def load_config() -> SchedulerConfig:
    """
    Build a SchedulerConfig from environment variables.

    Reads `.env` first (if present), then:
    - SRS_DESIRED_RETENTION
    - SRS_MAXIMUM_INTERVAL
    - SRS_MASTERY_STABILITY
    - SRS_MASTERY_REPETITIONS

    Unset variables fall back to the defaults.

    Raises:
        pydantic.ValidationError: if any value is out of range
        ValueError: if a value is not a number
    """
    load_dotenv(find_dotenv(usecwd=True))

    overrides: dict = {}
    retention = _env_float("SRS_DESIRED_RETENTION")
    if retention is not None:
        overrides["desired_retention"] = retention
    max_interval = _env_float("SRS_MAXIMUM_INTERVAL")
    if max_interval is not None:
        overrides["maximum_interval"] = max_interval

    mastery: dict = {}
    stability_threshold = _env_float("SRS_MASTERY_STABILITY")
    if stability_threshold is not None:
        mastery["stability_threshold"] = stability_threshold
    reps = os.getenv("SRS_MASTERY_REPETITIONS")
    if reps:
        mastery["repetitions_threshold"] = int(reps)
    if mastery:
        overrides["mastery"] = MasteryPolicy(**mastery)

    return SchedulerConfig(**overrides)
