"""Estimator types and result models."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum, StrEnum

from agecheck_utils import StrictModel
from pydantic import Field, model_validator


class SignalWeight(IntEnum):
    """Weight a single signal carries in the combined estimate."""

    LOW = 1
    MEDIUM = 2


class ConfidenceTier(StrEnum):
    """Coarse reliability bucket of an estimate."""

    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AccuracyRadius(StrEnum):
    """Symmetric window around the estimated date."""

    THREE_MONTHS = "±3 months"
    SIX_MONTHS = "±6 months"
    TWELVE_MONTHS = "±12 months"


class EstimationMethod(StrEnum):
    """Labels for how a date was obtained."""

    USERNAME_PATTERN = "Username Pattern"
    DISPLAY_NAME_PATTERN = "Display Name Pattern"
    FOLLOWER_COUNT = "Follower Count"
    DEFAULT = "Default"
    PROVIDER_TIMESTAMP = "Provider Timestamp"


_RADIUS_MONTHS: dict[str, int] = {
    AccuracyRadius.THREE_MONTHS: 3,
    AccuracyRadius.SIX_MONTHS: 6,
    AccuracyRadius.TWELVE_MONTHS: 12,
}


def radius_months(radius: AccuracyRadius | str) -> int:
    """Number of calendar months on each side of the estimate."""
    return _RADIUS_MONTHS[radius]


class ProfileSignals(StrictModel):
    """Observable profile attributes used for heuristic estimation."""

    username: str
    display_name: str = ""
    follower_count: int = Field(default=0, ge=0)


class SignalEstimate(StrictModel):
    """Date suggested by a single signal extractor."""

    inferred_date: datetime
    confidence_weight: SignalWeight
    method: EstimationMethod


class DateRange(StrictModel):
    """Inclusive window around an estimated date."""

    start: datetime
    end: datetime


class AgeEstimate(StrictModel):
    """Best-effort creation date with its confidence."""

    estimated_date: datetime
    confidence_tier: ConfidenceTier
    accuracy_radius: AccuracyRadius
    primary_method: EstimationMethod
    date_range: DateRange
    contributing_estimates: tuple[SignalEstimate, ...] = ()

    @model_validator(mode="after")
    def _range_contains_estimate(self) -> AgeEstimate:
        if not self.date_range.start <= self.estimated_date <= self.date_range.end:
            msg = "date_range must contain estimated_date"
            raise ValueError(msg)
        return self

    @property
    def is_authoritative(self) -> bool:
        """True when the date came from the provider rather than heuristics."""
        return self.confidence_tier == ConfidenceTier.HIGH
