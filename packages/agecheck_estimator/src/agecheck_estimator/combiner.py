"""Combine weak signals into one confidence-weighted estimate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agecheck_estimator.dates import (
    date_range_for,
    from_epoch_millis,
    to_epoch_millis,
    utc_now,
)
from agecheck_estimator.signals import extract_signals
from agecheck_estimator.types import (
    AccuracyRadius,
    AgeEstimate,
    ConfidenceTier,
    EstimationMethod,
    ProfileSignals,
    SignalEstimate,
    SignalWeight,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime


def combine_estimates(
    estimates: Sequence[SignalEstimate],
    *,
    now: datetime | None = None,
) -> AgeEstimate:
    """Combine signal estimates into a single AgeEstimate.

    The date is the weight-averaged epoch time of all estimates. Confidence
    follows the heaviest estimate, and the first estimate carrying that
    weight names the method.

    Args:
        estimates: Estimates in extraction order.
        now: Reference time for the no-signal default.

    Returns:
        AgeEstimate; never raises for well-formed estimates.
    """
    if not estimates:
        moment = now or utc_now()
        return AgeEstimate(
            estimated_date=moment,
            confidence_tier=ConfidenceTier.VERY_LOW,
            accuracy_radius=AccuracyRadius.TWELVE_MONTHS,
            primary_method=EstimationMethod.DEFAULT,
            date_range=date_range_for(moment, AccuracyRadius.TWELVE_MONTHS),
        )

    weighted_sum = sum(to_epoch_millis(e.inferred_date) * e.confidence_weight for e in estimates)
    total_weight = sum(e.confidence_weight for e in estimates)
    estimated_date = from_epoch_millis(weighted_sum // total_weight)

    max_weight = max(e.confidence_weight for e in estimates)
    primary = next(e for e in estimates if e.confidence_weight == max_weight)

    if max_weight == SignalWeight.MEDIUM:
        tier, radius = ConfidenceTier.MEDIUM, AccuracyRadius.SIX_MONTHS
    else:
        tier, radius = ConfidenceTier.LOW, AccuracyRadius.TWELVE_MONTHS

    return AgeEstimate(
        estimated_date=estimated_date,
        confidence_tier=tier,
        accuracy_radius=radius,
        primary_method=EstimationMethod(primary.method),
        date_range=date_range_for(estimated_date, radius),
        contributing_estimates=tuple(estimates),
    )


def estimate_account_age(
    signals: ProfileSignals,
    *,
    now: datetime | None = None,
) -> AgeEstimate:
    """Heuristic creation date for a profile with no known timestamp."""
    return combine_estimates(extract_signals(signals), now=now)


def authoritative_estimate(created_at: datetime) -> AgeEstimate:
    """Wrap a provider-supplied creation time; heuristics are not consulted."""
    return AgeEstimate(
        estimated_date=created_at,
        confidence_tier=ConfidenceTier.HIGH,
        accuracy_radius=AccuracyRadius.THREE_MONTHS,
        primary_method=EstimationMethod.PROVIDER_TIMESTAMP,
        date_range=date_range_for(created_at, AccuracyRadius.THREE_MONTHS),
    )
