"""Account creation date estimation.

Infers when a social media account was created from indirect signals
(username shape, display name, follower count) when the provider does not
report it, and renders the result as a date range and a readable age.
"""

from agecheck_estimator.combiner import (
    authoritative_estimate,
    combine_estimates,
    estimate_account_age,
)
from agecheck_estimator.dates import (
    date_range_for,
    format_date,
    format_timestamp,
    shift_months,
)
from agecheck_estimator.duration import AccountAge, compute_account_age, format_age
from agecheck_estimator.signals import (
    estimate_from_display_name,
    estimate_from_followers,
    estimate_from_username,
    extract_signals,
)
from agecheck_estimator.types import (
    AccuracyRadius,
    AgeEstimate,
    ConfidenceTier,
    DateRange,
    EstimationMethod,
    ProfileSignals,
    SignalEstimate,
    SignalWeight,
    radius_months,
)

__all__ = [
    "AccountAge",
    "AccuracyRadius",
    "AgeEstimate",
    "ConfidenceTier",
    "DateRange",
    "EstimationMethod",
    "ProfileSignals",
    "SignalEstimate",
    "SignalWeight",
    "authoritative_estimate",
    "combine_estimates",
    "compute_account_age",
    "date_range_for",
    "estimate_account_age",
    "estimate_from_display_name",
    "estimate_from_followers",
    "estimate_from_username",
    "extract_signals",
    "format_age",
    "format_date",
    "format_timestamp",
    "radius_months",
    "shift_months",
]
