"""Human-readable account age.

Months are a fixed 30 days and years twelve of those months, which keeps
the output as coarse as the estimates it describes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agecheck_estimator.dates import utc_now

if TYPE_CHECKING:
    from datetime import datetime

DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class AccountAge:
    """Elapsed time since account creation."""

    age_days: int
    months: int
    years: int
    label: str


def _plural(quantity: int, unit: str) -> str:
    return f"{quantity} {unit}{'s' if quantity > 1 else ''}"


def format_age(age_days: int) -> str:
    """Render a day count as "Y years and M months", "M months" or "D days"."""
    months = age_days // DAYS_PER_MONTH
    years = months // MONTHS_PER_YEAR

    if years >= 1:
        remaining = months % MONTHS_PER_YEAR
        label = _plural(years, "year")
        if remaining > 0:
            label += f" and {_plural(remaining, 'month')}"
        return label
    if months >= 1:
        return _plural(months, "month")
    return _plural(age_days, "day")


def compute_account_age(created_at: datetime, *, now: datetime | None = None) -> AccountAge:
    """Elapsed time between created_at and now.

    Args:
        created_at: Creation (or estimated creation) time.
        now: Reference time; defaults to the current UTC time.

    Returns:
        AccountAge with the ceiling day count and its label.
    """
    reference = now or utc_now()
    elapsed = abs((reference - created_at).total_seconds())
    age_days = math.ceil(elapsed / 86_400)
    months = age_days // DAYS_PER_MONTH

    return AccountAge(
        age_days=age_days,
        months=months,
        years=months // MONTHS_PER_YEAR,
        label=format_age(age_days),
    )
