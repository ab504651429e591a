"""Calendar helpers shared by the estimator and the response formatter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from agecheck_estimator.types import AccuracyRadius, DateRange, radius_months

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def anchor(year: int, month: int, day: int) -> datetime:
    """Midnight UTC on the given calendar day."""
    return datetime(year, month, day, tzinfo=UTC)


def to_epoch_millis(moment: datetime) -> int:
    """Whole milliseconds since the Unix epoch."""
    delta = moment - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_millis(millis: int) -> datetime:
    """Inverse of to_epoch_millis."""
    return EPOCH + timedelta(milliseconds=millis)


def shift_months(moment: datetime, months: int) -> datetime:
    """Move a datetime by whole calendar months.

    The day of month is kept; when the target month is shorter the surplus
    days roll into the following month (Aug 31 minus 6 months is Mar 3, or
    Mar 2 in a leap year).
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    first = moment.replace(year=year, month=month + 1, day=1)
    return first + timedelta(days=moment.day - 1)


def date_range_for(moment: datetime, radius: AccuracyRadius | str) -> DateRange:
    """Window of +/- radius months around moment."""
    months = radius_months(radius)
    return DateRange(start=shift_months(moment, -months), end=shift_months(moment, months))


def format_date(moment: datetime) -> str:
    """Long US English date, e.g. "June 1, 2012"."""
    return f"{_MONTH_NAMES[moment.month - 1]} {moment.day}, {moment.year}"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
