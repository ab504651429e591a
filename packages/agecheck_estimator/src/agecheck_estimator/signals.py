"""Signal extractors: map one observable profile attribute to an era date.

Each anchor date stands for an assumed platform-adoption era. They are
policy constants, not measurements.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from agecheck_estimator.dates import anchor
from agecheck_estimator.types import (
    EstimationMethod,
    ProfileSignals,
    SignalEstimate,
    SignalWeight,
)

if TYPE_CHECKING:
    from datetime import datetime

# Evaluated in order; first full match wins.
USERNAME_RULES: tuple[tuple[re.Pattern[str], datetime], ...] = (
    (re.compile(r"[a-z0-9]{3,8}"), anchor(2012, 6, 1)),  # short handles, 2012-2015
    (re.compile(r"[a-z]{3,8}[0-9]{1,3}"), anchor(2015, 6, 1)),  # name + digits, 2015-2017
    (re.compile(r"[a-z0-9._]{5,12}"), anchor(2017, 6, 1)),  # separators, 2017-2020
    (re.compile(r"[\w.]{8,15}", re.ASCII), anchor(2020, 6, 1)),  # long mixed, 2020+
)

REAL_NAME = re.compile(r"[A-Z][a-z]+\s[A-Z][a-z]+")
YEAR_SUFFIX = re.compile(r"[0-9]{4}\Z")

REAL_NAME_ERA = anchor(2012, 6, 1)
EMOJI_ERA = anchor(2016, 1, 1)
YEAR_SUFFIX_ERA = anchor(2020, 1, 1)

# (exclusive lower bound, era); the last entry is the default
FOLLOWER_THRESHOLDS: tuple[tuple[int, datetime], ...] = (
    (1_000_000, anchor(2018, 1, 1)),
    (100_000, anchor(2019, 6, 1)),
    (10_000, anchor(2021, 1, 1)),
)
DEFAULT_FOLLOWER_ERA = anchor(2023, 1, 1)


def _has_emoji(text: str) -> bool:
    """True if text holds a character outside the Basic Multilingual Plane.

    Those are the characters UTF-16 encodes as surrogate pairs, which covers
    nearly every emoji. Lone surrogates count too.
    """
    return any(ord(ch) > 0xFFFF or 0xD800 <= ord(ch) <= 0xDFFF for ch in text)


def estimate_from_username(username: str) -> datetime | None:
    """Era suggested by the lexical shape of the username."""
    if not username:
        return None

    for pattern, era in USERNAME_RULES:
        if pattern.fullmatch(username):
            return era

    return None


def estimate_from_display_name(display_name: str) -> datetime | None:
    """Era suggested by the display name."""
    if not display_name:
        return None

    if REAL_NAME.fullmatch(display_name):
        return REAL_NAME_ERA
    if _has_emoji(display_name):
        return EMOJI_ERA
    if YEAR_SUFFIX.search(display_name):
        return YEAR_SUFFIX_ERA

    return None


def estimate_from_followers(followers: int) -> datetime:
    """Era suggested by audience size. Never None."""
    for threshold, era in FOLLOWER_THRESHOLDS:
        if followers > threshold:
            return era

    return DEFAULT_FOLLOWER_ERA


def extract_signals(signals: ProfileSignals) -> list[SignalEstimate]:
    """Run every extractor, in username, display name, follower count order."""
    estimates: list[SignalEstimate] = []

    username_date = estimate_from_username(signals.username)
    if username_date is not None:
        estimates.append(
            SignalEstimate(
                inferred_date=username_date,
                confidence_weight=SignalWeight.MEDIUM,
                method=EstimationMethod.USERNAME_PATTERN,
            )
        )

    display_name_date = estimate_from_display_name(signals.display_name)
    if display_name_date is not None:
        estimates.append(
            SignalEstimate(
                inferred_date=display_name_date,
                confidence_weight=SignalWeight.MEDIUM,
                method=EstimationMethod.DISPLAY_NAME_PATTERN,
            )
        )

    estimates.append(
        SignalEstimate(
            inferred_date=estimate_from_followers(signals.follower_count),
            confidence_weight=SignalWeight.LOW,
            method=EstimationMethod.FOLLOWER_COUNT,
        )
    )

    return estimates
