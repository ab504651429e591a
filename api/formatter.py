"""Render estimates and profile fields into the outward JSON shape."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from agecheck_estimator import compute_account_age, format_date, format_timestamp

from api.config import ApiConfig, get_config

if TYPE_CHECKING:
    from datetime import datetime

    from agecheck_estimator import AgeEstimate, DateRange
    from agecheck_providers import RawProfile


def _format_range(date_range: DateRange) -> dict[str, str]:
    return {"start": format_date(date_range.start), "end": format_date(date_range.end)}


def _profile_fields(profile: RawProfile, config: ApiConfig) -> dict[str, Any]:
    return {
        "username": profile.username,
        "nickname": profile.display_name,
        "avatar": profile.avatar_url,
        "followers": profile.follower_count,
        "description": profile.bio or config.no_bio,
    }


def format_heuristic_response(
    profile: RawProfile,
    estimate: AgeEstimate,
    *,
    now: datetime | None = None,
    config: ApiConfig | None = None,
) -> dict[str, Any]:
    """Response body for a profile whose creation date was estimated."""
    config = config or get_config()
    age = compute_account_age(estimate.estimated_date, now=now)

    return {
        **_profile_fields(profile, config),
        "estimated_creation_date": format_date(estimate.estimated_date),
        "estimated_creation_date_range": _format_range(estimate.date_range),
        "account_age": age.label,
        "estimation_confidence": estimate.confidence_tier,
        "estimation_method": estimate.primary_method,
        "accuracy_range": estimate.accuracy_radius,
        "estimation_details": {
            "all_estimates": [
                {
                    "date": format_timestamp(e.inferred_date),
                    "confidence": e.confidence_weight,
                    "method": e.method,
                }
                for e in estimate.contributing_estimates
            ],
            "note": config.estimate_note.format(platform=profile.provider.capitalize()),
        },
    }


def format_authoritative_response(
    profile: RawProfile,
    estimate: AgeEstimate,
    *,
    now: datetime | None = None,
    config: ApiConfig | None = None,
) -> dict[str, Any]:
    """Response body for a profile whose provider reported the creation time."""
    config = config or get_config()
    age = compute_account_age(estimate.estimated_date, now=now)

    return {
        **_profile_fields(profile, config),
        "creation_date": format_date(estimate.estimated_date),
        "creation_date_range": _format_range(estimate.date_range),
        "account_age": age.label,
        "age_days": age.age_days,
        "estimation_confidence": estimate.confidence_tier,
        "accuracy_range": estimate.accuracy_radius,
        "related_accounts": [
            {
                "username": account.username,
                "nickname": account.display_name,
                "avatar": account.avatar_url,
                "verified": account.is_verified,
            }
            for account in profile.related_accounts
        ],
    }
