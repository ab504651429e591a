"""Request orchestration: fetch, estimate, format.

This module handles:
- Calling the resolved provider for a validated username
- Choosing between the provider timestamp and heuristic estimation
- NO HTTP concerns (status codes and headers live in routes.py)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from agecheck_estimator import authoritative_estimate, estimate_account_age
from agecheck_utils import get_logger

from api.formatter import format_authoritative_response, format_heuristic_response

if TYPE_CHECKING:
    from datetime import datetime

    from agecheck_providers import ProfileProvider

log = get_logger("api.service")


async def check_account_age(
    provider: ProfileProvider,
    username: str,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Fetch a profile and describe its age.

    Args:
        provider: Provider resolved from the route.
        username: Already validated username.
        now: Reference time for age computation.

    Returns:
        Response body, authoritative or estimated.

    Raises:
        ProviderError: On upstream failures.
    """
    profile = await provider.fetch_profile(username)

    if profile.creation_timestamp is not None:
        estimate = authoritative_estimate(profile.creation_timestamp)
        log.info(
            "creation_date_reported",
            provider=provider.name,
            username=profile.username,
            related_accounts=len(profile.related_accounts),
        )
        return format_authoritative_response(profile, estimate, now=now)

    estimate = estimate_account_age(profile.to_signals(), now=now)
    log.info(
        "estimate_computed",
        provider=provider.name,
        username=profile.username,
        confidence=estimate.confidence_tier,
        method=estimate.primary_method,
        signals=len(estimate.contributing_estimates),
    )
    return format_heuristic_response(profile, estimate, now=now)
