"""Twitter API client using RapidAPI."""

from __future__ import annotations

from typing import Any

from agecheck_providers.base import BaseHttpProvider
from agecheck_providers.errors import ProviderError
from agecheck_providers.types import RawProfile, TwitterApiUser

RAPIDAPI_HOST = "twitterx-api.p.rapidapi.com"
RAPIDAPI_BASE_URL = f"https://{RAPIDAPI_HOST}"


class TwitterProvider(BaseHttpProvider):
    """Twitter user lookup via RapidAPI. Always reports legacy.created_at."""

    name = "twitter"
    label = "TwitterX"
    base_url = RAPIDAPI_BASE_URL

    def _headers(self) -> dict[str, str]:
        return {
            "X-RapidAPI-Key": self._credential,
            "X-RapidAPI-Host": RAPIDAPI_HOST,
        }

    def _request(self, username: str) -> tuple[str, dict[str, str]]:
        return f"/user/{username}", {}

    def _parse(self, username: str, payload: Any) -> RawProfile:
        if not isinstance(payload, dict) or not payload.get("legacy"):
            raise ProviderError.not_found(username, provider_response=payload)

        user = TwitterApiUser.model_validate(payload)
        legacy = user.legacy

        return RawProfile(
            provider=self.name,
            username=legacy.screen_name,
            display_name=legacy.name,
            follower_count=max(0, legacy.followers_count),
            avatar_url=legacy.profile_image_url_https or "",
            bio=legacy.description or None,
            creation_timestamp=legacy.created_at,
        )
