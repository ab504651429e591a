"""Snapchat profiles via EnsembleData."""

from __future__ import annotations

from typing import Any

from agecheck_utils import get_logger

from agecheck_providers.base import BaseHttpProvider
from agecheck_providers.errors import ProviderError
from agecheck_providers.types import RawProfile, SnapchatResponse

log = get_logger("agecheck_providers.snapchat")

ENSEMBLEDATA_BASE_URL = "https://ensembledata.com/apis"


class SnapchatProvider(BaseHttpProvider):
    """EnsembleData Snapchat user info. Never reports a creation time."""

    name = "snapchat"
    label = "EnsembleData"
    base_url = ENSEMBLEDATA_BASE_URL

    def _request(self, username: str) -> tuple[str, dict[str, str]]:
        return "/snapchat/user/info", {"name": username, "token": self._credential}

    def _parse(self, username: str, payload: Any) -> RawProfile:
        response = SnapchatResponse.model_validate(payload)
        user = response.data
        if user is None:
            raise ProviderError.not_found(username, provider_response=payload)

        if not user.bio:
            log.info("no_bio", username=username)

        return RawProfile(
            provider=self.name,
            username=user.name or username,
            display_name=user.display_name or "",
            follower_count=max(0, user.followers or 0),
            avatar_url=user.snapcode or "",
            bio=user.bio or None,
        )
