"""Instagram profiles via EnsembleData."""

from __future__ import annotations

from typing import Any

from agecheck_providers.base import BaseHttpProvider
from agecheck_providers.errors import ProviderError
from agecheck_providers.snapchat import ENSEMBLEDATA_BASE_URL
from agecheck_providers.types import InstagramResponse, RawProfile, RelatedAccount


class InstagramProvider(BaseHttpProvider):
    """EnsembleData Instagram detailed info.

    The join date is only present for some accounts; related profiles are
    passed through when the upstream lists them.
    """

    name = "instagram"
    label = "EnsembleData"
    base_url = ENSEMBLEDATA_BASE_URL

    def _request(self, username: str) -> tuple[str, dict[str, str]]:
        return "/instagram/user/detailed-info", {"username": username, "token": self._credential}

    def _parse(self, username: str, payload: Any) -> RawProfile:
        response = InstagramResponse.model_validate(payload)
        user = response.data
        if user is None:
            raise ProviderError.not_found(username, provider_response=payload)

        related = tuple(
            RelatedAccount(
                username=edge.node.username,
                display_name=edge.node.full_name or "",
                avatar_url=edge.node.profile_pic_url or "",
                is_verified=edge.node.is_verified,
            )
            for edge in user.related.edges
        )

        return RawProfile(
            provider=self.name,
            username=user.username or username,
            display_name=user.full_name or "",
            follower_count=max(0, user.followers.count),
            avatar_url=user.profile_pic_url or "",
            bio=user.biography or None,
            creation_timestamp=user.date_joined,
            related_accounts=related,
        )
