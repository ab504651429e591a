"""Provider response types.

Normalized models are strict and built by our own code. Wire models mirror
the upstream JSON loosely: unknown fields are ignored and only what we read
is validated.
"""

from __future__ import annotations

from datetime import UTC, datetime

from agecheck_estimator import ProfileSignals
from agecheck_utils import LenientModel, StrictModel
from pydantic import Field, field_validator

# =============================================================================
# Normalized profile
# =============================================================================


class RelatedAccount(StrictModel):
    """Account the provider lists as related to the requested one."""

    username: str
    display_name: str = ""
    avatar_url: str = ""
    is_verified: bool = False


class RawProfile(StrictModel):
    """Provider-agnostic profile record."""

    provider: str
    username: str
    display_name: str = ""
    follower_count: int = Field(default=0, ge=0)
    avatar_url: str = ""
    bio: str | None = None
    creation_timestamp: datetime | None = None  # Authoritative when present
    related_accounts: tuple[RelatedAccount, ...] = ()

    @property
    def has_authoritative_timestamp(self) -> bool:
        """True when the provider reported the creation time itself."""
        return self.creation_timestamp is not None

    def to_signals(self) -> ProfileSignals:
        """Signals for heuristic estimation."""
        return ProfileSignals(
            username=self.username,
            display_name=self.display_name,
            follower_count=self.follower_count,
        )


# =============================================================================
# EnsembleData: Snapchat
# =============================================================================


class SnapchatUser(LenientModel):
    """User object from EnsembleData's Snapchat user info endpoint."""

    name: str | None = None
    display_name: str | None = None
    snapcode: str | None = None
    followers: int | None = None
    bio: str | None = None


class SnapchatResponse(LenientModel):
    """Envelope of the Snapchat user info endpoint."""

    data: SnapchatUser | None = None


# =============================================================================
# EnsembleData: Instagram
# =============================================================================


class InstagramCount(LenientModel):
    """Edge counter, e.g. edge_followed_by."""

    count: int = 0


class InstagramRelatedNode(LenientModel):
    """Related profile node."""

    username: str
    full_name: str | None = None
    profile_pic_url: str | None = None
    is_verified: bool = False


class InstagramRelatedEdge(LenientModel):
    """Edge wrapper around a related profile."""

    node: InstagramRelatedNode


class InstagramRelatedProfiles(LenientModel):
    """edge_related_profiles container."""

    edges: list[InstagramRelatedEdge] = Field(default_factory=list)


class InstagramUser(LenientModel):
    """User object from EnsembleData's Instagram detailed info endpoint."""

    username: str | None = None
    full_name: str | None = None
    biography: str | None = None
    profile_pic_url: str | None = None
    followers: InstagramCount = Field(default_factory=InstagramCount, alias="edge_followed_by")
    related: InstagramRelatedProfiles = Field(
        default_factory=InstagramRelatedProfiles,
        alias="edge_related_profiles",
    )
    date_joined: datetime | None = None  # Epoch seconds, only for some accounts

    @field_validator("date_joined", mode="before")
    @classmethod
    def _parse_date_joined(cls, value: object) -> object:
        """Convert epoch seconds; 0 means the join date is hidden."""
        if value is None or value == 0:
            return None
        if isinstance(value, int | float) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value, UTC)
            except (OverflowError, OSError, ValueError) as e:
                msg = f"date_joined is not an epoch timestamp in seconds: {value}"
                raise ValueError(msg) from e
        return value


class InstagramResponse(LenientModel):
    """Envelope of the Instagram detailed info endpoint."""

    data: InstagramUser | None = None


# =============================================================================
# RapidAPI: TwitterX
# =============================================================================

TWITTER_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"


class TwitterLegacy(LenientModel):
    """Legacy user fields from Twitter API (most profile data lives here)."""

    screen_name: str
    name: str = ""
    description: str | None = None
    created_at: datetime
    followers_count: int = 0
    profile_image_url_https: str | None = None
    verified: bool = False

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: object) -> object:
        """Parse "Sat Jan 01 00:00:00 +0000 2020"."""
        if isinstance(value, str):
            return datetime.strptime(value, TWITTER_DATE_FORMAT).astimezone(UTC)
        return value


class TwitterApiUser(LenientModel):
    """User object from Twitter API response."""

    rest_id: str
    is_blue_verified: bool = False
    legacy: TwitterLegacy
