"""Pytest fixtures and configuration."""

from __future__ import annotations

import os

# Set environment variables BEFORE any imports that might load settings
# This is necessary because settings are cached at first use
os.environ.setdefault("APP_MODE", "development")
os.environ.setdefault("LOG_LEVEL", "silent")
os.environ.setdefault("ENSEMBLEDATA_TOKEN", "test-ensembledata-token")
os.environ.setdefault("TWITTERX_APIKEY", "test-api-key")
os.environ.setdefault("PROVIDER_MIN_INTERVAL", "0")

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from agecheck_providers import ProviderError, ProviderRegistry, RawProfile, RelatedAccount
from fastapi.testclient import TestClient


class FakeProvider:
    """In-memory ProfileProvider recording every call."""

    def __init__(
        self,
        name: str = "snapchat",
        *,
        profile: RawProfile | None = None,
        error: ProviderError | None = None,
    ) -> None:
        self.name = name
        self.label = name.capitalize()
        self.profile = profile
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    async def fetch_profile(self, username: str) -> RawProfile:
        self.calls.append(username)
        if self.error is not None:
            raise self.error
        if self.profile is None:
            raise ProviderError.not_found(username)
        return self.profile

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up mock environment variables for testing."""
    monkeypatch.setenv("APP_MODE", "development")
    monkeypatch.setenv("LOG_LEVEL", "silent")
    monkeypatch.setenv("ENSEMBLEDATA_TOKEN", "test-ensembledata-token")
    monkeypatch.setenv("TWITTERX_APIKEY", "test-api-key")


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return datetime(2025, 6, 1, tzinfo=UTC)


@pytest.fixture
def snapchat_profile() -> RawProfile:
    """Profile without a creation timestamp."""
    return RawProfile(
        provider="snapchat",
        username="abc",
        display_name="Jane Doe",
        follower_count=500,
        avatar_url="https://example.com/snapcode.svg",
        bio=None,
    )


@pytest.fixture
def instagram_profile() -> RawProfile:
    """Profile with a provider-reported creation timestamp and related accounts."""
    return RawProfile(
        provider="instagram",
        username="jane.doe",
        display_name="Jane Doe",
        follower_count=12_345,
        avatar_url="https://example.com/pic.jpg",
        bio="Photographer",
        creation_timestamp=datetime(2014, 3, 15, 12, 0, tzinfo=UTC),
        related_accounts=(
            RelatedAccount(
                username="john.doe",
                display_name="John Doe",
                avatar_url="https://example.com/john.jpg",
                is_verified=True,
            ),
        ),
    )


@pytest.fixture
def fake_snapchat(snapchat_profile: RawProfile) -> FakeProvider:
    """Snapchat provider returning snapchat_profile."""
    return FakeProvider("snapchat", profile=snapchat_profile)


@pytest.fixture
def fake_instagram(instagram_profile: RawProfile) -> FakeProvider:
    """Instagram provider returning instagram_profile."""
    return FakeProvider("instagram", profile=instagram_profile)


@pytest.fixture
def registry(fake_snapchat: FakeProvider, fake_instagram: FakeProvider) -> ProviderRegistry:
    """Registry with the two fake providers."""
    return ProviderRegistry([fake_snapchat, fake_instagram])


@pytest.fixture
def client(registry: ProviderRegistry) -> Iterator[TestClient]:
    """Test client for an app wired to fake providers."""
    from api import create_app

    with TestClient(create_app(registry=registry)) as test_client:
        yield test_client


@pytest.fixture
def fake_provider_cls() -> type[FakeProvider]:
    """FakeProvider class, for tests that build their own."""
    return FakeProvider
