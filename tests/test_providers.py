"""Tests for profile providers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest
from agecheck_providers import (
    ErrorCode,
    FixedIntervalThrottle,
    InstagramProvider,
    ProviderError,
    SnapchatProvider,
    TwitterProvider,
)

Handler = Callable[[httpx.Request], httpx.Response]


def _json(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json=payload)


def _provider(cls: type, handler: Handler, credential: str = "secret") -> Any:
    return cls(
        credential,
        throttle=FixedIntervalThrottle(0),
        transport=httpx.MockTransport(handler),
    )


SNAPCHAT_PAYLOAD = {
    "data": {
        "name": "abc",
        "display_name": "Jane Doe",
        "snapcode": "https://example.com/snapcode.svg",
        "followers": 500,
        "bio": "",
        "subscriber_count_visible": True,
    }
}

INSTAGRAM_PAYLOAD = {
    "data": {
        "username": "jane.doe",
        "full_name": "Jane Doe",
        "biography": "Photographer",
        "profile_pic_url": "https://example.com/pic.jpg",
        "edge_followed_by": {"count": 12345},
        "date_joined": 1394884800,
        "edge_related_profiles": {
            "edges": [
                {
                    "node": {
                        "username": "john.doe",
                        "full_name": "John Doe",
                        "profile_pic_url": "https://example.com/john.jpg",
                        "is_verified": True,
                    }
                }
            ]
        },
    }
}

TWITTER_PAYLOAD = {
    "rest_id": "123456789",
    "is_blue_verified": True,
    "legacy": {
        "screen_name": "testuser",
        "name": "Test User",
        "description": "A test user bio for testing purposes",
        "created_at": "Sat Jan 01 00:00:00 +0000 2022",
        "followers_count": 1000,
        "friends_count": 500,
        "profile_image_url_https": "https://example.com/avatar.png",
    },
}


class TestSnapchatProvider:
    """Tests for the EnsembleData Snapchat provider."""

    @pytest.mark.asyncio
    async def test_fetch_profile(self) -> None:
        """Test successful lookup and request shape."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _json(SNAPCHAT_PAYLOAD)

        async with _provider(SnapchatProvider, handler, "token-123") as provider:
            profile = await provider.fetch_profile("abc")

        assert profile.provider == "snapchat"
        assert profile.username == "abc"
        assert profile.display_name == "Jane Doe"
        assert profile.follower_count == 500
        assert profile.avatar_url == "https://example.com/snapcode.svg"
        assert profile.bio is None
        assert profile.creation_timestamp is None
        assert not profile.has_authoritative_timestamp

        assert seen[0].url.path == "/apis/snapchat/user/info"
        assert seen[0].url.params["name"] == "abc"
        assert seen[0].url.params["token"] == "token-123"

    @pytest.mark.asyncio
    async def test_missing_fields_fall_back(self) -> None:
        """Test defaults when the upstream omits optional fields."""
        async with _provider(SnapchatProvider, lambda _: _json({"data": {}})) as provider:
            profile = await provider.fetch_profile("abc")

        assert profile.username == "abc"
        assert profile.display_name == ""
        assert profile.follower_count == 0

    @pytest.mark.asyncio
    async def test_no_data_is_not_found(self) -> None:
        """Test that a body without a user maps to 404."""
        body = {"error": "user not found", "data": None}

        async with _provider(SnapchatProvider, lambda _: _json(body)) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("ghost")

        assert exc_info.value.is_code(ErrorCode.UPSTREAM_NOT_FOUND)
        assert exc_info.value.http_status == 404
        assert exc_info.value.message == "user not found"
        assert exc_info.value.to_payload()["provider_response"] == body

    @pytest.mark.asyncio
    async def test_not_found_default_message(self) -> None:
        """Test the default message when the upstream gives no error text."""
        async with _provider(SnapchatProvider, lambda _: _json({"data": None})) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("ghost")

        assert exc_info.value.message == "User not found or profile is private"


class TestErrorMapping:
    """Tests for transport and status code mapping shared by all providers."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "code", "http_status"),
        [
            (429, ErrorCode.UPSTREAM_RATE_LIMITED, 429),
            (493, ErrorCode.UPSTREAM_AUTH_EXPIRED, 403),
            (401, ErrorCode.UPSTREAM_AUTH_EXPIRED, 403),
            (404, ErrorCode.UPSTREAM_NOT_FOUND, 404),
            (502, ErrorCode.UPSTREAM_UNAVAILABLE, 503),
        ],
    )
    async def test_status_codes(self, status: int, code: ErrorCode, http_status: int) -> None:
        """Test upstream status codes map to our taxonomy."""
        handler = lambda _: _json({"detail": "nope"}, status)  # noqa: E731

        async with _provider(SnapchatProvider, handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("abc")

        assert exc_info.value.code == code
        assert exc_info.value.http_status == http_status

    @pytest.mark.asyncio
    async def test_non_json_response(self) -> None:
        """Test an HTML page is reported as malformed with a snippet."""
        html = "<html>" + "x" * 500 + "</html>"

        def handler(_: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=html, headers={"content-type": "text/html"})

        async with _provider(SnapchatProvider, handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("abc")

        payload = exc_info.value.to_payload()
        assert exc_info.value.code == ErrorCode.UPSTREAM_MALFORMED
        assert exc_info.value.http_status == 500
        assert payload["error"] == "Invalid response from EnsembleData"
        assert payload["details"] == "Expected JSON, received text/html"
        assert len(payload["responseText"]) == 200

    @pytest.mark.asyncio
    async def test_unparsable_json(self) -> None:
        """Test a JSON content type with a broken body."""

        def handler(_: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                content=b"{not json",
                headers={"content-type": "application/json"},
            )

        async with _provider(SnapchatProvider, handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("abc")

        assert exc_info.value.code == ErrorCode.UPSTREAM_MALFORMED
        assert exc_info.value.message == "Failed to parse EnsembleData response"

    @pytest.mark.asyncio
    async def test_expired_certificate(self) -> None:
        """Test TLS certificate failures map to 503 with a dedicated message."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "certificate has expired"
            raise httpx.ConnectError(msg, request=request)

        async with _provider(SnapchatProvider, handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("abc")

        assert exc_info.value.code == ErrorCode.UPSTREAM_UNAVAILABLE
        assert exc_info.value.http_status == 503
        assert "expired SSL certificate" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connect_error(self) -> None:
        """Test plain connectivity failures map to 503."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "connection refused"
            raise httpx.ConnectError(msg, request=request)

        async with _provider(SnapchatProvider, handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("abc")

        assert exc_info.value.code == ErrorCode.UPSTREAM_UNAVAILABLE
        assert exc_info.value.message == "EnsembleData API unavailable"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test timeouts map to 503."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "timed out"
            raise httpx.ReadTimeout(msg, request=request)

        async with _provider(SnapchatProvider, handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("abc")

        assert exc_info.value.http_status == 503


class TestInstagramProvider:
    """Tests for the EnsembleData Instagram provider."""

    @pytest.mark.asyncio
    async def test_fetch_profile(self) -> None:
        """Test join date and related accounts are normalized."""
        async with _provider(InstagramProvider, lambda _: _json(INSTAGRAM_PAYLOAD)) as provider:
            profile = await provider.fetch_profile("jane.doe")

        assert profile.provider == "instagram"
        assert profile.follower_count == 12345
        assert profile.bio == "Photographer"
        assert profile.creation_timestamp == datetime(2014, 3, 15, 12, 0, tzinfo=UTC)
        assert len(profile.related_accounts) == 1
        assert profile.related_accounts[0].username == "john.doe"
        assert profile.related_accounts[0].is_verified

    @pytest.mark.asyncio
    async def test_without_join_date(self) -> None:
        """Test that a missing join date leaves the profile for heuristics."""
        payload = {"data": {**INSTAGRAM_PAYLOAD["data"], "date_joined": None}}

        async with _provider(InstagramProvider, lambda _: _json(payload)) as provider:
            profile = await provider.fetch_profile("jane.doe")

        assert profile.creation_timestamp is None

    @pytest.mark.asyncio
    async def test_schema_mismatch(self) -> None:
        """Test that a wrongly typed field is reported as malformed."""
        payload = {"data": {"username": "jane.doe", "edge_followed_by": {"count": "many"}}}

        async with _provider(InstagramProvider, lambda _: _json(payload)) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("jane.doe")

        assert exc_info.value.code == ErrorCode.UPSTREAM_MALFORMED
        assert exc_info.value.details == "Response did not match the expected profile schema"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("date_joined", [1394884800000, 10**18, "yesterday"])
    async def test_bad_join_date_is_malformed(self, date_joined: object) -> None:
        """Test that a join date that is not epoch seconds is reported as malformed."""
        payload = {"data": {"username": "jane.doe", "date_joined": date_joined}}

        async with _provider(InstagramProvider, lambda _: _json(payload)) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("jane.doe")

        assert exc_info.value.code == ErrorCode.UPSTREAM_MALFORMED
        assert exc_info.value.http_status == 500
        assert "date_joined" in exc_info.value.to_payload()["errorMessage"]

    @pytest.mark.asyncio
    async def test_hidden_join_date(self) -> None:
        """Test that a zero join date is treated as absent."""
        payload = {"data": {**INSTAGRAM_PAYLOAD["data"], "date_joined": 0}}

        async with _provider(InstagramProvider, lambda _: _json(payload)) as provider:
            profile = await provider.fetch_profile("jane.doe")

        assert profile.creation_timestamp is None


class TestTwitterProvider:
    """Tests for the RapidAPI Twitter provider."""

    @pytest.mark.asyncio
    async def test_fetch_profile(self) -> None:
        """Test created_at is parsed as the authoritative timestamp."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _json(TWITTER_PAYLOAD)

        async with _provider(TwitterProvider, handler, "rapid-key") as provider:
            profile = await provider.fetch_profile("testuser")

        assert profile.username == "testuser"
        assert profile.display_name == "Test User"
        assert profile.creation_timestamp == datetime(2022, 1, 1, tzinfo=UTC)
        assert profile.related_accounts == ()

        assert seen[0].url.path == "/user/testuser"
        assert seen[0].headers["X-RapidAPI-Key"] == "rapid-key"
        assert seen[0].headers["X-RapidAPI-Host"] == "twitterx-api.p.rapidapi.com"

    @pytest.mark.asyncio
    async def test_missing_user(self) -> None:
        """Test that a body without legacy fields maps to 404."""
        body = {"errors": [{"message": "User not found"}]}

        async with _provider(TwitterProvider, lambda _: _json(body)) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("ghost")

        assert exc_info.value.http_status == 404

    @pytest.mark.asyncio
    async def test_null_legacy_is_not_found(self) -> None:
        """Test that a user object with null legacy fields maps to 404."""
        body = {"rest_id": "123456789", "legacy": None}

        async with _provider(TwitterProvider, lambda _: _json(body)) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.fetch_profile("ghost")

        assert exc_info.value.code == ErrorCode.UPSTREAM_NOT_FOUND
        assert exc_info.value.http_status == 404


class TestFixedIntervalThrottle:
    """Tests for the outbound throttle."""

    @pytest.mark.asyncio
    async def test_spaces_calls(self) -> None:
        """Test that back-to-back calls wait out the interval."""
        clock = [0.0]
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)
            clock[0] += seconds

        throttle = FixedIntervalThrottle(2.0, clock=lambda: clock[0], sleep=fake_sleep)

        assert await throttle.acquire() == 0.0
        assert await throttle.acquire() == 2.0
        clock[0] += 5.0
        assert await throttle.acquire() == 0.0
        assert sleeps == [2.0]

    @pytest.mark.asyncio
    async def test_provider_uses_throttle(self) -> None:
        """Test that every fetch goes through the throttle."""
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)

        throttle = FixedIntervalThrottle(2.0, clock=lambda: 0.0, sleep=fake_sleep)
        provider = SnapchatProvider(
            "token",
            throttle=throttle,
            transport=httpx.MockTransport(lambda _: _json(SNAPCHAT_PAYLOAD)),
        )

        async with provider:
            await provider.fetch_profile("abc")
            await provider.fetch_profile("abc")

        assert sleeps == [2.0]

    def test_negative_interval(self) -> None:
        """Test that a negative interval is rejected."""
        with pytest.raises(ValueError, match="min_interval"):
            FixedIntervalThrottle(-1.0)
