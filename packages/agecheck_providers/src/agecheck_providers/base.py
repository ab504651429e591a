"""Profile provider capability and the shared HTTP implementation."""

from __future__ import annotations

import ssl
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

import httpx
from agecheck_utils import get_logger
from pydantic import ValidationError

from agecheck_providers.errors import ProviderError
from agecheck_providers.throttle import FixedIntervalThrottle

if TYPE_CHECKING:
    from agecheck_providers.types import RawProfile

log = get_logger("agecheck_providers.base")

AUTH_EXPIRED_STATUSES = frozenset({401, 403, 493})  # 493: EnsembleData subscription ended


@runtime_checkable
class ProfileProvider(Protocol):
    """Fetches one profile from one upstream and normalizes it."""

    name: str
    label: str

    async def fetch_profile(self, username: str) -> RawProfile:
        """Return the normalized profile or raise ProviderError."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


def _is_certificate_error(error: BaseException) -> bool:
    """Walk the exception chain looking for a TLS certificate failure."""
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        if "certificate has expired" in str(current).lower():
            return True
        current = current.__cause__ or current.__context__
    return False


class BaseHttpProvider(ABC):
    """Provider backed by a JSON-over-HTTP upstream.

    Subclasses describe the request and parse the payload; this class owns
    throttling, transport errors and status code mapping.
    """

    name: ClassVar[str]
    label: ClassVar[str]
    base_url: ClassVar[str]

    def __init__(
        self,
        credential: str,
        *,
        throttle: FixedIntervalThrottle | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            credential: API token or key for the upstream.
            throttle: Shared throttle; defaults to a 2 second interval.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._credential = credential
        self._throttle = throttle or FixedIntervalThrottle(2.0)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json", **self._headers()},
            timeout=timeout,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        """Extra headers for every request."""
        return {}

    @abstractmethod
    def _request(self, username: str) -> tuple[str, dict[str, str]]:
        """Path and query parameters for a profile lookup."""

    @abstractmethod
    def _parse(self, username: str, payload: Any) -> RawProfile:
        """Build a RawProfile from the decoded JSON body.

        Raises:
            ProviderError: If the payload holds no user.
            ValidationError: If the payload does not match the wire schema.
        """

    async def fetch_profile(self, username: str) -> RawProfile:
        """Fetch and normalize a profile.

        Args:
            username: Validated username (without @).

        Returns:
            RawProfile for the account.

        Raises:
            ProviderError: On any upstream failure.
        """
        waited = await self._throttle.acquire()
        log.info("fetching_profile", provider=self.name, username=username, throttled=waited)

        path, params = self._request(username)
        payload = await self._get_json(username, path, params)

        try:
            profile = self._parse(username, payload)
        except ValidationError as e:
            log.warning("unexpected_payload", provider=self.name, error=str(e))
            raise ProviderError.malformed(
                self.label,
                str(e),
                details="Response did not match the expected profile schema",
            ) from e

        log.info(
            "profile_fetched",
            provider=self.name,
            username=profile.username,
            authoritative=profile.has_authoritative_timestamp,
        )
        return profile

    async def _get_json(self, username: str, path: str, params: dict[str, str]) -> Any:
        """GET a path and return the decoded JSON body."""
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise ProviderError.unavailable(self.label, str(e) or "Request timed out") from e
        except httpx.RequestError as e:
            if _is_certificate_error(e):
                raise ProviderError.certificate_expired(self.label, str(e)) from e
            if isinstance(e, httpx.ConnectError):
                raise ProviderError.unavailable(self.label, str(e)) from e
            raise ProviderError.upstream_error(self.label, str(e)) from e

        content_type = response.headers.get("content-type", "")
        log.info(
            "upstream_response",
            provider=self.name,
            status=response.status_code,
            content_type=content_type,
        )

        if response.status_code == 429:
            raise ProviderError.rate_limited()
        if response.status_code in AUTH_EXPIRED_STATUSES:
            raise ProviderError.auth_expired(self.label)
        if response.status_code >= 500:
            raise ProviderError.unavailable(self.label, f"Upstream returned {response.status_code}")

        if "application/json" not in content_type:
            raise ProviderError.non_json(self.label, content_type, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError.malformed(self.label, str(e)) from e

        if not response.is_success:
            raise ProviderError.not_found(username, provider_response=payload)

        return payload

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> BaseHttpProvider:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Exit async context manager."""
        await self.aclose()
