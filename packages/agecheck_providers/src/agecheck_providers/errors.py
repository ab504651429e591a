"""Profile provider error types."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

NOT_FOUND_MESSAGE = "User not found or profile is private"


class ErrorCode(StrEnum):
    """Standardized provider error codes."""

    UPSTREAM_NOT_FOUND = "UPSTREAM_NOT_FOUND"
    UPSTREAM_RATE_LIMITED = "UPSTREAM_RATE_LIMITED"
    UPSTREAM_AUTH_EXPIRED = "UPSTREAM_AUTH_EXPIRED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_MALFORMED = "UPSTREAM_MALFORMED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


class ProviderError(Exception):
    """Fetch failure with a standardized code and an HTTP status to surface."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        http_status: int,
        details: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize provider error.

        Args:
            code: Standardized error code.
            message: Human-readable error message.
            http_status: Status returned to our own caller.
            details: Optional diagnostic text.
            extra: Additional diagnostic fields echoed in the response body.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details
        self.extra = extra or {}

    def is_code(self, code: ErrorCode) -> bool:
        """Check if this error matches a specific code."""
        return self.code == code

    def to_payload(self) -> dict[str, Any]:
        """JSON body describing this error."""
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        payload.update(self.extra)
        return payload

    @classmethod
    def not_found(cls, username: str, *, provider_response: Any = None) -> Self:
        """Create user not found error.

        An upstream `error` string in the body replaces the default message.
        """
        message = NOT_FOUND_MESSAGE
        if isinstance(provider_response, dict) and isinstance(provider_response.get("error"), str):
            message = provider_response["error"] or NOT_FOUND_MESSAGE
        extra = {"provider_response": provider_response} if provider_response is not None else None
        return cls(
            ErrorCode.UPSTREAM_NOT_FOUND,
            message,
            http_status=404,
            details=f"No profile returned for {username}",
            extra=extra,
        )

    @classmethod
    def rate_limited(cls) -> Self:
        """Create rate limit error."""
        return cls(
            ErrorCode.UPSTREAM_RATE_LIMITED,
            "Rate limit exceeded. Please try again later.",
            http_status=429,
        )

    @classmethod
    def auth_expired(cls, provider: str) -> Self:
        """Create expired subscription / credential error."""
        return cls(
            ErrorCode.UPSTREAM_AUTH_EXPIRED,
            f"{provider} subscription expired.",
            http_status=403,
            details="Please renew your subscription.",
        )

    @classmethod
    def certificate_expired(cls, provider: str, error_message: str) -> Self:
        """Create upstream TLS failure error."""
        return cls(
            ErrorCode.UPSTREAM_UNAVAILABLE,
            f"{provider} API unavailable due to expired SSL certificate",
            http_status=503,
            details="Please try again later or contact support.",
            extra={"errorMessage": error_message},
        )

    @classmethod
    def unavailable(cls, provider: str, error_message: str) -> Self:
        """Create upstream connectivity error."""
        return cls(
            ErrorCode.UPSTREAM_UNAVAILABLE,
            f"{provider} API unavailable",
            http_status=503,
            details=error_message,
        )

    @classmethod
    def non_json(cls, provider: str, content_type: str, text: str) -> Self:
        """Create error for a response that is not JSON at all."""
        return cls(
            ErrorCode.UPSTREAM_MALFORMED,
            f"Invalid response from {provider}",
            http_status=500,
            details=f"Expected JSON, received {content_type or 'no content type'}",
            extra={"responseText": text[:200]},
        )

    @classmethod
    def malformed(
        cls,
        provider: str,
        error_message: str,
        *,
        details: str = "Received invalid JSON, likely an HTML error page",
    ) -> Self:
        """Create error for a JSON response that cannot be parsed or validated."""
        return cls(
            ErrorCode.UPSTREAM_MALFORMED,
            f"Failed to parse {provider} response",
            http_status=500,
            details=details,
            extra={"errorMessage": error_message},
        )

    @classmethod
    def upstream_error(cls, provider: str, error_message: str) -> Self:
        """Create generic fetch failure."""
        return cls(
            ErrorCode.UPSTREAM_ERROR,
            f"Failed to fetch user info from {provider}",
            http_status=500,
            details=error_message,
        )
