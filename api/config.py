"""HTTP surface configuration and shared constants."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ApiConfig(BaseModel):
    """Static response configuration."""

    title: str = Field(default="Social Age Checker API", description="OpenAPI title")
    powered_by: str = Field(default="SocialAgeChecker", description="X-Powered-By header value")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS",
    )
    no_bio: str = Field(default="No bio", description="Description used when a profile has no bio")
    estimate_note: str = Field(
        default=(
            "This is an estimated creation date based on username, display name, "
            "and follower data. Actual creation date may vary. This tool is not "
            "affiliated with {platform}."
        ),
        description="Disclaimer attached to heuristic estimates",
    )


# Global config instance (can be overridden in tests)
DEFAULT_CONFIG = ApiConfig()


def get_config() -> ApiConfig:
    """Get the current API configuration."""
    return DEFAULT_CONFIG
