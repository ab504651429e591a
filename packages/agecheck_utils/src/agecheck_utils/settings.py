"""Service settings with Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Provider name -> settings attribute holding its credential
PROVIDER_CREDENTIALS: dict[str, str] = {
    "snapchat": "ensembledata_token",
    "instagram": "ensembledata_token",
    "twitter": "twitterx_apikey",
}


class ConfigurationError(Exception):
    """Raised when settings cannot support the enabled providers."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    app_mode: Literal["development", "production"] = Field(
        default="development",
        alias="APP_MODE",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "silent"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")  # noqa: S104
    port: int = Field(default=8080, alias="PORT")

    # Providers
    enabled_providers: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["snapchat", "instagram", "twitter"],
        alias="ENABLED_PROVIDERS",
    )
    provider_min_interval: float = Field(default=2.0, ge=0.0, alias="PROVIDER_MIN_INTERVAL")
    provider_timeout: float = Field(default=30.0, gt=0.0, alias="PROVIDER_TIMEOUT")

    # API Keys
    ensembledata_token: SecretStr | None = Field(default=None, alias="ENSEMBLEDATA_TOKEN")
    twitterx_apikey: SecretStr | None = Field(default=None, alias="TWITTERX_APIKEY")

    @field_validator("enabled_providers", mode="before")
    @classmethod
    def _split_providers(cls, value: object) -> object:
        """Accept a comma-separated string from the environment."""
        if isinstance(value, str):
            return [item.strip().lower() for item in value.split(",") if item.strip()]
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_mode == "production"

    @property
    def is_silent(self) -> bool:
        """Check if logging should be suppressed."""
        return self.log_level == "silent"

    def credential_for(self, provider: str) -> str | None:
        """Return the plain credential configured for a provider, if any."""
        attr = PROVIDER_CREDENTIALS.get(provider)
        if attr is None:
            return None
        secret: SecretStr | None = getattr(self, attr)
        return secret.get_secret_value() if secret is not None else None

    def validate_providers(self) -> None:
        """Check that every enabled provider is known and has a credential.

        Raises:
            ConfigurationError: Listing every problem found.
        """
        problems: list[str] = []
        if not self.enabled_providers:
            problems.append("ENABLED_PROVIDERS is empty")

        for name in self.enabled_providers:
            attr = PROVIDER_CREDENTIALS.get(name)
            if attr is None:
                problems.append(f"Unknown provider: {name}")
            elif not self.credential_for(name):
                problems.append(f"{attr.upper()} is not set (required by {name})")

        if problems:
            raise ConfigurationError(problems)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
