"""Provider registry: maps route names to configured provider instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agecheck_utils import get_logger

from agecheck_providers.instagram import InstagramProvider
from agecheck_providers.snapchat import SnapchatProvider
from agecheck_providers.throttle import FixedIntervalThrottle
from agecheck_providers.twitter import TwitterProvider

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agecheck_utils import Settings

    from agecheck_providers.base import BaseHttpProvider, ProfileProvider

log = get_logger("agecheck_providers.registry")

PROVIDER_CLASSES: dict[str, type[BaseHttpProvider]] = {
    SnapchatProvider.name: SnapchatProvider,
    InstagramProvider.name: InstagramProvider,
    TwitterProvider.name: TwitterProvider,
}


class UnknownProviderError(LookupError):
    """Raised when a route names a provider that is not enabled."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(f"Unknown provider: {name}")
        self.name = name
        self.available = available


class ProviderRegistry:
    """Registry of enabled profile providers."""

    def __init__(self, providers: Iterable[ProfileProvider] = ()) -> None:
        """Initialize the registry with already-built providers."""
        self._providers: dict[str, ProfileProvider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: ProfileProvider) -> None:
        """Add a provider under its name, replacing any previous one."""
        self._providers[provider.name] = provider

    def resolve(self, name: str) -> ProfileProvider:
        """Look up a provider by route name.

        Raises:
            UnknownProviderError: If no provider of that name is enabled.
        """
        provider = self._providers.get(name.lower())
        if provider is None:
            raise UnknownProviderError(name, self.available())
        return provider

    def available(self) -> list[str]:
        """Sorted names of enabled providers."""
        return sorted(self._providers)

    async def aclose(self) -> None:
        """Close every provider."""
        for provider in self._providers.values():
            await provider.aclose()


def build_registry(settings: Settings) -> ProviderRegistry:
    """Build providers for every enabled name in settings.

    Settings must already have passed validate_providers(). Providers that
    share an upstream share one throttle, so EnsembleData sees a single
    request stream regardless of which route was hit.

    Args:
        settings: Validated service settings.

    Returns:
        ProviderRegistry with one instance per enabled provider.
    """
    throttles: dict[str, FixedIntervalThrottle] = {}
    registry = ProviderRegistry()

    for name in settings.enabled_providers:
        provider_cls = PROVIDER_CLASSES[name]
        throttle = throttles.setdefault(
            provider_cls.base_url,
            FixedIntervalThrottle(settings.provider_min_interval),
        )
        credential = settings.credential_for(name)
        if credential is None:
            msg = f"No credential configured for {name}"
            raise ValueError(msg)

        registry.register(
            provider_cls(credential, throttle=throttle, timeout=settings.provider_timeout),
        )

    log.info("providers_registered", providers=registry.available())
    return registry
