"""Profile providers: fetch a user record from one third-party upstream.

Each provider adapts its upstream's wire format into a shared RawProfile,
which the estimator consumes without knowing where it came from.
"""

from agecheck_providers.base import BaseHttpProvider, ProfileProvider
from agecheck_providers.errors import ErrorCode, ProviderError
from agecheck_providers.instagram import InstagramProvider
from agecheck_providers.registry import (
    PROVIDER_CLASSES,
    ProviderRegistry,
    UnknownProviderError,
    build_registry,
)
from agecheck_providers.snapchat import SnapchatProvider
from agecheck_providers.throttle import FixedIntervalThrottle
from agecheck_providers.twitter import TwitterProvider
from agecheck_providers.types import RawProfile, RelatedAccount

__all__ = [
    "PROVIDER_CLASSES",
    "BaseHttpProvider",
    "ErrorCode",
    "FixedIntervalThrottle",
    "InstagramProvider",
    "ProfileProvider",
    "ProviderError",
    "ProviderRegistry",
    "RawProfile",
    "RelatedAccount",
    "SnapchatProvider",
    "TwitterProvider",
    "UnknownProviderError",
    "build_registry",
]
