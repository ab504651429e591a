"""Shared utilities: logging, settings, base models."""

from agecheck_utils.base import LenientModel, StrictModel
from agecheck_utils.logging import get_logger
from agecheck_utils.settings import ConfigurationError, Settings, get_settings

__all__ = [
    "ConfigurationError",
    "LenientModel",
    "Settings",
    "StrictModel",
    "get_logger",
    "get_settings",
]
