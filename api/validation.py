"""Inbound username validation."""

from __future__ import annotations

import re

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9._]{3,15}")
INVALID_USERNAME_MESSAGE = (
    "Invalid username format. Must be 3-15 alphanumeric characters, dots, or underscores."
)


def is_valid_username(username: str | None) -> bool:
    """True if username is 3-15 ASCII letters, digits, dots or underscores."""
    return bool(username) and USERNAME_PATTERN.fullmatch(username) is not None
