"""Base Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model with strict validation for values we construct ourselves.

    Estimates, normalized profiles and response fragments inherit from this
    class to ensure:
    - No type coercion (strict=True)
    - Immutable after creation (frozen=True)
    - Fail on unknown fields (extra="forbid")
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        use_enum_values=True,
    )


class LenientModel(BaseModel):
    """Base model for third-party payloads.

    Upstream providers add fields without notice, so unknown keys are
    ignored and only the fields we read are validated.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
