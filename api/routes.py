"""HTTP routes."""

from __future__ import annotations

from typing import Annotated, Any

from agecheck_estimator import format_timestamp
from agecheck_estimator.dates import utc_now
from agecheck_providers import ProviderRegistry, UnknownProviderError
from agecheck_utils import get_logger
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from api.service import check_account_age
from api.validation import INVALID_USERNAME_MESSAGE, is_valid_username

log = get_logger("api.routes")

router = APIRouter()


def get_registry(request: Request) -> ProviderRegistry:
    """Provider registry attached to the running app."""
    return request.app.state.registry


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Banner."""
    return "Social Age Checker API is running"


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy", "timestamp": format_timestamp(utc_now())}


@router.api_route("/api/{provider}-age/{username}", methods=["GET", "POST"])
async def account_age(
    provider: str,
    username: str,
    registry: Annotated[ProviderRegistry, Depends(get_registry)],
) -> JSONResponse:
    """Creation date, reported or estimated, for a username on a provider."""
    try:
        resolved = registry.resolve(provider)
    except UnknownProviderError as e:
        log.warning("unknown_provider", provider=provider)
        return JSONResponse(
            status_code=404,
            content={"error": str(e), "available_providers": e.available},
        )

    if not is_valid_username(username):
        log.warning("invalid_username", provider=provider, username=username)
        return JSONResponse(status_code=400, content={"error": INVALID_USERNAME_MESSAGE})

    body: dict[str, Any] = await check_account_age(resolved, username)
    return JSONResponse(content=body)
