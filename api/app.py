"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from agecheck_providers import ProviderError, ProviderRegistry, build_registry
from agecheck_utils import Settings, get_logger, get_settings
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import ApiConfig, get_config
from api.routes import router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from starlette.responses import Response

log = get_logger("api.app")


def create_app(
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
    config: ApiConfig | None = None,
) -> FastAPI:
    """Build the service.

    Args:
        settings: Service settings; defaults to the environment.
        registry: Pre-built providers. When omitted, settings are validated
            and providers are built from them.
        config: Static response configuration.

    Returns:
        Configured FastAPI app.

    Raises:
        ConfigurationError: If settings cannot support the enabled providers.
    """
    settings = settings or get_settings()
    config = config or get_config()
    if registry is None:
        settings.validate_providers()
        registry = build_registry(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info("startup", providers=registry.available(), mode=settings.app_mode)
        yield
        await registry.aclose()
        log.info("shutdown")

    app = FastAPI(title=config.title, lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def powered_by(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Powered-By"] = config.powered_by
        return response

    @app.exception_handler(ProviderError)
    async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
        log.warning(
            "upstream_error",
            path=request.url.path,
            code=exc.code,
            status=exc.http_status,
            error=exc.message,
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_payload())

    app.include_router(router)
    return app
