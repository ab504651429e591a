"""Entry point: python -m api."""

from __future__ import annotations

import sys

import uvicorn
from agecheck_utils import ConfigurationError, get_logger, get_settings

from api.app import create_app

log = get_logger("api")


def main() -> None:
    """Validate configuration and serve until interrupted."""
    settings = get_settings()
    try:
        app = create_app(settings)
    except ConfigurationError as e:
        log.error("invalid_configuration", problems=e.problems)
        sys.exit(1)

    log.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="critical" if settings.is_silent else settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
