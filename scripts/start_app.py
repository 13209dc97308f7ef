#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from arena.config import Settings
from arena.util.error import ConfigurationError
from arena.util.logging import setup_logging
from arena.util.observability import configure_logfire

INSECURE_SECRET = "CHANGE_ME_IN_PRODUCTION"


def check_settings(settings: Settings) -> None:
    """Refuse to serve production traffic with placeholder secrets.

    Raises:
        ConfigurationError: If a required secret still has its default
    """
    if settings.environment != "production":
        return
    if settings.auth.jwt_secret == INSECURE_SECRET:
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
    if settings.profiles.service_key == INSECURE_SECRET:
        raise ConfigurationError("PROFILES__SERVICE_KEY must be set in production")


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        check_settings(settings)
        logfire.info("Starting FastAPI application", port=settings.port)

        uvicorn.run(
            "arena.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
