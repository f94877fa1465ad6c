#!/usr/bin/env python3
"""Start the Port42 API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from port42.config import Settings
from port42.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Port42 API",
            port=settings.api.port,
            environment=settings.environment,
            git_sha=settings.git_sha,
        )

        # Importing the app builds the DI container; Logfire is already configured.
        # A single worker: realtime rooms live in this process's memory.
        uvicorn.run(
            "port42.interface.api.app:app",
            host="0.0.0.0",
            port=settings.api.port,
            workers=1,
            proxy_headers=True,
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
