#!/usr/bin/env python3
"""Start the comment tree API under uvicorn.

Startup failures are reported to Logfire before the process exits.
"""

import sys

import logfire
import uvicorn

from ctree.config import Settings
from ctree.util.logging import setup_logging
from ctree.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Logfire first so that startup errors are captured
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting comment tree API",
            host=settings.host,
            port=settings.port,
            search_language=settings.search.language,
            retry_attempts=settings.retry.attempts,
        )

        uvicorn.run(
            "ctree.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
