"""Standard library logging setup.

Application code logs through Logfire directly. Third-party libraries
(uvicorn, SQLAlchemy, alembic, asyncpg) use stdlib logging, which is
written to stdout and forwarded to Logfire.
"""

import logging
import sys

import logfire

from ctree.config import Settings

# Pool checkouts and per-statement echo are too chatty outside debug
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger.

    Call after configure_logfire so forwarded records are exported.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logfire.LogfireLoggingHandler(),
        ],
        force=True,
    )

    if not settings.debug:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
