"""Observability configuration using Logfire.

Spans and structured logs cover the HTTP layer, the comment service and
every SQL statement, including each retry attempt of the executor.

Usage:
    import logfire

    logfire.info("Comment created", comment_id=comment.id)

    with logfire.span("comment_service.search", query=query):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from ctree.config import Settings

SERVICE_NAME = "ctree-api"
SERVICE_VERSION = "0.1.0"


def _sends_to_logfire(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send only when a token exists."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is created.

    Args:
        settings: Application settings
    """
    send_to_logfire = _sends_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes."""
    logfire.instrument_fastapi(app, capture_headers=False, excluded_urls="/health")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement sent through engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
