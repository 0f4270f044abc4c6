"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from ctree.interface.api.routes import comments, health
from ctree.util.di.container import create_container, setup_di
from ctree.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py and pass a test container.

    Args:
        container: DI container, the production container when omitted
    """
    app_instance = FastAPI(
        title="Comment Tree API",
        description="Threaded comments with full-text search",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance


# Create app instance for uvicorn
app = create_app()
