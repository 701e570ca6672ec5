"""Application factory for the FastAPI app."""

from __future__ import annotations

from fastapi import FastAPI

from todo_api import __version__
from todo_api.api.routes import health_router, todos_router
from todo_api.core.config import settings
from todo_api.core.exception_handlers import setup_exception_handlers
from todo_api.core.logging import configure_logging
from todo_api.core.middleware import request_id_middleware
from todo_api.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Todo Store API",
        description=(
            "Per-user todo lists with hard quotas: at most 1000 users, 500 todos "
            "per user and 1000 characters per todo. Each X-API-Key owns its own "
            "private list."
        ),
        version=__version__,
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(todos_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
