"""
FastAPI application factory.

Builds the maternal care API: CORS and request logging middleware, domain
exception handlers, the versioned pregnancy/reminder/admin routers and a
lightweight health probe.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from maternal_care.api.exception_handlers import register_exception_handlers
from maternal_care.api.middleware import RequestLoggingMiddleware
from maternal_care.api.router import api_router
from maternal_care.config.settings import Settings, get_settings
from maternal_care.core.lifecycle import lifespan

logger = logging.getLogger(__name__)


class AppFactory:
    """Assembles the API around a single Settings instance."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def create_app(self) -> FastAPI:
        settings = self._settings
        api_prefix = settings.API_V1_STR
        app = FastAPI(
            title=settings.PROJECT_NAME,
            description=settings.PROJECT_DESCRIPTION,
            version=settings.VERSION,
            # Interactive docs are only exposed while debugging
            docs_url=f"{api_prefix}/docs" if settings.DEBUG else None,
            redoc_url=f"{api_prefix}/redoc" if settings.DEBUG else None,
            lifespan=lifespan,
        )

        self._add_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router, prefix=api_prefix)
        self._add_health_probe(app)

        logger.info(
            f"{settings.PROJECT_NAME} ready: prefix={api_prefix}, "
            f"channels={settings.notification_channels}, scheduler={settings.REMINDER_SCHEDULER_ENABLED}"
        )
        return app

    def _add_middleware(self, app: FastAPI) -> None:
        # Starlette runs the last added middleware first, so request ids are
        # assigned before CORS answers preflight requests.
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"] if self._settings.is_development else [],
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )
        app.add_middleware(RequestLoggingMiddleware)

    def _add_health_probe(self, app: FastAPI) -> None:
        environment = self._settings.ENVIRONMENT

        @app.get("/health", tags=["health"])
        async def health() -> dict[str, str]:
            """Liveness probe; never touches the database or the notifiers."""
            return {"status": "ok", "environment": environment}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the maternal care API, optionally with explicit settings."""
    return AppFactory(settings).create_app()
