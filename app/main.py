"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized failure-to-errno mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- The record store, opened at startup and closed at shutdown

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import Settings, settings
from app.infrastructure.boxes.record_store import SqlRecordStore
from app.interfaces.boxes.router import register_box, router as boxes_router
from app.interfaces.health import router as health_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import build_limiter, build_register_limit

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: own the record store for the process lifetime."""
    app_settings: Settings = app.state.settings
    store = SqlRecordStore(
        app_settings.database_url,
        allow_clear=app_settings.allow_clear,
    )
    app.state.record_store = store
    logger.info("Record store opened")
    try:
        yield
    finally:
        store.close()
        logger.info("Record store closed")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        app_settings: Settings to run with. Defaults to the environment.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # --- Rate Limiting ---
    limiter = build_limiter(app_settings)
    # /register is counted against its own budget only.
    limiter.exempt(register_box)
    app.state.limiter = limiter
    app.state.register_rate_limit = build_register_limit(app_settings)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(boxes_router)

    return app


app = create_app()
