"""FastAPI application factory."""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request, Response

from payments_api import __version__
from payments_api.config import Settings, get_settings
from payments_api.entrypoints.api.dependencies import Container
from payments_api.entrypoints.api.errors import register_exception_handlers
from payments_api.entrypoints.api.routes import monitoring_router, payment_router
from payments_api.logging_config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    """Build the API.

    Args:
        settings: Configuration; loaded from the environment when omitted.
        container: Pre-wired use cases; tests pass one with fixed clocks
            and fake adapters. Built from settings when omitted.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    container = container or Container.build(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "application_startup",
            business_timezone=settings.business_timezone,
            geoip_enabled=settings.geoip_enabled,
        )
        yield
        close = getattr(container.geo_locator, "close", None)
        if close is not None:
            close()
        logger.info("application_shutdown")

    app = FastAPI(
        title="Payments API",
        description="Records payment instructions and handles same-day cancellation fees.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    app.middleware("http")(_request_context_middleware)
    register_exception_handlers(app)

    app.include_router(payment_router)
    app.include_router(monitoring_router)

    return app


async def _request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id to every log line emitted while serving the request."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start_time = time.perf_counter()

    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )
    logger.debug("request_started")
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_seconds=round(time.perf_counter() - start_time, 6),
        )
        return response
    finally:
        structlog.contextvars.clear_contextvars()
