"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from arguslive.api.routes import (
    channels,
    health,
    recordings,
    series_timers,
    status,
    streams,
    timers,
)
from arguslive.config import VERSION
from arguslive.utilities.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    from arguslive.argus import close_argus, get_factory
    from arguslive.services import close_livetv_service, init_livetv_service

    # Startup
    setup_logging()
    logger.info("[STARTUP] Starting arguslive...")

    factory = get_factory()
    if factory.is_configured:
        logger.info(
            "[STARTUP] ARGUS TV at %s, connection will be verified on first use",
            factory.settings.base_url,
        )
    else:
        logger.warning("[STARTUP] ARGUS TV server address/port not configured")

    # The keep-alive loop is also started by the first opened channel stream
    init_livetv_service(factory=factory, start_keepalive=factory.is_configured)
    logger.info("[STARTUP] arguslive ready")

    yield

    # Shutdown
    logger.info("[SHUTDOWN] Stopping arguslive...")
    close_livetv_service()
    close_argus()
    logger.info("[SHUTDOWN] arguslive stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="arguslive API",
        description="ARGUS TV live TV backend adapter",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(status.router, prefix="/api/v1", tags=["Status"])
    app.include_router(channels.router, prefix="/api/v1/channels", tags=["Channels"])
    app.include_router(timers.router, prefix="/api/v1/timers", tags=["Timers"])
    app.include_router(
        series_timers.router, prefix="/api/v1/series-timers", tags=["Series Timers"]
    )
    app.include_router(recordings.router, prefix="/api/v1/recordings", tags=["Recordings"])
    app.include_router(streams.router, prefix="/api/v1/streams", tags=["Streams"])

    return app


app = create_app()
