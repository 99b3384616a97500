"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, portal_backend.api, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from portal_backend.api.cors import ALLOWED_METHODS, PreflightCORSMiddleware
from portal_backend.api.deps.dependencies import get_service_cache
from portal_backend.api.routers.router_utils import register_exception_handlers
from portal_backend.configs import get_settings
from portal_backend.observability import configure_logging
from portal_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

from . import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info(f"Configuration loaded: {settings.redacted()}")
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.job_store
    _ = cache.bulk_update_service
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    active = cache.bulk_update_service.active_jobs
    if active:
        logger.warning(f"Shutting down with {active} bulk update job(s) in flight")
    await cache.close()
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Student Portal Backend",
        description="Bulk record updates with job polling and consent form submission",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # CORS is added last so it wraps everything, including error responses
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=["*"],
        allow_methods=ALLOWED_METHODS,
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "portal_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
