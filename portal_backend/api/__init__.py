"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    bulk_update_router,
    consent_router,
    diagnostics_router,
    health_router,
    job_status_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(bulk_update_router)
api_router.include_router(job_status_router)
api_router.include_router(consent_router)
api_router.include_router(diagnostics_router)

__all__ = ["api_router"]
