"""API routers."""

from .bulk_update import router as bulk_update_router
from .consent import router as consent_router
from .diagnostics import router as diagnostics_router
from .health import router as health_router
from .job_status import router as job_status_router

__all__ = [
    "bulk_update_router",
    "consent_router",
    "diagnostics_router",
    "health_router",
    "job_status_router",
]
