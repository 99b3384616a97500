"""Service orchestrators."""

from .bulk_update_service import BulkUpdateService
from .consent_service import ConsentService
from .job_status_service import JobStatusService

__all__ = [
    "BulkUpdateService",
    "ConsentService",
    "JobStatusService",
]
