"""
Job status API endpoints.

Routes:
- GET /job-status/{job_id} - Poll a bulk update job
- GET /toggle-status/{job_id} - Legacy alias
- GET /job-status - Missing id (400)

Dependencies: portal_backend.application.services
System role: Job status HTTP API
"""

from fastapi import APIRouter, Depends, Response

from portal_backend.api.deps import get_job_status_service
from portal_backend.application.services import JobStatusService
from portal_backend.core.exceptions import ValidationError

from .router_utils import handle_api_errors

router = APIRouter(tags=["jobs"])


@router.get("/toggle-status/{job_id}", include_in_schema=False)
@router.get("/job-status/{job_id}", name="job_status")
@handle_api_errors()
async def get_job_status(
    job_id: str,
    job_status_service: JobStatusService = Depends(get_job_status_service),
) -> dict:
    """
    Get job status and progress for frontend polling.

    Frontend should poll this endpoint every couple of seconds until the
    status is completed or failed.

    Args:
        job_id: Job id from the bulk update response
        job_status_service: Injected JobStatusService

    Returns:
        dict: Job snapshot with:
            - id, targetId, fieldName, value, toggleType
            - status: processing, completed or failed
            - progress: 0-100
            - totalRecords, processedRecords
            - errors: [{recordId, error}]
            - startTime, endTime, message, error
            - estimatedTimeRemaining: only while processing with a measurable rate

    Raises:
        404: Job not found or expired

    Example Response:
        {
            "id": "job_1718000000000_3f9a1c2b7",
            "status": "processing",
            "progress": 42,
            "totalRecords": 60,
            "processedRecords": 25,
            "errors": [],
            "startTime": "2025-01-01T12:00:00.000Z",
            "estimatedTimeRemaining": "3 seconds"
        }
    """
    return await job_status_service.get_job_status(job_id)


@router.get("/toggle-status", include_in_schema=False)
@router.get("/job-status", include_in_schema=False)
@handle_api_errors()
async def get_job_status_without_id() -> dict:
    """Reject polls that carry no job id."""
    raise ValidationError("Job ID is required", field="jobId")


@router.options("/toggle-status/{job_id}", include_in_schema=False)
@router.options("/job-status/{job_id}", include_in_schema=False)
async def job_status_preflight(job_id: str) -> Response:
    """Answer CORS preflight with an empty 200."""
    return Response(status_code=200)
