"""
Job status service.

Read-only view over the job store for frontend polling. Adds a derived
``estimatedTimeRemaining`` to in-progress jobs; nothing is written back.

Dependencies: portal_backend.boundary.job_store, portal_backend.core
System role: Job status reporting
"""

from datetime import datetime
from typing import Any

from portal_backend.boundary.job_store import JobStore
from portal_backend.core.exceptions import JobNotFoundError, ValidationError
from portal_backend.core.progress import estimate_time_remaining, parse_timestamp
from portal_backend.models.job import JobStatus


class JobStatusService:
    """Job status reader."""

    def __init__(self, job_store: JobStore) -> None:
        """
        Initialize job status service.

        Args:
            job_store: Store holding job snapshots
        """
        self.job_store = job_store

    async def get_job_status(
        self,
        job_id: str,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Get job snapshot for polling.

        Args:
            job_id: Job id returned by the bulk update endpoint
            now: Reference time for the estimate (defaults to current time)

        Returns:
            dict: Stored snapshot, plus estimatedTimeRemaining while
                processing once a rate can be measured

        Raises:
            ValidationError: Empty job id
            JobNotFoundError: Unknown or expired job
        """
        if not job_id or not job_id.strip():
            raise ValidationError("Job ID is required", field="jobId")

        job = await self.job_store.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)

        total = job.get("totalRecords") or 0
        if job.get("status") == JobStatus.PROCESSING.value and total > 0 and job.get("startTime"):
            remaining = estimate_time_remaining(
                processed=job.get("processedRecords") or 0,
                total=total,
                started_at=parse_timestamp(job["startTime"]),
                now=now,
            )
            if remaining is not None:
                job["estimatedTimeRemaining"] = remaining

        return job
