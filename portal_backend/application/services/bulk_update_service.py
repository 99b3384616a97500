"""
Bulk update orchestrator.

Applies one field/value pair to every record matching a target filter.
A submitted job runs as a detached asyncio task: records are fetched
with unbounded pagination, split into fixed-size batches, each batch is
updated concurrently, and progress is written to the job store after
every batch. Per-record failures are recorded on the job and never
retried; any other failure marks the whole job as failed.

Dependencies: portal_backend.boundary, portal_backend.core, portal_backend.configs
System role: Bulk update job orchestration
"""

import asyncio
import logging
import time
import uuid
from typing import Any

from portal_backend.boundary.job_store import JobStore
from portal_backend.boundary.knack import (
    ClientFactory,
    KnackClient,
    KnackCredentials,
    build_equality_filter,
)
from portal_backend.configs.bulk_update import BulkUpdateSettings
from portal_backend.core.exceptions import PortalBackendError
from portal_backend.core.progress import partition, percent_complete, utc_now_iso
from portal_backend.models.job import BulkUpdateJob, JobStatus
from portal_backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

GENERIC_UPSTREAM_ERROR = "Upstream request failed"


def new_job_id() -> str:
    """Generate an opaque job id such as ``job_1718000000000_3f9a1c2b7``."""
    return f"job_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


class BulkUpdateService:
    """
    Bulk update orchestrator.

    Owns the background tasks it launches. Each job snapshot has exactly
    one writer (its own run), so progress writes are plain
    read-modify-write merges without locking.
    """

    def __init__(
        self,
        job_store: JobStore,
        client_factory: ClientFactory,
        config: BulkUpdateSettings,
        job_ttl_seconds: int = 3600,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            job_store: Store receiving job snapshots
            client_factory: Builds a record store client for a credential pair
            config: Object/field targeting, batching and delay settings
            job_ttl_seconds: Retention window applied on every job write
        """
        self.job_store = job_store
        self.client_factory = client_factory
        self.config = config
        self.job_ttl_seconds = job_ttl_seconds
        self._tasks: set[asyncio.Task] = set()

    @property
    def active_jobs(self) -> int:
        """Number of runs still in flight in this process."""
        return len(self._tasks)

    def resolve_toggle_type(self, field_name: str, toggle_type: str | None = None) -> str:
        """Label used in messages: explicit toggle type, known field mapping, or the field code."""
        return toggle_type or self.config.toggle_types.get(field_name, field_name)

    async def submit(
        self,
        target_id: str,
        field_name: str,
        value: Any,
        credentials: KnackCredentials,
        toggle_type: str | None = None,
    ) -> BulkUpdateJob:
        """
        Create a job in ``processing`` state and start it in the background.

        Returns as soon as the initial snapshot is stored; the run continues
        independently of the caller.

        Raises:
            JobStoreError: Initial snapshot could not be written
        """
        job = BulkUpdateJob(
            id=new_job_id(),
            target_id=target_id,
            field_name=field_name,
            value=value,
            toggle_type=self.resolve_toggle_type(field_name, toggle_type),
            start_time=utc_now_iso(),
        )
        await self.job_store.set(job.id, job.to_snapshot(), self.job_ttl_seconds)

        task = asyncio.create_task(
            self.run(job.id, target_id, field_name, value, credentials),
            name=f"bulk-update:{job.id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

        logger.info(
            "Bulk update job submitted",
            extra={"job_id": job.id, "target_id": target_id, "field_name": field_name},
        )
        return job

    async def run(
        self,
        job_id: str,
        target_id: str,
        field_name: str,
        value: Any,
        credentials: KnackCredentials,
    ) -> None:
        """
        Execute a bulk update job to completion or failure.

        Failures are written to the job snapshot, not raised. Only an error
        while recording the failure itself escapes.
        """
        logger.info(f"Processing job {job_id} for target {target_id}")
        try:
            async with self.client_factory(credentials) as client:
                await self._process(client, job_id, target_id, field_name, value)
        except Exception as e:
            log_exception_with_context(logger, "Bulk update job failed", e, job_id=job_id)
            await self._update_job(
                job_id,
                {
                    "status": JobStatus.FAILED.value,
                    "error": self._describe_error(e),
                    "endTime": utc_now_iso(),
                },
            )

    async def _process(
        self,
        client: KnackClient,
        job_id: str,
        target_id: str,
        field_name: str,
        value: Any,
    ) -> None:
        filters = build_equality_filter(self.config.target_field, target_id)
        records = await client.fetch_all(self.config.object_key, filters, self.config.page_size)
        total = len(records)

        await self._update_job(job_id, {"totalRecords": total})

        if total == 0:
            await self._update_job(
                job_id,
                {
                    "status": JobStatus.COMPLETED.value,
                    "progress": 100,
                    "message": "No records found for this target",
                    "endTime": utc_now_iso(),
                },
            )
            logger.info(f"Job {job_id} completed: no matching records")
            return

        logger.info(f"Found {total} records to update", extra={"job_id": job_id})

        batches = list(partition(records, self.config.batch_size))
        processed = 0
        errors: list[dict[str, str]] = []

        for index, batch in enumerate(batches, start=1):
            logger.info(f"Processing batch {index} of {len(batches)}", extra={"job_id": job_id})

            # In-flight updates are capped at one batch
            results = await asyncio.gather(
                *(self._update_one(client, record, field_name, value) for record in batch)
            )
            errors.extend(result for result in results if result is not None)
            processed += len(batch)

            await self._update_job(
                job_id,
                {
                    "processedRecords": processed,
                    "progress": percent_complete(processed, total),
                    "errors": list(errors),
                },
            )

            if index < len(batches):
                await self._pause_between_batches()

        await self._update_job(
            job_id,
            {
                "status": JobStatus.COMPLETED.value,
                "progress": 100,
                "processedRecords": processed,
                "errors": list(errors),
                "endTime": utc_now_iso(),
                "message": f"Successfully updated {processed - len(errors)} of {total} records",
            },
        )
        logger.info(
            f"Job {job_id} completed",
            extra={"job_id": job_id, "processed": processed, "failed": len(errors)},
        )

    async def _update_one(
        self,
        client: KnackClient,
        record: dict[str, Any],
        field_name: str,
        value: Any,
    ) -> dict[str, str] | None:
        """Update one record; return an error entry instead of raising."""
        record_id = str(record.get("id"))
        try:
            await client.update_record(self.config.object_key, record_id, {field_name: value})
            return None
        except Exception as e:
            logger.warning(
                f"Record update failed: {record_id}",
                extra={"record_id": record_id, "error": str(e)},
            )
            return {"recordId": record_id, "error": self._describe_error(e)}

    async def _pause_between_batches(self) -> None:
        await asyncio.sleep(self.config.batch_delay_ms / 1000)

    async def _update_job(self, job_id: str, updates: dict[str, Any]) -> None:
        """Merge updates into the stored snapshot and rewrite it with a fresh expiry."""
        current = await self.job_store.get(job_id) or {}
        current.update(updates)
        await self.job_store.set(job_id, current, self.job_ttl_seconds)

    def _describe_error(self, exc: Exception) -> str:
        if not self.config.expose_upstream_errors:
            return GENERIC_UPSTREAM_ERROR
        if isinstance(exc, PortalBackendError):
            return exc.message
        return str(exc) or type(exc).__name__

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{task.get_name()} cancelled before completion")
            return
        exc = task.exception()
        if exc is not None:
            log_exception_with_context(
                logger, "Bulk update job could not record its outcome", exc, task=task.get_name()
            )
