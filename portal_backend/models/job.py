"""
Job domain models and schemas.

A bulk update job is persisted as a JSON snapshot with camelCase keys,
which is also what the status endpoint returns to the portal.

Dependencies: pydantic
System role: Bulk update job contracts
"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class JobStatus(str, enum.Enum):
    """
    Bulk update job states.

    PROCESSING: Orchestrator is fetching or updating records
    COMPLETED: Every matched record was attempted; see errors for failures
    FAILED: Unrecoverable error; see error for the message
    """

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class JobRecordError(BaseModel):
    """Failure recorded for a single record update."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    record_id: str
    error: str


class BulkUpdateJob(BaseModel):
    """Snapshot of one bulk update run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    target_id: str
    field_name: str
    value: Any = None
    toggle_type: str | None = None
    status: JobStatus = JobStatus.PROCESSING
    progress: int = 0
    total_records: int = 0
    processed_records: int = 0
    start_time: str
    end_time: str | None = None
    errors: list[JobRecordError] = Field(default_factory=list)
    message: str | None = None
    error: str | None = None

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize to the camelCase dict written to the job store."""
        return self.model_dump(by_alias=True, mode="json")
