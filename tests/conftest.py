"""
Shared test fixtures and configuration for entire test suite.

Provides: Fake record store client, in-memory job store, settings builders
Dependencies: pytest, portal_backend
System role: Test infrastructure and fixture management
"""

import asyncio
from typing import Any

import pytest

from portal_backend.boundary.job_store import InMemoryJobStore
from portal_backend.boundary.knack import KnackCredentials
from portal_backend.configs.bulk_update import BulkUpdateSettings
from portal_backend.configs.consent import ConsentSettings
from portal_backend.configs.knack import KnackSettings
from portal_backend.core.exceptions import RecordStoreError


class FakeRecordClient:
    """
    In-process stand-in for KnackClient.

    Serves a fixed record list, records every write, and tracks how many
    updates are in flight at once.
    """

    def __init__(
        self,
        records: list[dict[str, Any]] | None = None,
        failing_ids: set[str] | None = None,
        fetch_error: Exception | None = None,
        session: dict[str, Any] | None = None,
    ) -> None:
        self.records = records or []
        self.failing_ids = failing_ids or set()
        self.fetch_error = fetch_error
        self.session = session or {"session": {"user": {"token": "session-token"}}}
        self.updates: list[tuple[str, str, dict[str, Any]]] = []
        self.find_calls: list[tuple[str, dict[str, Any]]] = []
        self.session_calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.hang_updates = False
        self.closed = False
        self.credentials: KnackCredentials | None = None

    def __call__(self, credentials: KnackCredentials) -> "FakeRecordClient":
        self.credentials = credentials
        return self

    async def __aenter__(self) -> "FakeRecordClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.closed = True

    async def fetch_all(self, object_key, filters, page_size=1000):
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.records)

    async def find_records(self, object_key, filters):
        self.find_calls.append((object_key, filters))
        return list(self.records)

    async def update_record(self, object_key, record_id, fields):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.hang_updates:
                await asyncio.Event().wait()
            await asyncio.sleep(0)
            if record_id in self.failing_ids:
                raise RecordStoreError(
                    f"Failed to update record {record_id}: Too Many Requests",
                    status_code=429,
                    operation="update",
                )
            self.updates.append((object_key, record_id, fields))
            return {"id": record_id, **fields}
        finally:
            self.in_flight -= 1

    async def create_session(self, email, password):
        self.session_calls.append((email, password))
        return self.session


def make_records(count: int) -> list[dict[str, Any]]:
    """Build ``count`` student records with ids rec_0..rec_{count-1}."""
    return [{"id": f"rec_{i}", "field_122": "school_1"} for i in range(count)]


@pytest.fixture
def credentials() -> KnackCredentials:
    """Provide a credential pair."""
    return KnackCredentials(application_id="app-123", api_key="key-456")


@pytest.fixture
def job_store() -> InMemoryJobStore:
    """Provide an empty in-memory job store."""
    return InMemoryJobStore()


@pytest.fixture
def bulk_settings() -> BulkUpdateSettings:
    """Provide bulk update settings with default batching."""
    return BulkUpdateSettings(
        object_key="object_3",
        target_field="field_122",
        batch_size=25,
        batch_delay_ms=2000,
        expose_upstream_errors=True,
    )


@pytest.fixture
def knack_settings() -> KnackSettings:
    """Provide server-side record store credentials."""
    return KnackSettings(application_id="app-123", api_key="key-456")


@pytest.fixture
def consent_settings() -> ConsentSettings:
    """Provide consent settings with a configured login password."""
    return ConsentSettings(default_password="institution-pass")
