import asyncio
from unittest.mock import AsyncMock

from portal_backend.api.deps import get_job_status_service
from portal_backend.application.services import JobStatusService
from portal_backend.boundary.job_store import InMemoryJobStore
from portal_backend.core.exceptions import JobNotFoundError


def test_get_job_status(client):
    service = AsyncMock()
    service.get_job_status.return_value = {
        "id": "job_1",
        "status": "processing",
        "progress": 42,
        "totalRecords": 60,
        "processedRecords": 25,
        "errors": [],
        "estimatedTimeRemaining": "14 seconds",
    }
    client.app.dependency_overrides[get_job_status_service] = lambda: service

    response = client.get("/api/job-status/job_1")

    assert response.status_code == 200
    data = response.json()
    assert data["progress"] == 42
    assert data["estimatedTimeRemaining"] == "14 seconds"
    service.get_job_status.assert_awaited_once_with("job_1")


def test_get_job_status_from_store(client):
    store = InMemoryJobStore()
    asyncio.run(
        store.set(
            "job_2",
            {"id": "job_2", "status": "completed", "progress": 100, "totalRecords": 0},
            3600,
        )
    )
    client.app.dependency_overrides[get_job_status_service] = lambda: JobStatusService(store)

    response = client.get("/api/toggle-status/job_2")

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert "estimatedTimeRemaining" not in response.json()


def test_get_job_not_found(client):
    service = AsyncMock()
    service.get_job_status.side_effect = JobNotFoundError("job_missing")
    client.app.dependency_overrides[get_job_status_service] = lambda: service

    response = client.get("/api/job-status/job_missing")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Job not found",
        "details": {"job_id": "job_missing"},
    }


def test_get_job_status_without_id(client):
    response = client.get("/api/job-status")

    assert response.status_code == 400
    assert response.json()["error"] == "Job ID is required"


def test_job_status_wrong_method(client):
    response = client.post("/api/job-status/job_1")

    assert response.status_code == 405


def test_job_status_preflight(client):
    response = client.options("/api/job-status/job_1")

    assert response.status_code == 200
