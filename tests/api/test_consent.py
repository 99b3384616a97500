from unittest.mock import AsyncMock

import pytest

from portal_backend.api.deps import get_consent_service
from portal_backend.application.services import ConsentService
from portal_backend.configs.consent import ConsentSettings
from portal_backend.configs.knack import KnackSettings
from portal_backend.core.exceptions import (
    ConfigurationError,
    RecordNotFoundError,
    RecordStoreError,
    ValidationError,
)
from portal_backend.models.consent import ConsentResult
from tests.conftest import FakeRecordClient

BODY = {
    "email": "student@stu.mmu.ac.uk",
    "participantName": "Alex Doe",
    "date": "2025-01-01",
    "responses": {
        "confirm_read": True,
        "time_to_consider": True,
        "free_to_withdraw": True,
        "agree_participate": True,
        "permission_research": True,
    },
    "signatureData": "data:image/png;base64,AAAA",
}


@pytest.fixture
def mock_consent_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_consent_service] = lambda: service
    return service


def test_consent_submit(client, mock_consent_service):
    mock_consent_service.submit.return_value = ConsentResult(
        session={"user": {"token": "t"}},
        redirectUrl="https://portal.example.test/#home/",
    )

    response = client.post("/api/consent-submit", json=BODY)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Consent form submitted successfully",
        "session": {"user": {"token": "t"}},
        "redirectUrl": "https://portal.example.test/#home/",
    }
    submission = mock_consent_service.submit.call_args.args[0]
    assert submission.email == "student@stu.mmu.ac.uk"
    assert submission.responses.agree_participate is True


@pytest.mark.parametrize(
    "error, status_code, message",
    [
        (ValidationError("Invalid email", field="email"), 400, "Invalid email"),
        (RecordNotFoundError("Student record not found"), 404, "Student record not found"),
        (ConfigurationError("Server configuration error"), 500, "Server configuration error"),
        (RecordStoreError("Login failed: Unauthorized", status_code=401), 500, "Submission failed"),
    ],
)
def test_consent_submit_errors(client, mock_consent_service, error, status_code, message):
    mock_consent_service.submit.side_effect = error

    response = client.post("/api/consent-submit", json=BODY)

    assert response.status_code == status_code
    assert response.json()["success"] is False
    assert response.json()["error"] == message


def test_consent_upstream_failure_carries_message(client, mock_consent_service):
    mock_consent_service.submit.side_effect = RecordStoreError("Login failed: Unauthorized", status_code=401)

    response = client.post("/api/consent-submit", json=BODY)

    assert response.json()["details"] == "Login failed: Unauthorized"


def test_consent_wrong_method(client):
    response = client.get("/api/consent-submit")

    assert response.status_code == 405


def test_consent_preflight(client):
    response = client.options("/api/consent-submit")

    assert response.status_code == 200
    assert response.content == b""


def test_consent_cors_preflight_with_unlisted_header(client):
    response = client.options(
        "/api/consent-submit",
        headers={
            "Origin": "https://portal.example.test",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, X-Requested-With",
        },
    )

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "x-requested-with" in response.headers["access-control-allow-headers"].lower()


def test_consent_cors_preflight_for_other_method(client):
    response = client.options(
        "/api/consent-submit",
        headers={
            "Origin": "https://portal.example.test",
            "Access-Control-Request-Method": "PUT",
        },
    )

    assert response.status_code == 200
    assert response.content == b""


def test_consent_disallowed_domain_without_password_configured(client):
    record_client = FakeRecordClient(records=[{"id": "student_1"}])
    service = ConsentService(
        KnackSettings(application_id="app-123", api_key="key-456"),
        ConsentSettings(default_password=None),
        record_client,
    )
    client.app.dependency_overrides[get_consent_service] = lambda: service

    response = client.post("/api/consent-submit", json={**BODY, "email": "someone@gmail.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid email"
    assert record_client.find_calls == []
