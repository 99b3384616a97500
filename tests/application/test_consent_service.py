"""
Test suite for ConsentService.

Tests validation order, record lookup, consent field mapping, login and
configuration errors. Uses FakeRecordClient.

System role: Verification of consent submission orchestration
"""

import pytest

from portal_backend.application.services.consent_service import (
    ConsentService,
    render_consent_summary,
)
from portal_backend.configs.consent import ConsentSettings
from portal_backend.configs.knack import KnackSettings
from portal_backend.core.exceptions import (
    ConfigurationError,
    RecordNotFoundError,
    RecordStoreError,
    ValidationError,
)
from portal_backend.models.consent import ConsentResponses, ConsentSubmission
from tests.conftest import FakeRecordClient


def make_submission(**overrides) -> ConsentSubmission:
    data = {
        "email": "student@stu.mmu.ac.uk",
        "participantName": "Alex Doe",
        "date": "2025-01-01",
        "responses": ConsentResponses(
            confirm_read=True,
            time_to_consider=True,
            free_to_withdraw=True,
            agree_participate=True,
            permission_research=False,
        ),
        "signatureData": "data:image/png;base64,AAAA",
    }
    data.update(overrides)
    return ConsentSubmission(**data)


@pytest.fixture
def student_client() -> FakeRecordClient:
    return FakeRecordClient(records=[{"id": "student_1", "field_84": "student@stu.mmu.ac.uk"}])


@pytest.fixture
def consent_service(knack_settings, consent_settings, student_client) -> ConsentService:
    return ConsentService(
        knack_settings=knack_settings,
        consent_settings=consent_settings,
        client_factory=student_client,
    )


class TestSubmit:
    """Test suite for ConsentService.submit."""

    @pytest.mark.asyncio
    async def test_submit_should_write_consent_and_login(
        self, consent_service, student_client
    ) -> None:
        """Test a valid submission updates the record and returns the session."""
        result = await consent_service.submit(make_submission())

        assert result.success is True
        assert result.session == {"user": {"token": "session-token"}}
        assert result.redirectUrl == "https://vespaacademy.knack.com/vespa-academy#home/"

        object_key, record_id, fields = student_client.updates[0]
        assert object_key == "object_10"
        assert record_id == "student_1"
        assert fields["field_3743"] is True
        assert fields["field_3747"] is False
        assert "Alex Doe" in fields["field_3748"]
        assert student_client.session_calls == [
            ("student@stu.mmu.ac.uk", "institution-pass")
        ]

    @pytest.mark.asyncio
    async def test_lookup_should_filter_on_email_field(
        self, consent_service, student_client
    ) -> None:
        await consent_service.submit(make_submission())

        object_key, filters = student_client.find_calls[0]
        assert object_key == "object_10"
        assert filters["rules"] == [
            {"field": "field_84", "operator": "is", "value": "student@stu.mmu.ac.uk"}
        ]

    @pytest.mark.asyncio
    async def test_disallowed_domain_should_not_look_up_record(
        self, consent_service, student_client
    ) -> None:
        """Test an outside email is rejected before any upstream call."""
        with pytest.raises(ValidationError, match="Invalid email"):
            await consent_service.submit(make_submission(email="someone@gmail.com"))

        assert student_client.find_calls == []
        assert student_client.updates == []

    @pytest.mark.asyncio
    async def test_missing_fields_should_be_listed(self, consent_service, student_client) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await consent_service.submit(make_submission(participantName="", signatureData=None))

        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.details["missing"] == ["participantName", "signatureData"]
        assert student_client.find_calls == []

    @pytest.mark.asyncio
    async def test_missing_responses_should_be_rejected(self, consent_service) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await consent_service.submit(make_submission(responses=None))

        assert exc_info.value.details["missing"] == ["responses"]

    @pytest.mark.asyncio
    async def test_unknown_student_should_not_write(
        self, knack_settings, consent_settings
    ) -> None:
        """Test no update or login happens when the lookup finds nothing."""
        client = FakeRecordClient(records=[])
        service = ConsentService(knack_settings, consent_settings, client)

        with pytest.raises(RecordNotFoundError, match="Student record not found"):
            await service.submit(make_submission())

        assert client.updates == []
        assert client.session_calls == []

    @pytest.mark.asyncio
    async def test_update_failure_should_skip_login(
        self, knack_settings, consent_settings
    ) -> None:
        client = FakeRecordClient(records=[{"id": "student_1"}], failing_ids={"student_1"})
        service = ConsentService(knack_settings, consent_settings, client)

        with pytest.raises(RecordStoreError):
            await service.submit(make_submission())

        assert client.session_calls == []

    @pytest.mark.asyncio
    async def test_missing_server_credentials_should_raise_configuration_error(
        self, consent_settings, student_client
    ) -> None:
        service = ConsentService(KnackSettings(application_id=None, api_key=None), consent_settings, student_client)

        with pytest.raises(ConfigurationError, match="Server configuration error"):
            await service.submit(make_submission())

        assert student_client.find_calls == []

    @pytest.mark.asyncio
    async def test_missing_password_should_raise_configuration_error(
        self, knack_settings, student_client
    ) -> None:
        service = ConsentService(
            knack_settings, ConsentSettings(default_password=None), student_client
        )

        with pytest.raises(ConfigurationError) as exc_info:
            await service.submit(make_submission())

        assert exc_info.value.details["reason"] == "Consent login password is not configured"
        assert student_client.find_calls == []

    @pytest.mark.asyncio
    async def test_invalid_email_should_be_rejected_before_password_check(
        self, knack_settings, student_client
    ) -> None:
        """Test input errors are reported as 400s even when the password is unset."""
        service = ConsentService(
            knack_settings, ConsentSettings(default_password=None), student_client
        )

        with pytest.raises(ValidationError, match="Invalid email"):
            await service.submit(make_submission(email="someone@gmail.com"))

        assert student_client.find_calls == []


class TestIsAllowedEmail:
    """Test suite for email domain checks."""

    @pytest.mark.parametrize(
        "email, allowed",
        [
            ("student@stu.mmu.ac.uk", True),
            ("Staff@MMU.AC.UK", True),
            ("student@gmail.com", False),
            ("student@evil-mmu.ac.uk", False),
            ("@mmu.ac.uk", False),
            ("mmu.ac.uk", False),
        ],
    )
    def test_is_allowed_email(self, consent_service, email, allowed) -> None:
        assert consent_service.is_allowed_email(email) is allowed


class TestRenderConsentSummary:
    """Test suite for the rich-text summary."""

    def test_summary_should_escape_user_text(self) -> None:
        html = render_consent_summary(make_submission(participantName="<b>Alex</b>"))

        assert "&lt;b&gt;Alex&lt;/b&gt;" in html
        assert "<b>Alex</b>" not in html

    def test_summary_should_show_answers_and_signature(self) -> None:
        html = render_consent_summary(make_submission())

        assert "Agree to participate: YES" in html
        assert "Permission for research: NO" in html
        assert '<img src="data:image/png;base64,AAAA"' in html
