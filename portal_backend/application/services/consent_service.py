"""
Consent submission service.

Single-record, synchronous flow: validate the form, find the student
account by email, write the consent answers and a rich-text summary,
then sign the student in with the shared institutional password.
Nothing is written unless the lookup found the account.

Dependencies: portal_backend.boundary.knack, portal_backend.configs, portal_backend.core
System role: Consent form orchestration
"""

import html
import logging
from typing import Any

from portal_backend.boundary.knack import (
    ClientFactory,
    KnackCredentials,
    build_equality_filter,
)
from portal_backend.configs.consent import ConsentSettings
from portal_backend.configs.knack import KnackSettings
from portal_backend.core.exceptions import (
    ConfigurationError,
    RecordNotFoundError,
    ValidationError,
)
from portal_backend.models.consent import ConsentResult, ConsentSubmission

logger = logging.getLogger(__name__)

ANSWER_LABELS = {
    "confirm_read": "Read participant information sheet",
    "time_to_consider": "Had time to consider",
    "free_to_withdraw": "Free to withdraw",
    "agree_participate": "Agree to participate",
    "permission_research": "Permission for research",
}


def render_consent_summary(submission: ConsentSubmission) -> str:
    """
    Compose the rich-text consent summary stored on the student record.

    Text values are HTML-escaped; the signature is embedded as an image.
    """
    answers = submission.responses.model_dump()
    items = "\n".join(
        f"    <li>{label}: {'YES' if answers[key] else 'NO'}</li>"
        for key, label in ANSWER_LABELS.items()
    )
    return (
        '<div style="border: 1px solid #ddd; padding: 10px; margin: 10px 0;">\n'
        "  <h3>Consent Form - Completed</h3>\n"
        f"  <p><strong>Participant Name:</strong> {html.escape(submission.participantName)}</p>\n"
        f"  <p><strong>Email:</strong> {html.escape(submission.email)}</p>\n"
        f"  <p><strong>Date:</strong> {html.escape(submission.date)}</p>\n"
        "  <h4>Consent Responses:</h4>\n"
        f"  <ul>\n{items}\n  </ul>\n"
        "  <h4>Signature:</h4>\n"
        f'  <img src="{html.escape(submission.signatureData, quote=True)}" '
        'alt="Participant Signature" style="max-width: 100%; border: 1px solid #ccc; padding: 5px;">\n'
        "</div>"
    )


class ConsentService:
    """Consent form orchestrator."""

    def __init__(
        self,
        knack_settings: KnackSettings,
        consent_settings: ConsentSettings,
        client_factory: ClientFactory,
    ) -> None:
        """
        Initialize consent service.

        Args:
            knack_settings: Server-side record store credentials
            consent_settings: Field codes, allowed domains, login settings
            client_factory: Builds a record store client for a credential pair
        """
        self.knack_settings = knack_settings
        self.config = consent_settings
        self.client_factory = client_factory

    async def submit(self, submission: ConsentSubmission) -> ConsentResult:
        """
        Store consent answers and log the student in.

        Returns:
            ConsentResult: Session payload and redirect target

        Raises:
            ConfigurationError: Server credentials or login password not configured
            ValidationError: Missing fields or disallowed email domain
            RecordNotFoundError: No student account for the email
            RecordStoreError: Upstream lookup, update or login failed
        """
        credentials = self._server_credentials()
        self.validate(submission)
        password = self._login_password()

        email = submission.email.strip()
        logger.info("Processing consent form", extra={"email": email})

        async with self.client_factory(credentials) as client:
            records = await client.find_records(
                self.config.object_key,
                build_equality_filter(self.config.email_field, email),
            )
            if not records:
                logger.warning("Student record not found", extra={"email": email})
                raise RecordNotFoundError(
                    "Student record not found",
                    details={
                        "reason": "No account found with this email address. "
                        "Please contact your administrator."
                    },
                )

            record_id = str(records[0]["id"])
            logger.info("Found student record", extra={"record_id": record_id})

            await client.update_record(
                self.config.object_key, record_id, self.build_consent_fields(submission)
            )
            logger.info("Student record updated with consent data", extra={"record_id": record_id})

            session_data = await client.create_session(email, password)
            logger.info("Login successful", extra={"record_id": record_id})

        return ConsentResult(
            session=session_data.get("session"),
            redirectUrl=self.config.redirect_url,
        )

    def validate(self, submission: ConsentSubmission) -> None:
        """
        Check required fields and the email domain.

        Raises:
            ValidationError: First failing rule
        """
        required = {
            "email": submission.email,
            "participantName": submission.participantName,
            "date": submission.date,
            "signatureData": submission.signatureData,
        }
        missing = [name for name, value in required.items() if not value or not value.strip()]
        if submission.responses is None:
            missing.append("responses")
        if missing:
            raise ValidationError(
                "Missing required fields",
                details={"reason": "All form fields must be completed", "missing": missing},
            )

        if not self.is_allowed_email(submission.email):
            raise ValidationError(
                "Invalid email",
                field="email",
                details={"reason": "Please use your institutional email address"},
            )

    def is_allowed_email(self, email: str) -> bool:
        """Whether the email has a local part and an allowed domain."""
        local, sep, domain = email.strip().lower().rpartition("@")
        if not sep or not local:
            return False
        return domain in {d.lower() for d in self.config.allowed_email_domains}

    def build_consent_fields(self, submission: ConsentSubmission) -> dict[str, Any]:
        """Map form answers and the rendered summary to record field codes."""
        answers = submission.responses.model_dump()
        fields: dict[str, Any] = {
            field_code: answers[key] for key, field_code in self.config.answer_fields().items()
        }
        fields[self.config.signature_field] = render_consent_summary(submission)
        return fields

    def _server_credentials(self) -> KnackCredentials:
        if not self.knack_settings.has_credentials:
            logger.error("Missing Knack credentials in environment")
            raise ConfigurationError(
                "Server configuration error",
                details={"reason": "Missing Knack API credentials"},
            )
        return KnackCredentials(
            application_id=self.knack_settings.application_id,
            api_key=self.knack_settings.api_key,
        )

    def _login_password(self) -> str:
        if self.config.default_password is None:
            logger.error("CONSENT_DEFAULT_PASSWORD is not set")
            raise ConfigurationError(
                "Server configuration error",
                details={"reason": "Consent login password is not configured"},
            )
        return self.config.default_password.get_secret_value()
