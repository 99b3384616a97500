"""
Consent form API endpoints.

Routes:
- POST /consent-submit - Store consent answers and auto-login
- OPTIONS /consent-submit - CORS preflight

Dependencies: portal_backend.application.services, portal_backend.models
System role: Consent submission HTTP API
"""

from fastapi import APIRouter, Depends, Response

from portal_backend.api.deps import get_consent_service
from portal_backend.application.services import ConsentService
from portal_backend.models.consent import ConsentResult, ConsentSubmission

from .router_utils import handle_api_errors

router = APIRouter(tags=["consent"])


@router.post("/consent-submit", response_model=ConsentResult)
@handle_api_errors("Submission failed")
async def submit_consent(
    submission: ConsentSubmission,
    consent_service: ConsentService = Depends(get_consent_service),
) -> ConsentResult:
    """
    Submit the consent form.

    Args:
        submission: Email, participant name, date, answers and signature
        consent_service: Injected ConsentService

    Returns:
        ConsentResult: Session payload and redirect URL

    Raises:
        400: Missing fields or email outside the allowed domains
        404: No student record for the email
        500: Server misconfiguration or upstream failure
    """
    return await consent_service.submit(submission)


@router.options("/consent-submit", include_in_schema=False)
async def consent_preflight() -> Response:
    """Answer CORS preflight with an empty 200."""
    return Response(status_code=200)
