"""
Consent form request/response schemas.

Dependencies: pydantic
System role: Consent submission API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class ConsentResponses(BaseModel):
    """Yes/no answers captured by the consent form."""

    confirm_read: bool = False
    time_to_consider: bool = False
    free_to_withdraw: bool = False
    agree_participate: bool = False
    permission_research: bool = False


class ConsentSubmission(BaseModel):
    """Request body for POST /consent-submit."""

    email: str | None = None
    participantName: str | None = None
    date: str | None = None
    responses: ConsentResponses | None = None
    signatureData: str | None = Field(
        default=None, description="Signature image as a data URL"
    )


class ConsentResult(BaseModel):
    """Response for a successful consent submission."""

    success: bool = True
    message: str = "Consent form submitted successfully"
    session: Any = Field(description="Session object returned by the record store")
    redirectUrl: str
