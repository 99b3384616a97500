"""
Bulk update API endpoints.

Routes:
- POST /bulk-update - Start a bulk field update job
- POST /toggle-bulk-update - Legacy alias used by the staff homepage
- OPTIONS on both - CORS preflight

Dependencies: portal_backend.application.services, portal_backend.models
System role: Bulk update HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Header, Request, Response

from portal_backend.api.deps import get_bulk_update_service, get_settings_dependency
from portal_backend.application.services import BulkUpdateService
from portal_backend.configs import Settings
from portal_backend.core.exceptions import ValidationError
from portal_backend.models.bulk_update import BulkUpdateRequest, BulkUpdateResponse
from portal_backend.observability.log_utils import log_with_context

from .router_utils import handle_api_errors, resolve_credentials

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bulk-update"])


def validate_bulk_update_request(request: BulkUpdateRequest) -> None:
    """
    Check required bulk update parameters.

    Raises:
        ValidationError: targetId, fieldName or value missing
    """
    missing = []
    if not request.target_id or not str(request.target_id).strip():
        missing.append("targetId")
    if not request.field_name or not request.field_name.strip():
        missing.append("fieldName")
    if "value" not in request.model_fields_set:
        missing.append("value")
    if missing:
        raise ValidationError(
            "Missing required parameters",
            details={"reason": "targetId, fieldName and value are required", "missing": missing},
        )


@router.post(
    "/toggle-bulk-update", response_model=BulkUpdateResponse, include_in_schema=False
)
@router.post("/bulk-update", response_model=BulkUpdateResponse, name="bulk_update")
@handle_api_errors()
async def submit_bulk_update(
    request: Request,
    body: BulkUpdateRequest,
    x_knack_application_id: str | None = Header(default=None),
    x_knack_rest_api_key: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
    bulk_update_service: BulkUpdateService = Depends(get_bulk_update_service),
) -> BulkUpdateResponse:
    """
    Start a bulk update of one field across every record of a target.

    Returns immediately; poll the status URL for progress.

    Args:
        request: Incoming request (used to build the status URL)
        body: targetId, fieldName, value, optional toggleType
        x_knack_application_id: Optional credential header
        x_knack_rest_api_key: Optional credential header
        settings: Injected settings (credential fallback)
        bulk_update_service: Injected orchestrator

    Returns:
        BulkUpdateResponse: Job id, message and status URL

    Raises:
        400: Missing credentials or parameters
        500: Job could not be created
    """
    credentials = resolve_credentials(
        x_knack_application_id, x_knack_rest_api_key, settings.knack
    )
    validate_bulk_update_request(body)

    log_with_context(
        logger,
        logging.INFO,
        "Bulk update requested",
        target_id=body.target_id,
        field_name=body.field_name,
        value=body.value,
    )

    job = await bulk_update_service.submit(
        target_id=str(body.target_id).strip(),
        field_name=body.field_name.strip(),
        value=body.value,
        credentials=credentials,
        toggle_type=body.toggle_type,
    )

    return BulkUpdateResponse(
        jobId=job.id,
        message=f"Bulk update initiated for {job.toggle_type}",
        statusUrl=request.url_for("job_status", job_id=job.id).path,
    )


@router.options("/toggle-bulk-update", include_in_schema=False)
@router.options("/bulk-update", include_in_schema=False)
async def bulk_update_preflight() -> Response:
    """Answer CORS preflight with an empty 200."""
    return Response(status_code=200)
