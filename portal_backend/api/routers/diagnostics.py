"""
Diagnostics API endpoints.

Routes:
- GET /test - Connectivity probe reporting credential presence
- GET /test-fetch-records - Fetch a small sample for a bulk update target

Dependencies: portal_backend.boundary.knack, portal_backend.configs
System role: Operator diagnostics HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends, Header, Query, status

from portal_backend.api.deps import get_client_factory, get_settings_dependency
from portal_backend.boundary.knack import ClientFactory
from portal_backend.boundary.knack import build_equality_filter
from portal_backend.configs import Settings
from portal_backend.core.exceptions import RecordStoreError, ValidationError
from portal_backend.core.progress import utc_now_iso
from portal_backend.observability import get_logger

from .router_utils import error_response, handle_api_errors, resolve_credentials

logger = get_logger(__name__)

router = APIRouter(tags=["diagnostics"])

SAMPLE_ROWS = 5
SAMPLE_LIMIT = 2


@router.get("/test")
async def connectivity_test(
    x_knack_application_id: str | None = Header(default=None),
    x_knack_rest_api_key: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> dict[str, Any]:
    """Report that the backend is reachable and which credentials it can see."""
    return {
        "status": "ok",
        "message": "Backend is reachable",
        "timestamp": utc_now_iso(),
        "environment": {
            "hasApplicationId": bool(settings.knack.application_id),
            "hasApiKey": bool(settings.knack.api_key),
        },
        "headers": {
            "hasApplicationId": bool(x_knack_application_id),
            "hasApiKey": bool(x_knack_rest_api_key),
        },
    }


@router.get("/test-fetch-records")
@handle_api_errors("Failed to fetch records")
async def test_fetch_records(
    target_id: str | None = Query(default=None, alias="targetId"),
    x_knack_application_id: str | None = Header(default=None),
    x_knack_rest_api_key: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
    client_factory: ClientFactory = Depends(get_client_factory),
):
    """
    Fetch the first few records a bulk update for targetId would touch.

    Raises:
        400: Missing credentials or targetId
        502: Upstream rejected the query
    """
    credentials = resolve_credentials(
        x_knack_application_id, x_knack_rest_api_key, settings.knack
    )
    if not target_id or not target_id.strip():
        raise ValidationError("Missing targetId", field="targetId")

    config = settings.bulk_update
    filters = build_equality_filter(config.target_field, target_id.strip())

    try:
        async with client_factory(credentials) as client:
            page = await client.fetch_page(
                config.object_key, filters, page=1, rows_per_page=SAMPLE_ROWS
            )
    except RecordStoreError as e:
        logger.warning(
            "Diagnostic fetch failed",
            extra={"status_code": e.status_code, "target_id": target_id},
        )
        return error_response(
            status.HTTP_502_BAD_GATEWAY,
            "Failed to fetch records",
            {"status": e.status_code, "message": e.message},
        )

    return {
        "success": True,
        "totalRecords": page.total_records,
        "recordsReturned": len(page.records),
        "sampleRecords": [
            {"id": record.get("id"), config.target_field: record.get(config.target_field)}
            for record in page.records[:SAMPLE_LIMIT]
        ],
        "filters": filters,
    }
