"""
Knack REST API client.

Wraps the record store operations used by the portal backend. One client
is bound to one credential pair; use it as an async context manager so
the underlying connection pool is closed when the work is done.

Dependencies: httpx, portal_backend.core.exceptions
System role: Record store adapter
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Callable

import httpx

from portal_backend.core.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.knack.com/v1"



@dataclass(frozen=True)
class KnackCredentials:
    """Application ID and REST API key pair."""

    application_id: str
    api_key: str

    def application_headers(self) -> dict[str, str]:
        return {
            "X-Knack-Application-Id": self.application_id,
            "Content-Type": "application/json",
        }

    def api_headers(self) -> dict[str, str]:
        return {"X-Knack-REST-API-Key": self.api_key}


@dataclass
class RecordPage:
    """One page of query results."""

    records: list[dict[str, Any]] = field(default_factory=list)
    total_records: int = 0


def build_equality_filter(field_code: str, value: Any) -> dict[str, Any]:
    """
    Build a Knack filter document matching one field by equality.

    Example:
        build_equality_filter("field_84", "a@b.c")
        -> {"match": "and", "rules": [{"field": "field_84", "operator": "is", "value": "a@b.c"}]}
    """
    return {
        "match": "and",
        "rules": [{"field": field_code, "operator": "is", "value": value}],
    }


class KnackClient:
    """Async client for Knack object records and sessions."""

    def __init__(
        self,
        credentials: KnackCredentials,
        base_url: str = DEFAULT_API_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            credentials: Application ID and API key sent on every call
            base_url: Knack API root
            timeout: Per-request timeout in seconds; None waits indefinitely
            transport: Optional transport override (tests use httpx.MockTransport)
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self._api_headers = credentials.api_headers()
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=credentials.application_headers(),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "KnackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def fetch_page(
        self,
        object_key: str,
        filters: dict[str, Any],
        page: int = 1,
        rows_per_page: int = 1000,
    ) -> RecordPage:
        """
        Fetch one page of records matching a filter.

        Args:
            object_key: Knack object (e.g. object_3)
            filters: Filter document from build_equality_filter
            page: 1-based page number
            rows_per_page: Page size requested from the API

        Returns:
            RecordPage: Records on this page and the reported total

        Raises:
            RecordStoreError: Non-2xx response
        """
        response = await self._http.get(
            f"/objects/{object_key}/records",
            params={
                "filters": json.dumps(filters),
                "page": page,
                "rows_per_page": rows_per_page,
            },
            headers=self._api_headers,
        )
        self._raise_for_status(response, "Failed to fetch records", "fetch")
        data = response.json()
        return RecordPage(
            records=data.get("records") or [],
            total_records=data.get("total_records") or 0,
        )

    async def fetch_all(
        self,
        object_key: str,
        filters: dict[str, Any],
        page_size: int = 1000,
    ) -> list[dict[str, Any]]:
        """
        Fetch every record matching a filter, page by page.

        Pagination stops at the first page holding fewer than page_size
        records, so result sets of any size are supported.

        Returns:
            list[dict]: Records in API order
        """
        records: list[dict[str, Any]] = []
        page = 1
        while True:
            result = await self.fetch_page(object_key, filters, page, page_size)
            records.extend(result.records)
            logger.debug(
                f"{__name__}:fetch_all - page {page} returned {len(result.records)} records",
                extra={"object_key": object_key, "page": page},
            )
            if len(result.records) < page_size:
                break
            page += 1
        return records

    async def find_records(
        self,
        object_key: str,
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Run a single unpaginated filter query."""
        response = await self._http.get(
            f"/objects/{object_key}/records",
            params={"filters": json.dumps(filters)},
            headers=self._api_headers,
        )
        self._raise_for_status(response, "Failed to find records", "find")
        return response.json().get("records") or []

    async def update_record(
        self,
        object_key: str,
        record_id: str,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Write fields to a single record.

        Raises:
            RecordStoreError: Non-2xx response
        """
        response = await self._http.put(
            f"/objects/{object_key}/records/{record_id}",
            json=fields,
            headers=self._api_headers,
        )
        self._raise_for_status(
            response, f"Failed to update record {record_id}", "update"
        )
        return response.json()

    async def create_session(self, email: str, password: str) -> dict[str, Any]:
        """
        Log a user in and return the session payload.

        Only the application ID header is sent; the REST API key is not
        part of a user login.
        """
        response = await self._http.post(
            f"/applications/{self.credentials.application_id}/session",
            json={"email": email, "password": password},
        )
        self._raise_for_status(response, "Login failed", "login")
        return response.json()

    @staticmethod
    def _raise_for_status(response: httpx.Response, prefix: str, operation: str) -> None:
        if response.is_success:
            return
        logger.warning(
            f"{__name__}:{operation} - upstream returned {response.status_code}",
            extra={"status_code": response.status_code, "body": response.text[:500]},
        )
        raise RecordStoreError(
            f"{prefix}: {response.reason_phrase}",
            status_code=response.status_code,
            operation=operation,
        )


# Builds a client bound to one credential pair
ClientFactory = Callable[[KnackCredentials], AsyncContextManager[KnackClient]]
