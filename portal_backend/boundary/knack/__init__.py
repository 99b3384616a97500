"""
Knack record store boundary.

Async HTTP client for the Knack REST API: paginated queries,
single-record updates and user session creation.
"""

from portal_backend.boundary.knack.knack_client import (
    ClientFactory,
    KnackClient,
    KnackCredentials,
    RecordPage,
    build_equality_filter,
)

__all__ = [
    "ClientFactory",
    "KnackClient",
    "KnackCredentials",
    "RecordPage",
    "build_equality_filter",
]
