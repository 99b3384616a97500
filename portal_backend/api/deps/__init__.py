"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_bulk_update_service,
    get_client_factory,
    get_consent_service,
    get_job_status_service,
    get_job_store_dependency,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_bulk_update_service",
    "get_client_factory",
    "get_consent_service",
    "get_job_status_service",
    "get_job_store_dependency",
    "get_service_cache",
    "get_settings_dependency",
]
