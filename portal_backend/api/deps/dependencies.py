"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: portal_backend.configs, portal_backend.application, portal_backend.boundary
System role: DI container for service injection
"""

import functools
from functools import lru_cache

from fastapi import Depends

from portal_backend.application.services import (
    BulkUpdateService,
    ConsentService,
    JobStatusService,
)
from portal_backend.boundary.job_store import JobStore
from portal_backend.boundary.knack import ClientFactory, KnackClient
from portal_backend.configs import Settings, get_settings


def build_client_factory(settings: Settings) -> ClientFactory:
    """Bind the configured API URL and timeout into a KnackClient constructor."""
    return functools.partial(
        KnackClient,
        base_url=settings.knack.api_url,
        timeout=settings.knack.request_timeout_seconds,
    )


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(self):
        self._job_store = None
        self._bulk_update_service = None

    @property
    def job_store(self) -> JobStore:
        """Get cached job store (selected once per process)."""
        if self._job_store is None:
            from portal_backend.boundary.job_store import get_job_store
            self._job_store = get_job_store()
        return self._job_store

    @property
    def bulk_update_service(self) -> BulkUpdateService:
        """Get cached bulk update orchestrator; it owns the in-flight job tasks."""
        if self._bulk_update_service is None:
            settings = get_settings()
            self._bulk_update_service = BulkUpdateService(
                job_store=self.job_store,
                client_factory=build_client_factory(settings),
                config=settings.bulk_update,
                job_ttl_seconds=settings.job_store.ttl_seconds,
            )
        return self._bulk_update_service

    async def close(self) -> None:
        """Close the job store connection, if one was opened."""
        if self._job_store is not None:
            await self._job_store.close()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._job_store = None
        self._bulk_update_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_client_factory(
    settings: Settings = Depends(get_settings_dependency),
) -> ClientFactory:
    """
    Get record store client factory.

    Returns:
        ClientFactory: Callable building a KnackClient for a credential pair
    """
    return build_client_factory(settings)


def get_job_store_dependency() -> JobStore:
    """Get the process-wide job store."""
    return get_service_cache().job_store


def get_bulk_update_service() -> BulkUpdateService:
    """
    Get bulk update orchestrator instance.

    Returns:
        BulkUpdateService: Shared orchestrator
    """
    return get_service_cache().bulk_update_service


def get_job_status_service(
    job_store: JobStore = Depends(get_job_store_dependency),
) -> JobStatusService:
    """
    Get job status service instance.

    Args:
        job_store: Job store (injected via Depends)

    Returns:
        JobStatusService: Job status service instance
    """
    return JobStatusService(job_store=job_store)


def get_consent_service(
    settings: Settings = Depends(get_settings_dependency),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> ConsentService:
    """
    Get consent service instance.

    Args:
        settings: Application settings (injected)
        client_factory: Record store client factory (injected)

    Returns:
        ConsentService: Consent service instance
    """
    return ConsentService(
        knack_settings=settings.knack,
        consent_settings=settings.consent,
        client_factory=client_factory,
    )
