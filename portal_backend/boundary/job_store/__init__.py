"""
Job state store boundary.

Key-value storage for bulk update job snapshots with per-entry expiry.
- RedisJobStore: shared store, survives across processes
- InMemoryJobStore: process-local fallback when no Redis URL is configured
"""

from portal_backend.boundary.job_store.base import JobStore
from portal_backend.boundary.job_store.job_store_factory import get_job_store
from portal_backend.boundary.job_store.memory_store import InMemoryJobStore
from portal_backend.boundary.job_store.redis_store import RedisJobStore

__all__ = ["JobStore", "InMemoryJobStore", "RedisJobStore", "get_job_store"]
