"""
Job store factory for selecting between Redis and in-memory storage.

The choice is made once at process start from JOB_STORE_REDIS_URL
(or KV_URL / REDIS_URL); callers only see the JobStore protocol.

Dependencies: portal_backend.boundary.job_store, portal_backend.configs
System role: Job store instantiation and selection
"""

import logging

from portal_backend.boundary.job_store.base import JobStore
from portal_backend.boundary.job_store.memory_store import InMemoryJobStore
from portal_backend.boundary.job_store.redis_store import RedisJobStore
from portal_backend.configs import get_settings

logger = logging.getLogger(__name__)


def get_job_store() -> JobStore:
    """
    Factory function to get job store based on environment configuration.

    Returns:
        RedisJobStore or InMemoryJobStore: Configured job store instance
    """
    settings = get_settings()
    redis_url = settings.job_store.redis_url

    if redis_url:
        logger.info(f"{__name__}:get_job_store - Creating Redis job store")
        return RedisJobStore.from_url(redis_url, key_prefix=settings.job_store.key_prefix)

    logger.info(
        f"{__name__}:get_job_store - KV not configured, using in-memory job store"
    )
    return InMemoryJobStore()
