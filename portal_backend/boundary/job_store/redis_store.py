"""
Redis-backed job store.

Snapshots are stored as JSON strings with a per-key expiry, so entries
disappear on their own once the retention window passes.

Dependencies: redis (asyncio client), portal_backend.core.exceptions
System role: Shared job state store
"""

import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from portal_backend.core.exceptions import JobStoreError

logger = logging.getLogger(__name__)


class RedisJobStore:
    """Job store on top of a Redis (or Redis-compatible KV) server."""

    def __init__(self, client: redis.Redis, key_prefix: str = "") -> None:
        """
        Initialize store.

        Args:
            client: redis.asyncio client created with decode_responses=True
            key_prefix: Namespace prepended to every job id
        """
        self._client = client
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "") -> "RedisJobStore":
        """Create a store from a redis:// or rediss:// URL."""
        return cls(redis.Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _key(self, job_id: str) -> str:
        return f"{self._key_prefix}{job_id}"

    async def set(self, job_id: str, job: dict[str, Any], ttl: int) -> None:
        try:
            await self._client.set(self._key(job_id), json.dumps(job), ex=ttl)
        except RedisError as e:
            raise JobStoreError(
                f"Failed to write job {job_id}", details={"error": str(e)}
            ) from e

    async def get(self, job_id: str) -> dict[str, Any] | None:
        try:
            raw = await self._client.get(self._key(job_id))
        except RedisError as e:
            raise JobStoreError(
                f"Failed to read job {job_id}", details={"error": str(e)}
            ) from e
        if raw is None:
            return None
        return json.loads(raw)

    async def close(self) -> None:
        await self._client.aclose()
