"""
In-process job store.

Used when no Redis URL is configured. Jobs are lost when the process
restarts and are invisible to other worker processes.

Dependencies: None
System role: Fallback job state store
"""

import copy
import time
from typing import Any, Callable


class InMemoryJobStore:
    """Dict-backed job store with lazy expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize empty store.

        Args:
            clock: Monotonic time source in seconds
        """
        self._clock = clock
        self._entries: dict[str, tuple[float, dict[str, Any]]] = {}

    async def set(self, job_id: str, job: dict[str, Any], ttl: int) -> None:
        self._purge_expired()
        self._entries[job_id] = (self._clock() + ttl, copy.deepcopy(job))

    async def get(self, job_id: str) -> dict[str, Any] | None:
        entry = self._entries.get(job_id)
        if entry is None:
            return None
        expires_at, job = entry
        if expires_at <= self._clock():
            del self._entries[job_id]
            return None
        # Copies keep readers from mutating the stored snapshot
        return copy.deepcopy(job)

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
