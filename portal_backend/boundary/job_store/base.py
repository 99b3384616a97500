"""
JobStore protocol - interface for job snapshot persistence.

Dependencies: typing
System role: Job state store contract
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JobStore(Protocol):
    """
    Protocol for job snapshot storage.

    ``set`` always replaces the whole entry and refreshes its expiry.
    ``get`` returns None for unknown and expired ids alike.
    """

    async def set(self, job_id: str, job: dict[str, Any], ttl: int) -> None:
        """Store the full job snapshot for ttl seconds."""
        ...

    async def get(self, job_id: str) -> dict[str, Any] | None:
        """Return the job snapshot, or None if absent or expired."""
        ...

    async def close(self) -> None:
        """Release any connections held by the store."""
        ...
