"""
Progress arithmetic for bulk update jobs.

Pure helpers shared by the orchestrator (writer side) and the status
service (reader side): batching, percentage and time-remaining estimates.

Dependencies: None (pure domain layer)
System role: Job progress calculations
"""

import math
from datetime import datetime, timezone
from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


def partition(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """
    Split items into consecutive batches, preserving order.

    Args:
        items: Records in fetch order
        size: Maximum batch length (must be positive)

    Yields:
        Sequence[T]: Consecutive slices of at most ``size`` items
    """
    if size <= 0:
        raise ValueError("Batch size must be positive")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def percent_complete(processed: int, total: int) -> int:
    """
    Integer percentage of processed records, rounded half up.

    Returns 0 when total is 0.
    """
    if total <= 0:
        return 0
    return math.floor(processed / total * 100 + 0.5)


def format_duration(seconds: int) -> str:
    """
    Render a coarse human-readable duration.

    Examples:
        45 -> "45 seconds", 125 -> "2m 5s", 3725 -> "1h 2m"
    """
    if seconds < 60:
        return f"{seconds} seconds"
    if seconds < 3600:
        return f"{seconds // 60}m {seconds % 60}s"
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m"


def estimate_time_remaining(
    processed: int,
    total: int,
    started_at: datetime,
    now: datetime | None = None,
) -> str | None:
    """
    Estimate time remaining from the observed processing rate.

    Args:
        processed: Records processed so far
        total: Total records in the job
        started_at: Job start timestamp (timezone-aware)
        now: Reference time, defaults to current UTC time

    Returns:
        str | None: Formatted duration, or None when no rate is observable yet
    """
    if total <= 0:
        return None
    now = now or datetime.now(timezone.utc)
    elapsed = (now - started_at).total_seconds()
    if elapsed <= 0:
        return None
    rate = processed / elapsed
    if rate <= 0:
        return None
    return format_duration(math.ceil((total - processed) / rate))


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp written by ``utc_now_iso``."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
