"""
Structured logging helpers.

Context passed through ``extra`` is stringified and truncated, and any
key that names a credential (API key, password, token, session) is
replaced by a placeholder so request credentials never reach the logs.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

REDACTED = "<redacted>"

SENSITIVE_KEY_PARTS = ("api_key", "password", "secret", "token", "authorization", "session")


def is_sensitive_key(key: str) -> bool:
    """Whether a context key names a credential."""
    normalized = key.lower().replace("-", "_")
    return any(part in normalized for part in SENSITIVE_KEY_PARTS)


def _format_value(value: Any, max_length: int = 500) -> str:
    if isinstance(value, (list, tuple)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        text = str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {
        key: REDACTED if is_sensitive_key(key) else _format_value(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with redacted, stringified context.

    Example:
        log_with_context(logger, logging.INFO, "Bulk update requested",
                         target_id="school_1", api_key="...")
        # api_key is logged as "<redacted>"
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """Log an exception with its traceback, type and redacted context."""
    safe_context = _safe_context(context)
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = _format_value(exc)
    logger.error(message, exc_info=exc, extra=safe_context)
