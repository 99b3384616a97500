"""
Observability module.

Provides structured logging, correlation ID tracking and request
logging middleware.
"""

from portal_backend.observability.correlation import get_correlation_id, set_correlation_id
from portal_backend.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "get_correlation_id", "set_correlation_id"]
