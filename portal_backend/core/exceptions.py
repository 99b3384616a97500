"""
Exception hierarchy for the portal backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PortalBackendError(Exception):
    """Base exception for all portal backend errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(PortalBackendError):
    """Raised when caller input is missing or invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class MissingCredentialsError(PortalBackendError):
    """Raised when the caller supplied no usable record store credentials."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Missing Knack credentials", details)


class ConfigurationError(PortalBackendError):
    """Raised when a required server-side setting is absent."""


class RecordNotFoundError(PortalBackendError):
    """Raised when a record store lookup matches nothing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class JobNotFoundError(PortalBackendError):
    """Raised when a job id is unknown or its entry has expired."""

    def __init__(self, job_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize job not found error.

        Args:
            job_id: ID of the missing job
            details: Additional context
        """
        details = details or {}
        details["job_id"] = job_id
        self.job_id = job_id
        super().__init__("Job not found", details)


class RecordStoreError(PortalBackendError):
    """Raised when a record store HTTP call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize record store error.

        Args:
            message: Error message, including the upstream reason phrase
            status_code: Upstream HTTP status, if a response was received
            operation: Operation that failed (fetch, update, login)
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if operation:
            details["operation"] = operation
        self.status_code = status_code
        self.operation = operation
        super().__init__(message, details)


class JobStoreError(PortalBackendError):
    """Raised when the job state store cannot be read or written."""
