"""
Common response models and utilities.

Generic response wrappers and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict[str, Any] | str | None = Field(
        default=None, description="Additional error context"
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
