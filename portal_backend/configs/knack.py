"""
Knack record store configuration.

Holds the server-side API credentials and endpoint for the external
record store. Credentials are optional here because the bulk update
endpoint may receive them from request headers instead.

Dependencies: pydantic, pydantic_settings
System role: Record store connection configuration
"""

from typing import ClassVar

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from portal_backend.configs.base import BaseSettings


class KnackSettings(BaseSettings):
    """Knack REST API configuration."""

    model_config = SettingsConfigDict(env_prefix="KNACK_")

    secret_fields: ClassVar[frozenset[str]] = frozenset({"api_key"})

    application_id: str | None = Field(
        default=None,
        description="Knack application ID (X-Knack-Application-Id)",
    )
    api_key: str | None = Field(
        default=None,
        description="Knack REST API key (X-Knack-REST-API-Key)",
    )
    api_url: str = Field(
        default="https://api.knack.com/v1",
        description="Base URL of the Knack REST API",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        description="Per-request timeout; None disables timeouts entirely",
    )

    @property
    def has_credentials(self) -> bool:
        """Whether both server-side credentials are configured."""
        return bool(self.application_id and self.api_key)
