"""
Job state store configuration.

Selects between the Redis-backed store and the in-process fallback.
Vercel-style KV_URL / REDIS_URL variables are honoured when the
prefixed variable is not set.

Dependencies: pydantic, pydantic_settings
System role: Job persistence configuration
"""

from typing import ClassVar

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from portal_backend.configs.base import BaseSettings


class JobStoreSettings(BaseSettings):
    """Job state store configuration."""

    model_config = SettingsConfigDict(env_prefix="JOB_STORE_", populate_by_name=True)

    # Redis URLs may embed a password
    secret_fields: ClassVar[frozenset[str]] = frozenset({"redis_url"})

    redis_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("JOB_STORE_REDIS_URL", "KV_URL", "REDIS_URL"),
        description="Redis connection URL; in-memory store is used when unset",
    )
    ttl_seconds: int = Field(
        default=3600,
        description="Retention window for job entries in seconds",
    )
    key_prefix: str = Field(
        default="",
        description="Optional namespace prepended to job keys",
    )
