"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache
from typing import Any

from pydantic import Field

from portal_backend.configs.base import BaseSettings
from portal_backend.configs.bulk_update import BulkUpdateSettings
from portal_backend.configs.consent import ConsentSettings
from portal_backend.configs.job_store import JobStoreSettings
from portal_backend.configs.knack import KnackSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Aggregated settings
    knack: KnackSettings = Field(default_factory=KnackSettings)
    job_store: JobStoreSettings = Field(default_factory=JobStoreSettings)
    bulk_update: BulkUpdateSettings = Field(default_factory=BulkUpdateSettings)
    consent: ConsentSettings = Field(default_factory=ConsentSettings)

    def redacted(self) -> dict[str, Any]:
        """Dump every section for startup logging with secrets masked."""
        return {
            "log_level": self.log_level,
            "knack": self.knack.redacted(),
            "job_store": self.job_store.redacted(),
            "bulk_update": self.bulk_update.redacted(),
            "consent": self.consent.redacted(),
        }


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from portal_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
