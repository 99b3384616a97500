"""
Bulk update configuration settings.

Pagination, batching and backpressure parameters for the bulk update
orchestrator, plus the record store object/field it targets.

Dependencies: pydantic, pydantic_settings
System role: Bulk update pipeline configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from portal_backend.configs.base import BaseSettings


class BulkUpdateSettings(BaseSettings):
    """Bulk update orchestrator configuration."""

    model_config = SettingsConfigDict(env_prefix="BULK_UPDATE_")

    object_key: str = Field(default="object_3", description="Object holding student records")
    target_field: str = Field(
        default="field_122",
        description="Connection field matched against the request targetId",
    )
    page_size: int = Field(default=1000, description="Rows requested per pagination call")
    batch_size: int = Field(default=25, description="Records updated concurrently per batch")
    batch_delay_ms: int = Field(default=2000, description="Pause between batches in milliseconds")

    expose_upstream_errors: bool = Field(
        default=True,
        description="Store upstream error text verbatim in job errors",
    )
    toggle_types: dict[str, str] = Field(
        default={
            "field_3180": "productivity",
            "field_3181": "academic",
            "field_3182": "coach",
        },
        description="Field code to toggle label mapping used in messages",
    )
