"""
Bulk update request/response schemas.

Dependencies: pydantic
System role: Bulk update API contracts
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BulkUpdateRequest(BaseModel):
    """
    Request body for POST /bulk-update.

    All fields are optional at the schema level so that missing values
    are reported as 400 by the validators rather than 422.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    target_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("targetId", "schoolId", "target_id"),
        description="Value matched against the target connection field",
    )
    field_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("fieldName", "field_name"),
        description="Field code to write on every matched record",
    )
    value: Any = Field(default=None, description="Value written to the field")
    toggle_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("toggleType", "toggle_type"),
        description="Human label for the toggle, used in messages",
    )


class BulkUpdateResponse(BaseModel):
    """Response for an accepted bulk update."""

    success: bool = True
    jobId: str
    message: str
    statusUrl: str
