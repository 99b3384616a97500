"""
Consent form configuration settings.

Record store field codes written by the consent flow, the allowed
email domains, and the institutional login used for auto-login.

Dependencies: pydantic, pydantic_settings
System role: Consent submission configuration
"""

from typing import ClassVar

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from portal_backend.configs.base import BaseSettings


class ConsentSettings(BaseSettings):
    """Consent submission configuration."""

    model_config = SettingsConfigDict(env_prefix="CONSENT_")

    secret_fields: ClassVar[frozenset[str]] = frozenset({"default_password"})

    object_key: str = Field(default="object_10", description="Object holding student accounts")
    email_field: str = Field(default="field_84", description="Email field used for lookup")

    confirm_read_field: str = Field(default="field_3743")
    time_to_consider_field: str = Field(default="field_3744")
    free_to_withdraw_field: str = Field(default="field_3745")
    agree_participate_field: str = Field(default="field_3746")
    permission_research_field: str = Field(default="field_3747")
    signature_field: str = Field(default="field_3748", description="Rich text summary field")

    allowed_email_domains: list[str] = Field(
        default=["mmu.ac.uk", "stu.mmu.ac.uk"],
        description="Email domains permitted to submit the form",
    )
    # Shared institutional password; every account signs in with it.
    default_password: SecretStr | None = Field(
        default=None,
        description="Password used for the post-consent login",
    )
    redirect_url: str = Field(
        default="https://vespaacademy.knack.com/vespa-academy#home/",
        description="Where the frontend sends the user after login",
    )

    def answer_fields(self) -> dict[str, str]:
        """Map consent response keys to record field codes."""
        return {
            "confirm_read": self.confirm_read_field,
            "time_to_consider": self.time_to_consider_field,
            "free_to_withdraw": self.free_to_withdraw_field,
            "agree_participate": self.agree_participate_field,
            "permission_research": self.permission_research_field,
        }
