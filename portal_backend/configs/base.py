"""
Shared settings base.

Every settings section loads from the environment and an optional .env
file with the same rules; sections only add their own ``env_prefix``.
Sections also declare which fields hold secrets so configuration can be
logged at startup without leaking credentials.

Dependencies: pydantic_settings
System role: Foundation for all configuration sections
"""

from typing import Any, ClassVar

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base for configuration sections; subclasses set ``env_prefix``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Field names reported only as set/unset
    secret_fields: ClassVar[frozenset[str]] = frozenset()

    def redacted(self) -> dict[str, Any]:
        """
        Dump this section for logging.

        Secret fields are replaced by ``"<set>"`` or ``"<unset>"``.
        """
        data = self.model_dump()
        for name in self.secret_fields:
            data[name] = "<set>" if data.get(name) else "<unset>"
        return data
