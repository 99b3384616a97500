"""
Record store credential resolution.

Callers may pass credentials in the X-Knack-Application-Id and
X-Knack-REST-API-Key headers; the server-side settings fill any gap.
"""

from portal_backend.boundary.knack import KnackCredentials
from portal_backend.configs.knack import KnackSettings
from portal_backend.core.exceptions import MissingCredentialsError


def resolve_credentials(
    application_id: str | None,
    api_key: str | None,
    settings: KnackSettings,
) -> KnackCredentials:
    """
    Combine header credentials with configured fallbacks.

    Raises:
        MissingCredentialsError: Either value is missing from both sources
    """
    application_id = application_id or settings.application_id
    api_key = api_key or settings.api_key
    if not application_id or not api_key:
        raise MissingCredentialsError(
            details={
                "reason": "Please provide X-Knack-Application-Id and "
                "X-Knack-REST-API-Key headers",
            }
        )
    return KnackCredentials(application_id=application_id, api_key=api_key)
