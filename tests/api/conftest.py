"""
API test fixtures.

Provides a TestClient over a fresh app and settings overrides.
"""

import pytest
from fastapi.testclient import TestClient

from portal_backend.api.deps import get_settings_dependency
from portal_backend.api.main import create_app
from portal_backend.configs import Settings
from portal_backend.configs.knack import KnackSettings


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def settings_without_credentials() -> Settings:
    return Settings(knack=KnackSettings(application_id=None, api_key=None))


@pytest.fixture
def settings_with_credentials() -> Settings:
    return Settings(knack=KnackSettings(application_id="env-app", api_key="env-key"))


@pytest.fixture
def use_settings(client):
    """Install a Settings instance for the request."""

    def install(settings: Settings) -> None:
        client.app.dependency_overrides[get_settings_dependency] = lambda: settings

    return install
