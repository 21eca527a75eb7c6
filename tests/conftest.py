"""
Test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during tests. Tests control config exclusively through monkeypatch.setenv()
or by passing settings objects directly.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, CaptchaSettings

TEST_SITE_KEY = "real-site-key-123"
TEST_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def settings():
    return AppSettings(
        captcha=CaptchaSettings(site_key=TEST_SITE_KEY, secret=TEST_SECRET),
    )


@pytest.fixture
def provider():
    """Stand-in CaptchaProvider; tests set verify's return value or side effect."""
    fake = AsyncMock()
    fake.verify = AsyncMock(return_value=True)
    return fake


@pytest.fixture
def client(settings, provider):
    app = create_app(settings=settings, captcha_provider=provider)
    with TestClient(app) as c:
        yield c
