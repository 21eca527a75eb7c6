"""Tests for the application factory and lifespan wiring."""

from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, CaptchaSettings
from infrastructure.captcha.turnstile import TurnstileProvider
from services.example_page import ExamplePageGenerator
from services.script_generator import ScriptGenerator


class TestCreateApp:
    def test_builds_turnstile_provider_by_default(self):
        settings = AppSettings(captcha=CaptchaSettings(site_key="k", secret="s"))
        app = create_app(settings)
        with TestClient(app):
            assert isinstance(app.state.captcha_provider, TurnstileProvider)

    def test_injected_provider_used(self, provider):
        app = create_app(AppSettings(), captcha_provider=provider)
        with TestClient(app):
            assert app.state.captcha_provider is provider

    def test_state_populated(self, settings, provider):
        app = create_app(settings, captcha_provider=provider)
        assert app.state.settings is settings
        assert isinstance(app.state.script_generator, ScriptGenerator)
        assert isinstance(app.state.example_page_generator, ExamplePageGenerator)

    def test_docs_disabled_by_default(self, settings, provider):
        app = create_app(settings, captcha_provider=provider)
        assert app.docs_url is None
        assert app.openapi_url is None
