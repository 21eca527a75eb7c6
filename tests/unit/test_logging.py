"""Unit tests for shared.logging."""

import warnings

import structlog

from config import LoggingSettings
from shared.logging import (
    configure_structlog,
    get_logger,
    redact_sensitive_fields,
    setup_logging,
)


class TestRedactSensitiveFields:
    def test_redacts_token_and_secret(self):
        event = {"event": "x", "token": "abc", "secret": "s", "client_secret": "c"}
        out = redact_sensitive_fields(None, "info", event)
        assert out["token"] == "***REDACTED***"
        assert out["secret"] == "***REDACTED***"
        assert out["client_secret"] == "***REDACTED***"

    def test_keeps_ordinary_fields(self):
        out = redact_sensitive_fields(
            None, "info", {"event": "x", "status_code": 200, "container_id": "c"}
        )
        assert out["status_code"] == 200
        assert out["container_id"] == "c"

    def test_protected_keys_untouched(self):
        out = redact_sensitive_fields(None, "info", {"event": "token_seen"})
        assert out["event"] == "token_seen"


class TestSetupLogging:
    def test_json_format(self):
        setup_logging(LoggingSettings(log_level="DEBUG", log_format="json"))
        assert get_logger(__name__) is not None

    def test_console_format(self):
        setup_logging(LoggingSettings(log_level="INFO", log_format="console"))
        assert get_logger(__name__) is not None


class TestConfigureStructlog:
    def test_console_renderer_uses_current_arguments(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            configure_structlog("console")
        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)
        assert renderer.pad_event_to == 15

    def test_json_renderer_last(self):
        configure_structlog("json")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert structlog.processors.format_exc_info in processors
