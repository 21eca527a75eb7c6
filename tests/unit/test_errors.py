"""Unit tests for AppError hierarchy."""

import pytest

from errors import (
    USAGE_HINT,
    AppError,
    UpstreamError,
    ValidationError,
    not_found_response,
)


class TestAppErrorSubclasses:
    def test_base_error(self):
        e = AppError("boom")
        assert e.status_code == 500
        assert e.error_code == "internal_error"
        assert e.message == "boom"

    def test_validation_error(self):
        e = ValidationError("Token required")
        assert e.status_code == 400
        assert e.error_code == "validation_error"
        assert e.message == "Token required"

    def test_upstream_error(self):
        e = UpstreamError("connection refused")
        assert e.status_code == 500
        assert e.error_code == "upstream_error"


class TestAppErrorToText:
    def test_plain_message(self):
        assert ValidationError("Token required").to_text() == "Token required"

    def test_upstream_prefixed(self):
        assert UpstreamError("connection refused").to_text() == (
            "Error: connection refused"
        )

    def test_field_attribute(self):
        e = ValidationError("bad", field="token")
        assert e.field == "token"
        assert e.to_text() == "bad"

    def test_is_exception(self):
        with pytest.raises(AppError):
            raise ValidationError("x")


class TestNotFoundResponse:
    def test_body_and_headers(self):
        resp = not_found_response()
        assert resp.status_code == 404
        assert resp.body.decode() == USAGE_HINT
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, POST"
        assert resp.headers["access-control-allow-headers"] == "Content-Type"

    def test_custom_origin(self):
        resp = not_found_response("https://app.example.com")
        assert resp.headers["access-control-allow-origin"] == "https://app.example.com"
