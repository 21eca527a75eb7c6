"""Unit tests for the verification request/response DTOs."""

import pytest

from errors import ValidationError
from schemas.dto.requests.verify import TOKEN_REQUIRED, VerifyRequest, parse_verify_body
from schemas.dto.responses.verify import (
    VERIFICATION_FAILED,
    VERIFICATION_SUCCEEDED,
    VerificationResult,
)


class TestParseVerifyBody:
    def test_valid_token(self):
        req = parse_verify_body(b'{"token": "valid-token"}')
        assert isinstance(req, VerifyRequest)
        assert req.token == "valid-token"

    def test_extra_fields_ignored(self):
        req = parse_verify_body(b'{"token": "t", "remoteip": "1.2.3.4"}')
        assert req.token == "t"

    def test_token_kept_byte_for_byte(self):
        assert parse_verify_body(b'{"token": "  abc  "}').token == "  abc  "

    def test_whitespace_only_token_accepted(self):
        assert parse_verify_body(b'{"token": "   "}').token == "   "

    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"not json",
            b"{}",
            b'{"token": ""}',
            b'{"token": null}',
            b'{"token": 123}',
            b'["token"]',
            b"null",
        ],
        ids=[
            "empty_body",
            "invalid_json",
            "missing_token",
            "empty_token",
            "null_token",
            "numeric_token",
            "array_body",
            "null_body",
        ],
    )
    def test_rejected_bodies(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_verify_body(raw)
        assert exc_info.value.message == TOKEN_REQUIRED
        assert exc_info.value.status_code == 400


class TestVerificationResult:
    def test_success(self):
        r = VerificationResult(success=True)
        assert r.status_code == 200
        assert r.message == VERIFICATION_SUCCEEDED == "Verification successful!"

    def test_failure(self):
        r = VerificationResult(success=False)
        assert r.status_code == 403
        assert r.message == VERIFICATION_FAILED == "Verification failed"
