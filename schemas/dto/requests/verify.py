"""
Request DTO for the verification endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError

TOKEN_REQUIRED = "Token required"


class VerifyRequest(BaseModel):
    """Body of ``POST /verify``: the token handed to the widget callback."""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(min_length=1, strict=True)


def parse_verify_body(raw: bytes) -> VerifyRequest:
    """Parse a raw request body, rejecting anything without a usable token.

    Unparseable JSON, a non-object body and a missing, empty or non-string
    ``token`` all collapse into the same 400, raised before any remote call.
    """
    try:
        return VerifyRequest.model_validate_json(raw or b"")
    except PydanticValidationError as e:
        raise ValidationError(TOKEN_REQUIRED, field="token") from e
