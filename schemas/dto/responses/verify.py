"""
Response DTO for the verification endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel

VERIFICATION_SUCCEEDED = "Verification successful!"
VERIFICATION_FAILED = "Verification failed"


class VerificationResult(BaseModel):
    success: bool

    @property
    def status_code(self) -> int:
        return 200 if self.success else 403

    @property
    def message(self) -> str:
        return VERIFICATION_SUCCEEDED if self.success else VERIFICATION_FAILED
