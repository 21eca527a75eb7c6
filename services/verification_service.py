"""
Verification service — relays a client token to the captcha provider.

The provider's boolean is trusted as given. Any failure on the way to it
surfaces as UpstreamError so the route answers 500 with its description.
"""

from __future__ import annotations

from errors import AppError, UpstreamError
from infrastructure.captcha.protocol import CaptchaProvider
from schemas.dto.requests.verify import VerifyRequest
from schemas.dto.responses.verify import VerificationResult
from shared.logging import get_logger

log = get_logger(__name__)


class VerificationService:
    def __init__(self, provider: CaptchaProvider) -> None:
        self._provider = provider

    async def verify(self, request: VerifyRequest) -> VerificationResult:
        try:
            success = await self._provider.verify(request.token)
        except AppError:
            raise
        except Exception as e:
            log.error(
                "verification_provider_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamError(str(e) or type(e).__name__) from e

        return VerificationResult(success=bool(success))
