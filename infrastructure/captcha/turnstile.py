"""Cloudflare Turnstile implementation of CaptchaProvider.

One form-encoded POST to siteverify per token, no retries. Failures are
raised as UpstreamError so the caller can report them; a negative answer
from siteverify is a normal False result.
"""

from typing import Optional

import httpx

from errors import UpstreamError
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

TURNSTILE_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class TurnstileProvider:
    def __init__(
        self,
        secret: str,
        http_client: HttpClient,
        verify_url: str = TURNSTILE_VERIFY_URL,
    ) -> None:
        self._secret = secret
        self._http = http_client
        self._verify_url = verify_url

    async def verify(self, token: str) -> bool:
        if not self._secret:
            log.warning("turnstile_secret_not_configured")

        # httpx percent-encodes the pair as application/x-www-form-urlencoded
        try:
            response = await self._http.post(
                self._verify_url,
                data={"secret": self._secret, "response": token},
            )
        except httpx.HTTPError as e:
            log.error(
                "turnstile_request_failed", error=str(e), error_type=type(e).__name__
            )
            raise UpstreamError(str(e) or type(e).__name__) from e

        data = self._parse(response)
        success = bool(data.get("success", False))
        if success:
            log.info("turnstile_verification_succeeded")
        else:
            log.warning(
                "turnstile_verification_failed",
                status_code=response.status_code,
                error_codes=data.get("error-codes", []),
            )
        return success

    @staticmethod
    def _parse(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError as e:
            log.error(
                "turnstile_invalid_response",
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise UpstreamError(f"Invalid response from verification service: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamError("Invalid response from verification service")
        return data


def build_turnstile_provider(
    secret: str,
    verify_url: str = TURNSTILE_VERIFY_URL,
    timeout: Optional[float] = None,
) -> tuple[TurnstileProvider, HttpClient]:
    """Create a provider together with the client it owns, for lifespan wiring."""
    http_client = HttpClient(timeout=timeout)
    return TurnstileProvider(secret, http_client, verify_url), http_client
