"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to plain-text responses, matching the rest of
the HTTP surface.

Unknown paths and unsupported methods both answer with the 404 usage hint.
Any other exception becomes a 500 carrying the failure description.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.cors import allow_origin_for, cors_headers, preflight_headers
from shared.logging import get_logger

log = get_logger(__name__)

USAGE_HINT = "Use /captcha.js, /verify, or /example"


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_text(self) -> str:
        return self.message


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class UpstreamError(AppError):
    """The remote verification service could not be reached or understood."""

    status_code = 500
    error_code = "upstream_error"

    def to_text(self) -> str:
        return f"Error: {self.message}"


def not_found_response(allow_origin: str = "*") -> PlainTextResponse:
    return PlainTextResponse(
        USAGE_HINT, status_code=404, headers=preflight_headers(allow_origin)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
        return PlainTextResponse(
            exc.to_text(),
            status_code=exc.status_code,
            headers=cors_headers(allow_origin_for(request)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        # 405 is folded into 404: a wrong method is just another unknown route
        if exc.status_code in (404, 405):
            return not_found_response(allow_origin_for(request))
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=cors_headers(allow_origin_for(request)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> PlainTextResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return PlainTextResponse(
            f"Error: {exc}",
            status_code=500,
            headers=cors_headers(allow_origin_for(request)),
        )
