"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.captcha.turnstile import build_turnstile_provider
from routes.captcha_routes import router as captcha_router
from services.example_page import ExamplePageGenerator
from services.script_generator import ScriptGenerator
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    captcha_provider: Optional[CaptchaProvider] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    ``captcha_provider`` replaces the Turnstile provider, which is otherwise
    built in the lifespan together with its HTTP client.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        http_client = None
        provider = captcha_provider
        if provider is None:
            provider, http_client = build_turnstile_provider(
                secret=settings.captcha.secret,
                verify_url=settings.captcha.siteverify_url,
                timeout=settings.captcha.verify_timeout_seconds,
            )
        app.state.captcha_provider = provider

        if not settings.captcha.site_key:
            log.warning("captcha_site_key_not_configured")

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        if http_client is not None:
            await http_client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_url else None,
        lifespan=lifespan,
    )

    # Stateless renderers, shared across requests
    app.state.settings = settings
    app.state.script_generator = ScriptGenerator(settings.captcha.widget_script_url)
    app.state.example_page_generator = ExamplePageGenerator()

    register_error_handlers(app)
    app.include_router(captcha_router)

    return app
