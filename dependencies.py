"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Long-lived objects are created once in the
application lifespan and stored on app.state.
"""

from __future__ import annotations

from fastapi import Depends, Request

from config import AppSettings
from infrastructure.captcha.protocol import CaptchaProvider
from services.example_page import ExamplePageGenerator
from services.script_generator import ScriptGenerator
from services.verification_service import VerificationService


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_request_origin(request: Request) -> str:
    """Origin used to build the default verification URL.

    A configured public origin wins over the one seen on the request.
    """
    settings: AppSettings = request.app.state.settings
    if settings.public_origin:
        return settings.public_origin
    return f"{request.url.scheme}://{request.url.netloc}"


def get_captcha_provider(request: Request) -> CaptchaProvider:
    return request.app.state.captcha_provider


def get_verification_service(
    provider: CaptchaProvider = Depends(get_captcha_provider),
) -> VerificationService:
    return VerificationService(provider)


def get_script_generator(request: Request) -> ScriptGenerator:
    return request.app.state.script_generator


def get_example_page_generator(request: Request) -> ExamplePageGenerator:
    return request.app.state.example_page_generator
