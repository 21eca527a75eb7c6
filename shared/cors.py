"""Cross-origin headers attached to every response."""

from __future__ import annotations

from fastapi import Request

DEFAULT_ALLOW_ORIGIN = "*"


def allow_origin_for(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        return DEFAULT_ALLOW_ORIGIN
    return settings.allow_origin


def cors_headers(allow_origin: str = DEFAULT_ALLOW_ORIGIN) -> dict[str, str]:
    return {"Access-Control-Allow-Origin": allow_origin}


def preflight_headers(allow_origin: str = DEFAULT_ALLOW_ORIGIN) -> dict[str, str]:
    """Headers for the catch-all response, which also advertises the API shape."""
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "GET, POST",
        "Access-Control-Allow-Headers": "Content-Type",
    }
