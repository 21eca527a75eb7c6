"""
Captcha routes.

GET  /captcha.js — client script with the requested defaults baked in
POST /verify     — relays {"token": ...} to the verification service
GET  /example    — demonstration page loading /captcha.js

Every response is plain text, JavaScript or HTML and carries the
cross-origin header. Anything else falls through to the 404 usage hint
registered in errors.py.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from config import AppSettings
from dependencies import (
    get_example_page_generator,
    get_request_origin,
    get_script_generator,
    get_settings,
    get_verification_service,
)
from schemas.dto.requests.verify import parse_verify_body
from services.example_page import ExamplePageGenerator
from services.script_generator import ScriptGenerator, ScriptParams
from services.verification_service import VerificationService
from shared.cors import cors_headers
from shared.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["captcha"])


@router.get("/captcha.js")
async def captcha_script(
    request: Request,
    settings: AppSettings = Depends(get_settings),
    origin: str = Depends(get_request_origin),
    generator: ScriptGenerator = Depends(get_script_generator),
) -> Response:
    params = ScriptParams.from_query(request.query_params, settings.captcha, origin)
    log.debug("captcha_script_served", container_id=params.container_id)
    return Response(
        content=generator.render(params),
        media_type="application/javascript",
        headers=cors_headers(settings.allow_origin),
    )


@router.post("/verify")
async def verify_token(
    request: Request,
    settings: AppSettings = Depends(get_settings),
    service: VerificationService = Depends(get_verification_service),
) -> PlainTextResponse:
    body = parse_verify_body(await request.body())
    result = await service.verify(body)
    return PlainTextResponse(
        result.message,
        status_code=result.status_code,
        headers=cors_headers(settings.allow_origin),
    )


@router.get("/example")
async def example_page(
    settings: AppSettings = Depends(get_settings),
    generator: ExamplePageGenerator = Depends(get_example_page_generator),
) -> HTMLResponse:
    return HTMLResponse(
        generator.render(settings.captcha.site_key),
        headers=cors_headers(settings.allow_origin),
    )
