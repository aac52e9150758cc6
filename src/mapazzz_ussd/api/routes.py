"""Rotas HTTP: passo USSD, liveness e healthcheck."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from mapazzz_ussd.api.dependencies import get_dialog_engine, get_settings
from mapazzz_ussd.application.dialog_engine import UssdDialogEngine
from mapazzz_ussd.config.settings import Settings
from mapazzz_ussd.domain import menus
from mapazzz_ussd.domain.models import UssdReply, UssdRequest
from mapazzz_ussd.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness simples (texto fixo)."""
    return "ok"


@router.get("/health")
def health(request: Request, settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    """Healthcheck com estado das integrações."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": settings.version,
        "ai_enabled": request.app.state.analysis_client.available,
        "sms_enabled": request.app.state.sms_gateway.available,
    }


async def _read_payload(request: Request) -> dict[str, Any]:
    """Lê o corpo como JSON ou form-urlencoded (convenção dos gateways USSD)."""
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        body = await request.body()
        if not body:
            return {}
        data = json.loads(body)
        return data if isinstance(data, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.post("/ussd", response_class=PlainTextResponse)
async def ussd(
    request: Request,
    engine: UssdDialogEngine = Depends(get_dialog_engine),
) -> PlainTextResponse:
    """Passo do diálogo USSD; responde sempre 200 com `CON ...` ou `END ...`."""
    try:
        payload = await _read_payload(request)
        ussd_request = UssdRequest.model_validate(payload)
        reply = await engine.handle(ussd_request)
    except Exception:
        # O gateway não recupera de erros HTTP a meio do diálogo.
        logger.exception("ussd_step_failed")
        reply = UssdReply.end(menus.SERVICE_FAILURE)

    return PlainTextResponse(reply.render())
