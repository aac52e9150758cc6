"""Middleware de correlation-id por passo do diálogo USSD."""

from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "x-correlation-id"
MAX_CORRELATION_ID_LENGTH = 64

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Correlation_id do passo corrente (vazio fora de um request)."""
    return _correlation_id.get()


def _accepted_incoming(value: str | None) -> str | None:
    # Ids vindos do gateway vão para os logs: só curtos e imprimíveis
    if value and len(value) <= MAX_CORRELATION_ID_LENGTH and value.isprintable():
        return value
    return None


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propaga o header do gateway ou gera um id novo, e devolve-o na resposta."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        correlation_id = (
            _accepted_incoming(request.headers.get(CORRELATION_HEADER)) or uuid.uuid4().hex
        )
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
