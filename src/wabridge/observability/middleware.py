"""Correlation id por request (header `x-correlation-id`)."""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

CORRELATION_ID_HEADER = "x-correlation-id"

# Valores recebidos fora deste formato são substituídos por um id novo.
_VALID_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do request corrente (ou vazio fora de request)."""
    return _correlation_id.get()


def resolve_correlation_id(received: str | None) -> str:
    if received and _VALID_CORRELATION_ID.match(received):
        return received
    return uuid.uuid4().hex


class CorrelationIdMiddleware:
    """Middleware ASGI que propaga ou gera o correlation_id.

    O id fica disponível via `get_correlation_id()` durante o request e é
    devolvido no header de resposta, inclusive em respostas de erro.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = resolve_correlation_id(Headers(scope=scope).get(CORRELATION_ID_HEADER))

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[CORRELATION_ID_HEADER] = correlation_id
            await send(message)

        token = _correlation_id.set(correlation_id)
        try:
            await self.app(scope, receive, send_with_header)
        finally:
            _correlation_id.reset(token)
