"""Rotas HTTP: healthcheck, webhook WhatsApp e utilitários de template."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, Field

from wabridge.adapters.whatsapp.normalizer import normalize_webhook
from wabridge.adapters.whatsapp.payload_builders import (
    TemplatePayloadBuilder,
    build_template_message,
    ensure_valid,
    normalize_recipient,
)
from wabridge.adapters.whatsapp.signature import verify_webhook_signature
from wabridge.adapters.whatsapp.templates import analyze_template, parse_template
from wabridge.adapters.whatsapp.validators import (
    extract_variables,
    sanitize_input,
    validate_inbound_message,
    validate_phone_number,
    validate_template_variables,
)
from wabridge.adapters.whatsapp.validators.limits import INDEX_KEY_PATTERN
from wabridge.api.dependencies import get_settings, get_template_builder
from wabridge.config.settings import Settings
from wabridge.observability.logging import get_logger
from wabridge.observability.middleware import get_correlation_id

logger = get_logger(__name__)

router = APIRouter()


class TemplateAnalyzeRequest(BaseModel):
    """Template bruto (objeto com `components` ou lista de componentes)."""

    template: dict[str, Any] | list[Any]


class TemplateCompileRequest(BaseModel):
    """Template + variáveis (chaves "1" ou "var1") e destinatário opcional."""

    template: dict[str, Any] | list[Any]
    variables: dict[str, Any] = Field(default_factory=dict)
    language: str | None = None
    header_media_id: str | None = None
    to: str | None = None


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.get("/webhooks/whatsapp")
def whatsapp_verify(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Verificação de webhook exigida pela Meta."""
    if not settings.whatsapp_verify_token:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="missing_verify_token",
        )

    if hub_mode != "subscribe" or hub_verify_token != settings.whatsapp_verify_token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="verification_failed",
        )

    return Response(content=hub_challenge or "", media_type="text/plain")


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Recebe eventos do WhatsApp e devolve as mensagens normalizadas."""
    raw_body = await request.body()
    signature_result = verify_webhook_signature(
        raw_body, request.headers, settings.whatsapp_webhook_secret
    )

    if not signature_result.valid:
        logger.warning("webhook_signature_invalid", extra={"error": signature_result.error})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_json") from exc

    mapped = normalize_webhook(payload)
    invalid: list[dict[str, Any]] = []
    for item in mapped:
        result = validate_inbound_message(item.message)
        if not result.is_valid:
            invalid.append({"wamid": item.message.wamid, "errors": result.errors})

    logger.info(
        "webhook_processed",
        extra={"received": len(mapped), "invalid": len(invalid)},
    )

    return {
        "ok": True,
        "received": len(mapped),
        "messages": [item.message.model_dump(by_alias=True) for item in mapped],
        "invalid": invalid,
        "signature_validated": signature_result.validated,
        "signature_skipped": signature_result.skipped,
        "correlation_id": get_correlation_id(),
    }


def _collect_variables(raw: dict[str, Any]) -> dict[str, str]:
    """Aceita chaves "N" e "varN"; valores vazios são descartados."""
    variables: dict[str, str] = {}
    for key, raw_value in raw.items():
        value = sanitize_input(raw_value) if INDEX_KEY_PATTERN.fullmatch(key) else None
        if value:
            variables[str(int(key))] = value
    variables.update(extract_variables(raw))
    return variables


@router.post("/templates/analyze")
def templates_analyze(body: TemplateAnalyzeRequest) -> dict[str, Any]:
    """Descobre as variáveis exigidas por um template."""
    return analyze_template(parse_template(body.template)).model_dump()


@router.post("/templates/compile")
def templates_compile(
    body: TemplateCompileRequest,
    settings: Settings = Depends(get_settings),
    builder: TemplatePayloadBuilder = Depends(get_template_builder),
) -> dict[str, Any]:
    """Analisa, valida e compila o payload; 422 se o mapa estiver incompleto."""
    definition = parse_template(body.template)
    variables = _collect_variables(body.variables)
    language = body.language or definition.language or settings.template_default_language

    analysis = analyze_template(definition)
    validation = validate_template_variables(
        analysis, variables, legacy_image_check=settings.template_legacy_image_check
    )
    ensure_valid(validation)

    if body.to is None:
        payload = builder.build(
            definition.name, language, definition, variables, body.header_media_id
        )
    else:
        if not validate_phone_number(normalize_recipient(body.to)):
            raise HTTPException(status_code=422, detail="invalid_recipient")
        payload = build_template_message(
            body.to,
            definition,
            variables,
            language=language,
            header_media_id=body.header_media_id,
            legacy_image_check=settings.template_legacy_image_check,
            builder=builder,
        )

    return {
        "analysis": analysis.model_dump(),
        "validation": validation.model_dump(),
        "payload": payload,
    }
