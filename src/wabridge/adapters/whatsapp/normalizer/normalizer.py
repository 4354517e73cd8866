"""Normalização de mensagens inbound da Meta para o formato canônico.

Nunca levanta exceção: entrada malformada vira a mensagem vazia e o payload
bruto é sempre devolvido junto (mesmo objeto, sem cópia).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wabridge.adapters.whatsapp.models import InboundMessage, MappedInboundPayload
from wabridge.observability.logging import get_logger, mask_phone, preview_text

from .extractor import extract_base_fields, extract_recipient, extract_type_fields
from .sanitizer import first_message, sanitize_webhook_value

logger = get_logger(__name__)

MESSAGES_FIELD = "messages"


def empty_message() -> InboundMessage:
    """Mensagem canônica com todos os campos None."""
    return InboundMessage()


def _map_message(message: Mapping[str, Any], to: str | None) -> InboundMessage:
    fields = extract_base_fields(message, to)
    fields.update(extract_type_fields(message))
    return InboundMessage.model_validate(fields)


def map_inbound_message(value: Any) -> MappedInboundPayload:
    """Mapeia o `value` de um change de webhook para a mensagem canônica.

    Usa apenas `messages[0]`; o destinatário vem de `metadata`.
    """
    try:
        envelope = sanitize_webhook_value(value)
        message = first_message(envelope)
        if message is None:
            logger.info("inbound_message_missing")
            return MappedInboundPayload(message=empty_message(), raw=value)

        mapped = _map_message(message, extract_recipient(envelope))
        logger.info(
            "inbound_message_mapped",
            extra={"message_type": mapped.type, "from": mask_phone(mapped.from_number)},
        )
        return MappedInboundPayload(message=mapped, raw=value)
    except Exception as exc:  # noqa: BLE001
        logger.error("inbound_mapping_failed", extra={"error_type": type(exc).__name__})
        return MappedInboundPayload(message=empty_message(), raw=value)


def _message_changes(body: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    values: list[Mapping[str, Any]] = []
    entries = body.get("entry")
    for entry in entries if isinstance(entries, list) else []:
        if not isinstance(entry, Mapping):
            continue
        changes = entry.get("changes")
        for change in changes if isinstance(changes, list) else []:
            if not isinstance(change, Mapping) or change.get("field") != MESSAGES_FIELD:
                continue
            value = change.get("value")
            if isinstance(value, Mapping) and first_message(value) is not None:
                values.append(value)
    return values


def normalize_webhook(body: Any) -> list[MappedInboundPayload]:
    """Normaliza todas as mensagens de um webhook completo (`entry[].changes[]`).

    Changes só de status e outros `field` são ignorados.
    """
    if not isinstance(body, Mapping):
        return []
    try:
        values = _message_changes(body)
    except Exception as exc:  # noqa: BLE001
        logger.error("inbound_mapping_failed", extra={"error_type": type(exc).__name__})
        return []
    return [map_inbound_message(value) for value in values]


def log_mapped_message(mapped: MappedInboundPayload, context: str = "") -> None:
    """Loga um resumo da mensagem normalizada sem PII."""
    message = mapped.message
    logger.info(
        "inbound_message_details",
        extra={
            "context": context or None,
            "wamid": message.wamid,
            "message_type": message.type,
            "from": mask_phone(message.from_number),
            "to": mask_phone(message.to),
            "text_preview": preview_text(message.text),
            "has_interactive": message.interactive is not None,
            "has_media": message.media is not None,
            "has_location": message.location is not None,
            "contact_count": len(message.contacts) if message.contacts else 0,
            "has_sticker": message.sticker is not None,
        },
    )
