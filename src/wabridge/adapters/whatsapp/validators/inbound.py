"""Validação da mensagem inbound canônica (consultiva)."""

from __future__ import annotations

from wabridge.adapters.whatsapp.models import InboundMessage, InboundValidationResult
from wabridge.domain.enums import MEDIA_MESSAGE_TYPES, InboundMessageType


def validate_inbound_message(message: InboundMessage) -> InboundValidationResult:
    """Verifica campos universais e o bloco exigido pelo tipo.

    Não é aplicada pelo normalizador; o chamador decide o que fazer.
    """
    errors: list[str] = []

    if not message.wamid:
        errors.append("wamid is required")
    if not message.from_number:
        errors.append("from is required")
    if not message.type:
        errors.append("type is required")

    message_type = message.type or ""

    if message_type == InboundMessageType.TEXT and not message.text:
        errors.append("text is required for text messages")

    if message_type == InboundMessageType.INTERACTIVE and message.interactive is None:
        errors.append("interactive data is required for interactive messages")

    if message_type in MEDIA_MESSAGE_TYPES and (message.media is None or not message.media.id):
        errors.append(f"media.id is required for {message_type} messages")

    if message_type == InboundMessageType.LOCATION and message.location is None:
        errors.append("location data is required for location messages")

    if message_type == InboundMessageType.STICKER and (
        message.sticker is None or not message.sticker.id
    ):
        errors.append("sticker.id is required for sticker messages")

    return InboundValidationResult(is_valid=not errors, errors=errors)
