from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from wabridge.domain.enums import InboundMessageType, InteractiveReplyType
from wabridge.observability.logging import get_logger

logger = get_logger(__name__)

FLOW_RESPONSE_TITLE = "flow_response"
STICKER_TEXT = "Sticker message"
UNKNOWN_CONTACT_NAME = "Unknown Contact"

Extractor = Callable[[Mapping[str, Any]], dict[str, Any]]


def _block(message: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = message.get(key)
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str | None:
    # Campos vazios viram None; números (ids antigos) viram str.
    if isinstance(value, bool) or not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return str(value)
    return None


def _coordinate(value: Any) -> float | None:
    # 0 é coordenada válida (equador / meridiano de Greenwich).
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def extract_text(message: Mapping[str, Any]) -> dict[str, Any]:
    return {"text": _text(_block(message, "text").get("body"))}


def _reply_title(reply: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        title = _text(reply.get(key))
        if title:
            return title
    return None


def _fallback_reply(interactive: Mapping[str, Any]) -> tuple[str, str | None]:
    declared = interactive.get("type")
    if isinstance(declared, str) and isinstance(interactive.get(declared), Mapping):
        return declared, _reply_title(interactive[declared], "title", "name", "id")

    for key, value in interactive.items():
        if isinstance(value, Mapping):
            return str(key), _reply_title(value, "title", "name", "id")

    return InteractiveReplyType.UNKNOWN.value, None


def extract_interactive(message: Mapping[str, Any]) -> dict[str, Any]:
    """Resposta de botão, lista ou flow; o título também vira o texto."""
    interactive = _block(message, "interactive")

    if isinstance(interactive.get("button_reply"), Mapping):
        reply_type = InteractiveReplyType.BUTTON.value
        title = _reply_title(interactive["button_reply"], "title", "id")
    elif isinstance(interactive.get("list_reply"), Mapping):
        reply_type = InteractiveReplyType.LIST.value
        title = _reply_title(interactive["list_reply"], "title", "id")
    elif isinstance(interactive.get("nfm_reply"), Mapping):
        reply_type = InteractiveReplyType.NFM.value
        title = _reply_title(interactive["nfm_reply"], "name") or FLOW_RESPONSE_TITLE
    else:
        reply_type, title = _fallback_reply(interactive)

    return {"text": title, "interactive": {"type": reply_type, "title": title}}


def extract_media(message: Mapping[str, Any]) -> dict[str, Any]:
    """image, video, audio e document: o bloco tem o nome do próprio tipo."""
    media = _block(message, str(message.get("type") or ""))
    caption = _text(media.get("caption"))
    return {
        "text": caption,
        "media": {
            "id": _text(media.get("id")),
            "mime_type": _text(media.get("mime_type")),
            "sha256": _text(media.get("sha256")),
            "caption": caption,
            "filename": _text(media.get("filename")),
        },
    }


def extract_location(message: Mapping[str, Any]) -> dict[str, Any]:
    location = _block(message, "location")
    latitude = _coordinate(location.get("latitude"))
    longitude = _coordinate(location.get("longitude"))
    name = _text(location.get("name"))
    address = _text(location.get("address"))
    if name or address:
        text = name or address
    elif latitude is None or longitude is None:
        text = "Location"
    else:
        text = f"Location: {latitude}, {longitude}"
    return {
        "text": text,
        "location": {
            "latitude": latitude,
            "longitude": longitude,
            "name": name,
            "address": address,
        },
    }


def _contact_name(contact: Mapping[str, Any]) -> str:
    name = _block(contact, "name")
    return (
        _text(name.get("formatted_name"))
        or _text(name.get("first_name"))
        or UNKNOWN_CONTACT_NAME
    )


def extract_contacts(message: Mapping[str, Any]) -> dict[str, Any]:
    raw_contacts = message.get("contacts")
    contacts = [
        dict(contact)
        for contact in (raw_contacts if isinstance(raw_contacts, list) else [])
        if isinstance(contact, Mapping)
    ]
    if not contacts:
        return {"text": "", "contacts": None}

    names = ", ".join(_contact_name(contact) for contact in contacts)
    return {
        "text": f"Shared {len(contacts)} contact(s): {names}",
        "contacts": contacts,
    }


def extract_sticker(message: Mapping[str, Any]) -> dict[str, Any]:
    sticker = _block(message, "sticker")
    return {
        "text": STICKER_TEXT,
        "sticker": {
            "id": _text(sticker.get("id")),
            "mime_type": _text(sticker.get("mime_type")),
            "sha256": _text(sticker.get("sha256")),
            "animated": bool(sticker.get("animated")),
        },
    }


EXTRACTORS: dict[str, Extractor] = {
    InboundMessageType.TEXT: extract_text,
    InboundMessageType.INTERACTIVE: extract_interactive,
    InboundMessageType.IMAGE: extract_media,
    InboundMessageType.VIDEO: extract_media,
    InboundMessageType.AUDIO: extract_media,
    InboundMessageType.DOCUMENT: extract_media,
    InboundMessageType.LOCATION: extract_location,
    InboundMessageType.CONTACTS: extract_contacts,
    InboundMessageType.STICKER: extract_sticker,
}


def extract_base_fields(message: Mapping[str, Any], to: str | None) -> dict[str, Any]:
    """Campos universais presentes em qualquer tipo."""
    return {
        "wamid": _text(message.get("id")),
        "from_number": _text(message.get("from")),
        "to": to,
        "type": _text(message.get("type")),
    }


def extract_recipient(value: Mapping[str, Any]) -> str | None:
    """Número comercial que recebeu a mensagem (metadata do webhook)."""
    metadata = _block(value, "metadata")
    return _text(metadata.get("display_phone_number")) or _text(metadata.get("phone_number"))


def extract_type_fields(message: Mapping[str, Any]) -> dict[str, Any]:
    """Despacha pelo `type` da mensagem; tipos desconhecidos não preenchem nada."""
    message_type = message.get("type")
    extractor = EXTRACTORS.get(message_type) if isinstance(message_type, str) else None
    if extractor is None:
        logger.info(
            "unsupported_message_type_received",
            extra={"message_type": message_type if isinstance(message_type, str) else None},
        )
        return {}
    return extractor(message)
