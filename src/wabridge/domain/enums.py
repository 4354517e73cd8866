"""Enums de domínio para templates e tipos de mensagens Meta/WhatsApp."""

from __future__ import annotations

from enum import StrEnum


class ComponentType(StrEnum):
    """Tipos de componente de template (conjunto fechado)."""

    HEADER = "HEADER"
    BODY = "BODY"
    FOOTER = "FOOTER"
    BUTTONS = "BUTTONS"


class HeaderFormat(StrEnum):
    """Formatos de header suportados."""

    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"


class ButtonType(StrEnum):
    """Tipos de botão de template.

    Apenas URL aceita placeholder (dentro de `url`).
    """

    URL = "URL"
    PHONE_NUMBER = "PHONE_NUMBER"
    QUICK_REPLY = "QUICK_REPLY"


class TemplateCategory(StrEnum):
    """Categorias de template conforme Meta."""

    MARKETING = "MARKETING"
    UTILITY = "UTILITY"
    AUTHENTICATION = "AUTHENTICATION"


class InboundMessageType(StrEnum):
    """Tipos de mensagem inbound mapeados pelo normalizador.

    Tipos fora desta lista viram apenas o envelope base.
    """

    TEXT = "text"
    INTERACTIVE = "interactive"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    LOCATION = "location"
    CONTACTS = "contacts"
    STICKER = "sticker"


MEDIA_MESSAGE_TYPES = frozenset(
    {
        InboundMessageType.IMAGE,
        InboundMessageType.VIDEO,
        InboundMessageType.AUDIO,
        InboundMessageType.DOCUMENT,
    }
)


class InteractiveReplyType(StrEnum):
    """Subtipos de resposta interativa recebida."""

    BUTTON = "button"
    LIST = "list"
    NFM = "nfm"  # Native Flow Message (WhatsApp Flows)
    UNKNOWN = "unknown"
