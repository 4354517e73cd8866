from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def sanitize_webhook_value(value: Any) -> Mapping[str, Any]:
    """Garante um mapping para o `value` de um change (qualquer outra coisa vira {})."""
    if not isinstance(value, Mapping):
        return {}
    return value


def first_message(value: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Primeira mensagem do envelope, ou None se não houver uma utilizável."""
    messages = value.get("messages")
    if not isinstance(messages, list) or not messages:
        return None
    message = messages[0]
    if not isinstance(message, Mapping):
        return None
    return message
