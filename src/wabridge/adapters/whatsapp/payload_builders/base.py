"""Envelope base comum às mensagens enviadas pela Cloud API."""

from __future__ import annotations

from typing import Any


def normalize_recipient(number: str) -> str:
    """Remove espaços e o `+` inicial (a Meta espera apenas dígitos)."""
    return number.strip().removeprefix("+")


def build_base_payload(to: str, message_type: str = "template") -> dict[str, Any]:
    """Constrói payload base comum a todas as mensagens.

    Args:
        to: Destinatário (com ou sem `+`)
        message_type: Tipo técnico da mensagem

    Returns:
        Payload com campos obrigatórios
    """
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": normalize_recipient(to),
        "type": message_type,
    }
