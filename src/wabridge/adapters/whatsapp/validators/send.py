"""Helpers de entrada da API de envio (telefone, variáveis varN)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wabridge.adapters.whatsapp.validators.limits import (
    PHONE_NUMBER_PATTERN,
    UNSAFE_INPUT_PATTERN,
    VARIABLE_KEY_PATTERN,
)


def validate_phone_number(number: Any) -> bool:
    """Valida número no formato Cloud API (país + número, sem `+`)."""
    if not isinstance(number, str):
        return False
    return bool(PHONE_NUMBER_PATTERN.match(number.strip()))


def sanitize_input(value: Any) -> str | None:
    """Remove caracteres de injeção HTML e bytes nulos; faz trim."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return UNSAFE_INPUT_PATTERN.sub("", text).strip()


def extract_variables(source: Mapping[str, Any] | None) -> dict[str, str]:
    """Converte chaves `varN` do request em mapa de variáveis por índice.

    Exemplo:
        extract_variables({"var2": "Ana", "to": "55..."}) -> {"2": "Ana"}
    """
    variables: dict[str, str] = {}
    if not isinstance(source, Mapping):
        return variables

    for key, raw_value in source.items():
        match = VARIABLE_KEY_PATTERN.match(str(key))
        if match is None:
            continue
        value = sanitize_input(raw_value)
        if value:
            variables[str(int(match.group(1)))] = value
    return variables
