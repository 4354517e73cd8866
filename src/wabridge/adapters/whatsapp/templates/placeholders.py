"""Leitura de placeholders posicionais `{{n}}` em textos de template.

A Meta casa parâmetros por posição, não por nome. Por isso a ordem de
ocorrência no texto é o contrato: quem monta o payload itera estas ocorrências
da esquerda para a direita.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_PLACEHOLDER_RE = re.compile(r"\{\{(\d+)\}\}")


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Ocorrência de placeholder no texto."""

    index: str  # Índice normalizado ("01" -> "1"), chave do mapa de variáveis
    position: int  # Offset do `{{` no texto de origem


def scan_placeholders(text: str | None) -> list[Placeholder]:
    """Retorna todas as ocorrências de `{{n}}` na ordem do texto.

    Índice zero não é placeholder válido (numeração começa em 1).
    """
    if not text:
        return []

    found: list[Placeholder] = []
    for match in _PLACEHOLDER_RE.finditer(text):
        number = int(match.group(1))
        if number < 1:
            continue
        found.append(Placeholder(index=str(number), position=match.start()))
    return found


def placeholder_indices(text: str | None) -> list[str]:
    """Índices únicos na ordem da primeira ocorrência."""
    seen: dict[str, None] = {}
    for placeholder in scan_placeholders(text):
        seen.setdefault(placeholder.index, None)
    return list(seen)


def has_placeholders(text: str | None) -> bool:
    """Indica se o texto contém ao menos um `{{n}}` válido."""
    return bool(scan_placeholders(text))


def sort_indices(indices: list[str]) -> list[str]:
    """Deduplica e ordena numericamente ("2" antes de "10")."""
    return sorted(set(indices), key=int)
