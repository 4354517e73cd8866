"""Sanitização de componentes de template vindos de storage ou da Graph API.

Templates chegam como JSON arbitrário (cadastro antigo, sync incompleto).
Aqui normalizamos o formato antes da construção dos modelos, sem mutar a
entrada e sem inventar texto que seria enviado ao usuário.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wabridge.config.settings import DEFAULT_TEMPLATE_LANGUAGE
from wabridge.domain.enums import ButtonType, ComponentType, HeaderFormat, TemplateCategory
from wabridge.observability.logging import get_logger

logger = get_logger(__name__)

_COMPONENT_TYPES = frozenset(item.value for item in ComponentType)

DEFAULT_TEMPLATE_NAME = "Unnamed Template"
DEFAULT_TEMPLATE_CATEGORY = TemplateCategory.UTILITY.value
DEFAULT_TEMPLATE_STATUS = "DRAFT"


def _upper(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip().upper()
    return None


def _as_text(value: Any) -> str | None:
    # Campos textuais numéricos (ex.: botão "1") chegam como int em cadastros antigos.
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return str(value)
    return None


def _sanitize_buttons(buttons: Any, component_index: int) -> list[dict[str, Any]]:
    if not isinstance(buttons, list):
        logger.warning(
            "template_buttons_not_list",
            extra={"component_index": component_index},
        )
        return []

    sanitized: list[dict[str, Any]] = []
    for button in buttons:
        if not isinstance(button, Mapping):
            continue
        clean = dict(button)
        clean["type"] = _upper(button.get("type")) or ButtonType.QUICK_REPLY.value
        clean["text"] = _as_text(button.get("text"))
        clean["url"] = _as_text(button.get("url"))
        sanitized.append(clean)
    return sanitized


def _sanitize_component(component: Any, index: int) -> dict[str, Any] | None:
    if not isinstance(component, Mapping):
        logger.warning("template_component_not_object", extra={"component_index": index})
        return None

    component_type = _upper(component.get("type"))
    if component_type not in _COMPONENT_TYPES:
        logger.warning(
            "template_component_unknown_type",
            extra={"component_index": index, "component_type": str(component.get("type"))},
        )
        return None

    clean = dict(component)
    clean["type"] = component_type
    clean["text"] = _as_text(component.get("text"))
    clean["format"] = _upper(component.get("format"))

    if component_type == ComponentType.HEADER and clean["format"] is None and clean["text"]:
        clean["format"] = HeaderFormat.TEXT.value

    if component_type == ComponentType.BUTTONS:
        clean["buttons"] = _sanitize_buttons(component.get("buttons"), index)
    else:
        clean.pop("buttons", None)

    return clean


def sanitize_template_components(components: Any) -> list[dict[str, Any]]:
    """Retorna cópia sanitizada da lista de componentes.

    - Lista ausente/inválida vira lista vazia
    - Componentes que não são objeto ou têm tipo desconhecido são descartados
    - `type`/`format` e tipo de botão são normalizados em maiúsculas
    """
    if not isinstance(components, list):
        if components is not None:
            logger.warning("template_components_not_list")
        return []

    sanitized: list[dict[str, Any]] = []
    for index, component in enumerate(components):
        clean = _sanitize_component(component, index)
        if clean is not None:
            sanitized.append(clean)
    return sanitized


def sanitize_template(template: Mapping[str, Any]) -> dict[str, Any]:
    """Sanitiza o template completo e preenche campos obrigatórios."""
    return {
        **template,
        "components": sanitize_template_components(template.get("components")),
        "name": template.get("name") or DEFAULT_TEMPLATE_NAME,
        "category": template.get("category") or DEFAULT_TEMPLATE_CATEGORY,
        "language": template.get("language") or DEFAULT_TEMPLATE_LANGUAGE,
        "status": template.get("status") or DEFAULT_TEMPLATE_STATUS,
    }
