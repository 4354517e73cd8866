"""Parser de definições de template (storage ou Graph API) para modelos."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as ModelValidationError

from wabridge.adapters.whatsapp.models import TemplateComponent, TemplateDefinition
from wabridge.adapters.whatsapp.templates.sanitizer import (
    sanitize_template,
    sanitize_template_components,
)
from wabridge.adapters.whatsapp.validators.errors import TemplateDefinitionError


def parse_template(
    data: Mapping[str, Any] | list[Any] | TemplateDefinition,
) -> TemplateDefinition:
    """Converte template bruto em TemplateDefinition.

    Aceita o objeto completo (com `components`) ou apenas a lista de
    componentes. Componentes malformados são sanitizados, não rejeitados.

    Raises:
        TemplateDefinitionError: Entrada não é objeto nem lista, ou campos de topo inválidos
    """
    if isinstance(data, TemplateDefinition):
        return data
    if isinstance(data, list):
        raw = [c.model_dump() if isinstance(c, TemplateComponent) else c for c in data]
        return TemplateDefinition(components=sanitize_template_components(raw))
    if isinstance(data, Mapping):
        try:
            return TemplateDefinition.model_validate(sanitize_template(data))
        except ModelValidationError as exc:
            detail = f"Template inválido: {exc.error_count()} erro(s)"
            raise TemplateDefinitionError(detail) from exc
    raise TemplateDefinitionError(f"Template inválido: {type(data).__name__}")
