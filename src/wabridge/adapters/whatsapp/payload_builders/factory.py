"""Montagem da mensagem de template completa (análise, validação, compilação)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wabridge.adapters.whatsapp.models import (
    TemplateDefinition,
    VariableValidationResult,
)
from wabridge.adapters.whatsapp.payload_builders.base import build_base_payload
from wabridge.adapters.whatsapp.payload_builders.template import TemplatePayloadBuilder
from wabridge.adapters.whatsapp.templates.analyzer import analyze_template
from wabridge.adapters.whatsapp.templates.parser import parse_template
from wabridge.adapters.whatsapp.validators.errors import TemplateVariablesError
from wabridge.adapters.whatsapp.validators.template import validate_template_variables
from wabridge.config.settings import DEFAULT_TEMPLATE_LANGUAGE

_DEFAULT_BUILDER = TemplatePayloadBuilder()


def build_template_message(
    to: str,
    template: TemplateDefinition | Mapping[str, Any] | list[Any],
    variables: Mapping[str, str] | None,
    *,
    language: str | None = None,
    header_media_id: str | None = None,
    enforce: bool = False,
    legacy_image_check: bool = False,
    builder: TemplatePayloadBuilder | None = None,
) -> dict[str, Any]:
    """Constrói o payload completo de envio para um template.

    Args:
        to: Destinatário (com ou sem `+`)
        template: Definição do template (modelo, dict da Meta ou lista de componentes brutos)
        variables: Mapa índice -> valor
        language: Sobrescreve o idioma do template
        header_media_id: Mídia estática do header, quando houver
        enforce: Levanta TemplateVariablesError se o mapa estiver incompleto
        legacy_image_check: Repassado para validate_template_variables (só com enforce)
        builder: Builder customizado (placeholder/policy vindos do Settings)

    Returns:
        Envelope `{messaging_product, recipient_type, to, type, template}`

    Raises:
        TemplateVariablesError: Apenas com enforce=True e validação reprovada
    """
    definition = parse_template(template)
    variables = dict(variables or {})

    if enforce:
        ensure_valid(
            validate_template_variables(
                analyze_template(definition), variables, legacy_image_check=legacy_image_check
            )
        )

    compiled = (builder or _DEFAULT_BUILDER).build(
        definition.name,
        language or definition.language or DEFAULT_TEMPLATE_LANGUAGE,
        definition,
        variables,
        header_media_id,
    )

    payload = build_base_payload(to, "template")
    payload["template"] = compiled
    return payload


def ensure_valid(validation: VariableValidationResult) -> None:
    """Converte um resultado reprovado em TemplateVariablesError."""
    if not validation.is_valid:
        raise TemplateVariablesError(validation.missing_variables, validation.errors)
