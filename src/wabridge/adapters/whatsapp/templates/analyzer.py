"""Análise de requisitos de variáveis de um template.

Descobre quais índices o chamador precisa fornecer e se o header de imagem é
dinâmico (URL por envio) ou estático (mídia pré-carregada na Meta).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from wabridge.adapters.whatsapp.models import (
    TemplateAnalysis,
    TemplateComponent,
    TemplateDefinition,
)
from wabridge.adapters.whatsapp.templates.placeholders import (
    placeholder_indices,
    sort_indices,
)
from wabridge.adapters.whatsapp.templates.sanitizer import sanitize_template_components
from wabridge.domain.enums import ButtonType, ComponentType, HeaderFormat

# Header de imagem sem placeholder explícito usa a variável 1.
DEFAULT_IMAGE_VARIABLE = "1"


def is_dynamic_image_header(component: TemplateComponent) -> bool:
    """Header IMAGE é dinâmico se o texto está vazio ou contém `{{n}}`.

    A Meta usa `text` como proxy: sem imagem estática equivale a imagem dinâmica.
    """
    return not component.text or bool(placeholder_indices(component.text))


def image_variable_for(component: TemplateComponent) -> str:
    """Índice que carrega a URL da imagem: primeiro placeholder ou "1"."""
    indices = placeholder_indices(component.text)
    return indices[0] if indices else DEFAULT_IMAGE_VARIABLE


def as_components(
    template: TemplateDefinition | Iterable[TemplateComponent | Mapping[str, Any]],
) -> list[TemplateComponent]:
    """Aceita template, lista de modelos ou lista de dicts brutos.

    Dicts passam por `sanitize_template_components`: tipo em minúsculas é
    normalizado, `buttons` inválido vira lista vazia e componentes de tipo
    desconhecido são descartados.
    """
    if isinstance(template, TemplateDefinition):
        return list(template.components)

    components: list[TemplateComponent] = []
    for item in template:
        if isinstance(item, TemplateComponent):
            components.append(item)
            continue
        components.extend(
            TemplateComponent.model_validate(clean)
            for clean in sanitize_template_components([item])
        )
    return components


def _analyze_header(
    component: TemplateComponent, analysis: TemplateAnalysis, found: list[str]
) -> None:
    indices = placeholder_indices(component.text)

    if component.format == HeaderFormat.IMAGE:
        analysis.has_image_header = True
        if not is_dynamic_image_header(component):
            return
        analysis.is_image_dynamic = True
        analysis.requires_image_url = True
        analysis.image_variable = image_variable_for(component)
        found.extend(indices or [DEFAULT_IMAGE_VARIABLE])
        return

    if indices:
        analysis.has_header_variables = True
        found.extend(indices)


def _analyze_buttons(
    component: TemplateComponent, analysis: TemplateAnalysis, found: list[str]
) -> None:
    for button in component.buttons:
        if button.type != ButtonType.URL:
            continue
        indices = placeholder_indices(button.url)
        if indices:
            analysis.has_button_variables = True
            found.extend(indices)


def analyze_template(
    template: TemplateDefinition | Iterable[TemplateComponent | Mapping[str, Any]],
) -> TemplateAnalysis:
    """Inspeciona a árvore de componentes e retorna os requisitos de variáveis.

    Regras:
    - HEADER IMAGE com texto vazio ou com `{{n}}` é dinâmico e exige URL
      (índices do texto, ou "1" quando não há placeholder)
    - HEADER de texto com `{{n}}` também entra em `expected_variables`
    - BODY com `{{n}}` marca `has_body_variables`
    - Botões URL com `{{n}}` na url marcam `has_button_variables`

    Returns:
        TemplateAnalysis com `expected_variables` único e ordenado numericamente
    """
    analysis = TemplateAnalysis()
    found: list[str] = []

    for component in as_components(template):
        if component.type == ComponentType.HEADER:
            _analyze_header(component, analysis, found)
        elif component.type == ComponentType.BODY:
            indices = placeholder_indices(component.text)
            if indices:
                analysis.has_body_variables = True
                found.extend(indices)
        elif component.type == ComponentType.BUTTONS:
            _analyze_buttons(component, analysis, found)

    analysis.expected_variables = sort_indices(found)
    return analysis
