"""Builders de componentes (header, body, button) do payload de template.

Parâmetros são posicionais na Meta: a ordem de cada lista segue a ordem em que
os placeholders aparecem no texto/url de origem, nunca a ordem das chaves do
mapa de variáveis.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wabridge.adapters.whatsapp.models import TemplateComponent
from wabridge.adapters.whatsapp.templates.analyzer import image_variable_for
from wabridge.adapters.whatsapp.templates.placeholders import placeholder_indices
from wabridge.domain.enums import ButtonType, HeaderFormat
from wabridge.observability.logging import get_logger

logger = get_logger(__name__)


def build_text_parameters(text: str | None, variables: Mapping[str, str]) -> list[dict[str, Any]]:
    """Monta parâmetros de texto na ordem dos placeholders.

    Índices sem valor no mapa são omitidos (validação é responsabilidade do chamador).
    """
    parameters: list[dict[str, Any]] = []
    for index in placeholder_indices(text):
        value = variables.get(index)
        if value:
            parameters.append({"type": "text", "text": value})
    return parameters


def build_image_header(link: str) -> dict[str, Any]:
    """Componente header com imagem por URL."""
    return {
        "type": "header",
        "parameters": [{"type": "image", "image": {"link": link}}],
    }


def build_image_header_component(
    component: TemplateComponent,
    variables: Mapping[str, str],
    header_media_id: str | None,
    placeholder_image_url: str,
) -> dict[str, Any] | None:
    """Header IMAGE: dinâmico, estático ou fallback visual.

    - Com `{{n}}` no texto: URL vem da variável do primeiro placeholder
    - Sem placeholder e com `header_media_id`: nada a enviar (mídia estática)
    - Sem placeholder e sem mídia: variável "1" ou imagem placeholder
    """
    if placeholder_indices(component.text):
        image_url = variables.get(image_variable_for(component))
        if not image_url:
            logger.debug("template_component_skipped", extra={"component": "header"})
            return None
        return build_image_header(image_url)

    if header_media_id:
        logger.debug("template_header_static_media_skipped")
        return None

    image_url = variables.get("1")
    if not image_url:
        logger.warning("template_header_image_fallback")
        image_url = placeholder_image_url
    return build_image_header(image_url)


def build_header_component(
    component: TemplateComponent,
    variables: Mapping[str, str],
    header_media_id: str | None,
    placeholder_image_url: str,
) -> dict[str, Any] | None:
    """Constrói o componente header (imagem ou texto) ou None."""
    if component.format == HeaderFormat.IMAGE:
        return build_image_header_component(
            component, variables, header_media_id, placeholder_image_url
        )

    if not placeholder_indices(component.text):
        return None

    parameters = build_text_parameters(component.text, variables)
    if not parameters:
        logger.debug("template_component_skipped", extra={"component": "header"})
        return None
    return {"type": "header", "parameters": parameters}


def build_body_component(
    component: TemplateComponent,
    variables: Mapping[str, str],
) -> dict[str, Any] | None:
    """Constrói o componente body ou None se não houver parâmetros."""
    if not placeholder_indices(component.text):
        return None

    parameters = build_text_parameters(component.text, variables)
    if not parameters:
        logger.debug("template_component_skipped", extra={"component": "body"})
        return None
    return {"type": "body", "parameters": parameters}


def build_button_components(
    component: TemplateComponent,
    variables: Mapping[str, str],
) -> list[dict[str, Any]]:
    """Um componente `button` (sub_type url) por botão URL com placeholder.

    `index` é a posição do botão dentro do componente BUTTONS.
    """
    built: list[dict[str, Any]] = []
    for position, button in enumerate(component.buttons):
        if button.type != ButtonType.URL or not placeholder_indices(button.url):
            continue
        parameters = build_text_parameters(button.url, variables)
        if not parameters:
            logger.debug(
                "template_component_skipped",
                extra={"component": "button", "button_index": position},
            )
            continue
        built.append(
            {
                "type": "button",
                "sub_type": "url",
                "index": str(position),
                "parameters": parameters,
            }
        )
    return built
