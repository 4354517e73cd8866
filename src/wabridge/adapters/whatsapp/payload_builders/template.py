"""Builder para mensagens de template."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from wabridge.adapters.whatsapp.models import TemplateComponent, TemplateDefinition
from wabridge.adapters.whatsapp.payload_builders.components import (
    build_body_component,
    build_button_components,
    build_header_component,
)
from wabridge.adapters.whatsapp.templates.analyzer import as_components
from wabridge.config.settings import DEFAULT_IMAGE_PLACEHOLDER_URL, DEFAULT_LANGUAGE_POLICY
from wabridge.domain.enums import ComponentType


class TemplatePayloadBuilder:
    """Builder para o fragmento `template` do payload de envio.

    Nunca levanta exceção por variável ausente: componentes sem parâmetros são
    omitidos. Rode `validate_template_variables` antes para garantir completude.
    """

    def __init__(
        self,
        placeholder_image_url: str = DEFAULT_IMAGE_PLACEHOLDER_URL,
        language_policy: str = DEFAULT_LANGUAGE_POLICY,
    ) -> None:
        self._placeholder_image_url = placeholder_image_url
        self._language_policy = language_policy

    def build_components(
        self,
        components: Iterable[TemplateComponent],
        variables: Mapping[str, str],
        header_media_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Constrói a lista de componentes na ordem do template."""
        built: list[dict[str, Any]] = []

        for component in components:
            if component.type == ComponentType.HEADER:
                header = build_header_component(
                    component, variables, header_media_id, self._placeholder_image_url
                )
                if header is not None:
                    built.append(header)
            elif component.type == ComponentType.BODY:
                body = build_body_component(component, variables)
                if body is not None:
                    built.append(body)
            elif component.type == ComponentType.BUTTONS:
                built.extend(build_button_components(component, variables))

        return built

    def build(
        self,
        template_name: str,
        language: str,
        components: TemplateDefinition | Iterable[TemplateComponent | Mapping[str, Any]],
        variables: Mapping[str, str] | None = None,
        header_media_id: str | None = None,
    ) -> dict[str, Any]:
        """Constrói payload para mensagem de template.

        Args:
            template_name: Nome do template aprovado
            language: Código de idioma (ex.: en_US, pt_BR)
            components: Componentes do template
            variables: Mapa índice -> valor ("1" -> "Ana")
            header_media_id: Presente quando a imagem do header é estática

        Returns:
            Fragmento template conforme API Meta (`components` omitido se vazio)
        """
        built = self.build_components(
            as_components(components), variables or {}, header_media_id
        )

        template_obj: dict[str, Any] = {
            "name": template_name,
            "language": {"code": language, "policy": self._language_policy},
        }
        # A Meta rejeita `components: []`
        if built:
            template_obj["components"] = built

        return template_obj


_DEFAULT_BUILDER = TemplatePayloadBuilder()


def build_template_payload(
    template_name: str,
    language: str,
    components: TemplateDefinition | Iterable[TemplateComponent | Mapping[str, Any]],
    variables: Mapping[str, str] | None = None,
    header_media_id: str | None = None,
) -> dict[str, Any]:
    """Atalho com builder padrão (placeholder e policy padrão)."""
    return _DEFAULT_BUILDER.build(
        template_name, language, components, variables, header_media_id
    )
