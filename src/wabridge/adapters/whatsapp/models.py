"""Modelos de template e de mensagem inbound normalizada para WhatsApp.

Responsabilidade:
- Estruturar a árvore de componentes de um template aprovado
- Carregar o resultado da análise de variáveis e das validações
- Representar a mensagem inbound canônica (um único formato para todos os tipos)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wabridge.domain.enums import ButtonType, ComponentType

# -----------------------------------------------------------------------------
# Templates
# -----------------------------------------------------------------------------


class TemplateButton(BaseModel):
    """Botão de um componente BUTTONS.

    Campos extras da Meta (phone_number, example, ...) são preservados.
    """

    model_config = ConfigDict(extra="allow")

    type: str = ButtonType.QUICK_REPLY.value  # URL, PHONE_NUMBER, QUICK_REPLY
    text: str | None = None
    url: str | None = None  # Único lugar onde botão aceita {{n}}


class TemplateComponent(BaseModel):
    """Unidade estrutural de um template (HEADER, BODY, FOOTER, BUTTONS)."""

    model_config = ConfigDict(extra="allow")

    type: ComponentType
    format: str | None = None  # Apenas HEADER: TEXT, IMAGE, VIDEO, DOCUMENT
    text: str | None = None
    buttons: list[TemplateButton] = Field(default_factory=list)


class TemplateDefinition(BaseModel):
    """Template aprovado pela Meta (imutável após aprovação)."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    language: str | None = None
    category: str | None = None
    status: str | None = None
    components: list[TemplateComponent] = Field(default_factory=list)


class TemplateAnalysis(BaseModel):
    """Requisitos de variáveis descobertos num template.

    Recalculado a cada chamada; nunca reaproveitado entre mapas de variáveis.
    """

    has_image_header: bool = False
    is_image_dynamic: bool = False
    requires_image_url: bool = False
    has_header_variables: bool = False
    has_body_variables: bool = False
    has_button_variables: bool = False
    # Índices únicos, ordenados numericamente ("2" antes de "10")
    expected_variables: list[str] = Field(default_factory=list)
    # Índice da variável que carrega a URL da imagem do header dinâmico
    image_variable: str | None = None


class VariableValidationResult(BaseModel):
    """Resultado consultivo da validação do mapa de variáveis."""

    is_valid: bool
    missing_variables: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Inbound
# -----------------------------------------------------------------------------


class InteractiveReply(BaseModel):
    """Resposta interativa (botão, lista, flow)."""

    type: str
    title: str | None = None


class MediaInfo(BaseModel):
    """Metadados de mídia recebida (image, video, audio, document)."""

    id: str | None = None
    mime_type: str | None = None
    sha256: str | None = None
    caption: str | None = None
    filename: str | None = None


class LocationInfo(BaseModel):
    """Localização compartilhada pelo usuário."""

    latitude: float | None = None
    longitude: float | None = None
    name: str | None = None
    address: str | None = None


class StickerInfo(BaseModel):
    """Metadados de sticker."""

    id: str | None = None
    mime_type: str | None = None
    sha256: str | None = None
    animated: bool = False


class InboundMessage(BaseModel):
    """Mensagem inbound canônica.

    Campos universais (wamid, from, to, type, text) mais no máximo um bloco
    específico do tipo. Todos os blocos específicos nascem None.
    Serializar com `model_dump(by_alias=True)` para obter a chave `from`.
    """

    model_config = ConfigDict(populate_by_name=True)

    wamid: str | None = None
    from_number: str | None = Field(default=None, alias="from")
    to: str | None = None  # Número comercial que recebeu a mensagem
    type: str | None = None  # Tipo bruto informado pela Meta
    text: str | None = None  # Resumo legível para exibição
    interactive: InteractiveReply | None = None
    media: MediaInfo | None = None
    location: LocationInfo | None = None
    contacts: list[dict[str, Any]] | None = None
    sticker: StickerInfo | None = None


@dataclass(slots=True)
class MappedInboundPayload:
    """Mensagem canônica acompanhada do payload bruto original.

    `raw` é o mesmo objeto recebido (sem cópia), inclusive em falha de mapeamento.
    """

    message: InboundMessage
    raw: Any

    def to_dict(self) -> dict[str, Any]:
        """Serializa no formato entregue ao consumidor downstream."""
        return {"message": self.message.model_dump(by_alias=True), "raw": self.raw}


class InboundValidationResult(BaseModel):
    """Resultado consultivo da validação de uma mensagem canônica."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
