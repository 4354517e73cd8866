"""Builders de payload de template para a API Meta/WhatsApp.

Separação de responsabilidades:
- components: parâmetros por componente (header, body, botões)
- template: fragmento `template` (nome, idioma, componentes)
- base: envelope comum de envio
- factory: fluxo completo análise -> validação -> compilação
"""

from wabridge.adapters.whatsapp.payload_builders.base import (
    build_base_payload,
    normalize_recipient,
)
from wabridge.adapters.whatsapp.payload_builders.factory import (
    build_template_message,
    ensure_valid,
)
from wabridge.adapters.whatsapp.payload_builders.template import (
    TemplatePayloadBuilder,
    build_template_payload,
)

__all__ = [
    "TemplatePayloadBuilder",
    "build_base_payload",
    "build_template_message",
    "build_template_payload",
    "ensure_valid",
    "normalize_recipient",
]
