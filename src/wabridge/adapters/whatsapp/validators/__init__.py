"""Validadores consultivos para templates e mensagens WhatsApp/Meta.

Uso:
    from wabridge.adapters.whatsapp.validators import validate_template_variables

    result = validate_template_variables(analysis, variables)
    if not result.is_valid:
        ...
"""

from wabridge.adapters.whatsapp.validators.errors import (
    TemplateDefinitionError,
    TemplateVariablesError,
    ValidationError,
)
from wabridge.adapters.whatsapp.validators.inbound import validate_inbound_message
from wabridge.adapters.whatsapp.validators.send import (
    extract_variables,
    sanitize_input,
    validate_phone_number,
)
from wabridge.adapters.whatsapp.validators.template import (
    is_valid_image_url,
    validate_template_variables,
)

__all__ = [
    "TemplateDefinitionError",
    "TemplateVariablesError",
    "ValidationError",
    "extract_variables",
    "is_valid_image_url",
    "sanitize_input",
    "validate_inbound_message",
    "validate_phone_number",
    "validate_template_variables",
]
