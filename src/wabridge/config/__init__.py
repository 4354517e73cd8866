"""Configurações centralizadas do wabridge.

Uso típico:
    from wabridge.config import get_settings
"""

from wabridge.config.settings import (
    DEFAULT_IMAGE_PLACEHOLDER_URL,
    DEFAULT_LANGUAGE_POLICY,
    DEFAULT_TEMPLATE_LANGUAGE,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_IMAGE_PLACEHOLDER_URL",
    "DEFAULT_LANGUAGE_POLICY",
    "DEFAULT_TEMPLATE_LANGUAGE",
]
