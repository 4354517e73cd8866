"""Validação do mapa de variáveis contra a análise do template.

Resultado é consultivo (dados, não exceções): o chamador decide se bloqueia o
envio. O compilador de payload não consulta este validador.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlparse

from wabridge.adapters.whatsapp.models import TemplateAnalysis, VariableValidationResult
from wabridge.adapters.whatsapp.validators.limits import ALLOWED_IMAGE_URL_SCHEMES
from wabridge.observability.logging import get_logger

logger = get_logger(__name__)

IMAGE_URL_REQUIRED_ERROR = "Image template requires an image URL in variable {index}"
INVALID_IMAGE_URL_ERROR = "Invalid image URL format"


def is_valid_image_url(url: str) -> bool:
    """Aceita apenas URLs absolutas http/https."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ALLOWED_IMAGE_URL_SCHEMES and bool(parsed.netloc)


def _resolve_image_url(
    variables: Mapping[str, str], image_index: str, legacy_image_check: bool
) -> str | None:
    image_url = variables.get(image_index)
    if image_url or not legacy_image_check:
        return image_url or None
    # Modo legado: cai para o primeiro valor do mapa
    return next(iter(variables.values()), None) or None


def _image_variable_missing(
    variables: Mapping[str, str], image_index: str, legacy_image_check: bool
) -> bool:
    if legacy_image_check:
        return not variables.get("1") and not variables
    return not variables.get(image_index)


def validate_template_variables(
    analysis: TemplateAnalysis,
    variables: Mapping[str, str],
    *,
    legacy_image_check: bool = False,
) -> VariableValidationResult:
    """Valida se o mapa de variáveis atende aos requisitos do template.

    Args:
        analysis: Resultado de `analyze_template`
        variables: Mapa índice -> valor
        legacy_image_check: Só acusa imagem ausente com mapa totalmente vazio

    Returns:
        VariableValidationResult; `missing_variables` é o sinal autoritativo
    """
    errors: list[str] = []
    missing: dict[str, None] = {}
    image_index = analysis.image_variable or "1"

    if analysis.requires_image_url and _image_variable_missing(
        variables, image_index, legacy_image_check
    ):
        missing_index = "1" if legacy_image_check else image_index
        errors.append(IMAGE_URL_REQUIRED_ERROR.format(index=missing_index))
        missing[missing_index] = None

    for index in analysis.expected_variables:
        if not variables.get(index):
            missing.setdefault(index, None)

    if analysis.requires_image_url:
        image_url = _resolve_image_url(variables, image_index, legacy_image_check)
        if image_url and not is_valid_image_url(image_url):
            errors.append(INVALID_IMAGE_URL_ERROR)

    missing_variables = list(missing)
    if missing_variables:
        logger.info(
            "template_variables_missing",
            extra={"missing_variables": missing_variables},
        )

    return VariableValidationResult(
        is_valid=not errors and not missing_variables,
        missing_variables=missing_variables,
        errors=errors,
    )
