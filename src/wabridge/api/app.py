"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wabridge.adapters.whatsapp.validators import (
    TemplateDefinitionError,
    TemplateVariablesError,
)
from wabridge.api.dependencies import AppState
from wabridge.api.routes import router
from wabridge.config.settings import Settings, get_settings
from wabridge.observability.logging import configure_logging, get_logger
from wabridge.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


async def _template_variables_error(request: Request, exc: TemplateVariablesError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": "template_variables_invalid",
                "missing_variables": exc.missing_variables,
                "errors": exc.errors,
            }
        },
    )


async def _template_definition_error(
    request: Request, exc: TemplateDefinitionError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid_template"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Cria a aplicação FastAPI.

    Raises:
        ValueError: Configuração do webhook incompleta para o ambiente
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name)

    config_errors = settings.validate_webhook_config()
    if config_errors:
        raise ValueError(f"Configuração inválida: {'; '.join(config_errors)}")

    if not settings.whatsapp_webhook_secret:
        logger.warning(
            "webhook_signature_verification_disabled",
            extra={"environment": settings.environment},
        )

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_exception_handler(TemplateVariablesError, _template_variables_error)
    app.add_exception_handler(TemplateDefinitionError, _template_definition_error)
    app.include_router(router)

    app.state.wabridge = AppState.from_settings(settings)
    return app
