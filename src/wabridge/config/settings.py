"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars.
Nunca hardcode secrets ou valores sensíveis.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Imagem exibida quando um header IMAGE não tem URL nem mídia estática.
DEFAULT_IMAGE_PLACEHOLDER_URL: str = (
    "https://via.placeholder.com/400x200/0066cc/ffffff?text=Image+Required"
)
DEFAULT_TEMPLATE_LANGUAGE: str = "en_US"
DEFAULT_LANGUAGE_POLICY: str = "deterministic"


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Aplicação
    service_name: str = "wabridge"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Webhook Meta
    whatsapp_verify_token: str | None = None  # Handshake GET do webhook
    whatsapp_webhook_secret: str | None = None  # App secret (HMAC SHA-256)

    # Templates
    template_default_language: str = DEFAULT_TEMPLATE_LANGUAGE
    template_language_policy: str = DEFAULT_LANGUAGE_POLICY
    template_image_placeholder_url: str = DEFAULT_IMAGE_PLACEHOLDER_URL
    # Restaura a checagem estreita de imagem (só dispara com mapa vazio)
    template_legacy_image_check: bool = False

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")

    def validate_webhook_config(self) -> list[str]:
        """Valida configuração do webhook.

        Em staging/prod o secret e o verify token são obrigatórios.
        Retorna lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if not (self.is_production or self.is_staging):
            return errors

        if not self.whatsapp_webhook_secret:
            errors.append("WHATSAPP_WEBHOOK_SECRET é obrigatório fora de desenvolvimento")
        if not self.whatsapp_verify_token:
            errors.append("WHATSAPP_VERIFY_TOKEN é obrigatório fora de desenvolvimento")
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
