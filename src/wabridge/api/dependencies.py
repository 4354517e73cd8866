"""Estado da aplicação e dependências injetadas nas rotas."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request

from wabridge.adapters.whatsapp.payload_builders.template import TemplatePayloadBuilder
from wabridge.config.settings import Settings


@dataclass(slots=True)
class AppState:
    """Objetos montados uma vez em `create_app` e compartilhados entre requests."""

    settings: Settings
    template_builder: TemplatePayloadBuilder

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        return cls(
            settings=settings,
            template_builder=TemplatePayloadBuilder(
                placeholder_image_url=settings.template_image_placeholder_url,
                language_policy=settings.template_language_policy,
            ),
        )


def get_app_state(request: Request) -> AppState:
    return request.app.state.wabridge


def get_settings(state: AppState = Depends(get_app_state)) -> Settings:
    return state.settings


def get_template_builder(state: AppState = Depends(get_app_state)) -> TemplatePayloadBuilder:
    return state.template_builder
