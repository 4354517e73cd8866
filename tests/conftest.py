from __future__ import annotations

import copy
from typing import Any

import pytest
from fastapi.testclient import TestClient

from wabridge.api.app import create_app
from wabridge.config.settings import get_settings


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WHATSAPP_VERIFY_TOKEN", "test-token")
    monkeypatch.delenv("WHATSAPP_WEBHOOK_SECRET", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    get_settings.cache_clear()
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()


def _make_webhook_value(message: dict[str, Any] | None = None, **metadata: Any) -> dict[str, Any]:
    """Monta o `value` de um change de webhook com uma mensagem."""
    value: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "metadata": metadata or {"display_phone_number": "15551234567"},
    }
    if message is not None:
        value["messages"] = [copy.deepcopy(message)]
    return value


def _make_webhook_body(*values: dict[str, Any], field: str = "messages") -> dict[str, Any]:
    """Envolve valores em `entry[].changes[]` como a Meta envia."""
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "102290129340398",
                "changes": [{"field": field, "value": value} for value in values],
            }
        ],
    }


@pytest.fixture()
def make_value():
    return _make_webhook_value


@pytest.fixture()
def make_body():
    return _make_webhook_body
