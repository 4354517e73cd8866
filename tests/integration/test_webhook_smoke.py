from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from wabridge.adapters.whatsapp.signature import compute_signature
from wabridge.api.app import create_app
from wabridge.config.settings import Settings

FIXTURE = Path(__file__).resolve().parents[1] / "fixtures" / "whatsapp_inbound.json"


def test_webhook_verification(client):
    response = client.get(
        "/webhooks/whatsapp",
        params={
            "hub.mode": "subscribe",
            "hub.verify_token": "test-token",
            "hub.challenge": "challenge-123",
        },
    )
    assert response.status_code == 200
    assert response.text == "challenge-123"


def test_webhook_verification_wrong_token(client):
    response = client.get(
        "/webhooks/whatsapp",
        params={"hub.mode": "subscribe", "hub.verify_token": "nope", "hub.challenge": "c"},
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "verification_failed"


def test_webhook_post_smoke(client):
    payload = json.loads(FIXTURE.read_text(encoding="utf-8"))
    response = client.post("/webhooks/whatsapp", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["received"] == 1
    assert body["invalid"] == []
    assert body["signature_skipped"] is True
    assert body["signature_validated"] is False
    assert body["correlation_id"]

    message = body["messages"][0]
    assert message["from"] == "15550001111"
    assert message["to"] == "15551234567"
    assert message["text"] == "Olá, quero saber o status do meu pedido"


def test_webhook_reports_invalid_messages(client, make_value, make_body):
    value = make_value({"id": "wamid.9", "from": "15550001111", "type": "image"})
    response = client.post("/webhooks/whatsapp", json=make_body(value))

    assert response.status_code == 200
    assert response.json()["invalid"] == [
        {"wamid": "wamid.9", "errors": ["media.id is required for image messages"]}
    ]


def test_webhook_degrades_on_garbage_json(client):
    response = client.post("/webhooks/whatsapp", json={"entry": "garbage"})
    assert response.status_code == 200
    assert response.json()["received"] == 0


def test_webhook_invalid_json(client):
    response = client.post(
        "/webhooks/whatsapp",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "invalid_json"


class TestSignedWebhook:
    @pytest.fixture()
    def signed_client(self):
        app = create_app(Settings(whatsapp_webhook_secret="app-secret"))
        with TestClient(app) as test_client:
            yield test_client

    def test_valid_signature(self, signed_client):
        raw = FIXTURE.read_bytes()
        response = signed_client.post(
            "/webhooks/whatsapp",
            content=raw,
            headers={
                "content-type": "application/json",
                "x-hub-signature-256": compute_signature(raw, "app-secret"),
            },
        )

        assert response.status_code == 200
        assert response.json()["signature_validated"] is True

    def test_invalid_signature(self, signed_client):
        response = signed_client.post(
            "/webhooks/whatsapp",
            content=FIXTURE.read_bytes(),
            headers={"content-type": "application/json", "x-hub-signature-256": "sha256=00"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "invalid_signature"
