from __future__ import annotations


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "wabridge"
    assert payload["version"] == "0.1.0"


def test_correlation_id_is_propagated(client):
    response = client.get("/health", headers={"x-correlation-id": "abc-123"})
    assert response.headers["x-correlation-id"] == "abc-123"


def test_correlation_id_is_generated(client):
    response = client.get("/health")
    assert len(response.headers["x-correlation-id"]) == 32


def test_malformed_correlation_id_is_replaced(client):
    response = client.get("/health", headers={"x-correlation-id": "bad id <script>"})
    correlation_id = response.headers["x-correlation-id"]
    assert correlation_id != "bad id <script>"
    assert len(correlation_id) == 32


def test_correlation_id_on_error_responses(client):
    response = client.post(
        "/templates/compile",
        json={"template": [{"type": "BODY", "text": "{{1}}"}]},
        headers={"x-correlation-id": "req-1"},
    )
    assert response.status_code == 422
    assert response.headers["x-correlation-id"] == "req-1"
