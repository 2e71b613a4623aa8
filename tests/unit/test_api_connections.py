"""Tests for the metadata push endpoint."""
import pytest

PUSH = {
    "connections": {
        "1": {"name": "https://sp.example.org", "type": "saml20-sp"},
        "2": {"name": "https://idp.example.org", "type": "saml20-idp", "metadata": {"logo": "idp.png"}},
    }
}


def test_push_synchronizes_connections(client, push_headers, app):
    response = client.post("/api/connections", json=PUSH, headers=push_headers)
    assert response.status_code == 200
    assert response.get_json() == {
        "success": True,
        "created": ["https://sp.example.org", "https://idp.example.org"],
        "updated": [],
        "removed": [],
    }
    assert len(app.extensions["metadata_repository"].find_all()) == 2

    response = client.post(
        "/api/connections",
        json={"connections": {"1": {"name": "https://sp.example.org", "type": "saml20-sp"}}},
        headers=push_headers,
    )
    assert response.get_json()["removed"] == ["https://idp.example.org"]


def test_push_disabled_returns_404_before_auth(client, app_config):
    app_config.metadata_push_enabled = False
    response = client.post("/api/connections", json=PUSH)
    assert response.status_code == 404
    assert response.get_json() is None


def test_push_requires_janus_role(client, social_headers):
    response = client.post("/api/connections", json=PUSH, headers=social_headers)
    assert response.status_code == 403


def test_push_requires_token(client):
    response = client.post("/api/connections", json=PUSH)
    assert response.status_code == 401


@pytest.mark.parametrize(
    "body",
    [[1, 2], {"connections": []}, {"something": {}}, "connections"],
)
def test_push_rejects_unrecognized_structure(client, push_headers, body):
    response = client.post("/api/connections", json=body, headers=push_headers)
    assert response.status_code == 400
    assert response.get_json()["message"] == "Unrecognized structure for JSON"


def test_push_rejects_invalid_json(client, push_headers):
    response = client.post(
        "/api/connections",
        data="{not json",
        headers={**push_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_push_rejects_malformed_connection(client, push_headers):
    response = client.post(
        "/api/connections",
        json={"connections": {"1": {"name": "https://x", "type": "oidc"}}},
        headers=push_headers,
    )
    assert response.status_code == 400
    assert "unsupported type" in response.get_json()["message"]
