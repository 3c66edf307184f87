"""
Test API endpoints.
"""
import json
from urllib.parse import parse_qs, urlsplit

import pytest

from app.cdn.errors import HashingError
from app.cdn.signer import EXTENSION_KEY
from app.cdn.token import generate_token


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200

    data = json.loads(response.data)
    assert data["status"] == "healthy"
    assert "message" in data
    assert "version" in data


def test_sign_url_returns_signed_url(client):
    response = client.post(
        "/api/sign-url", json={"path": "/folder/file.webp", "width": 800, "height": 600}
    )
    assert response.status_code == 200

    signed = response.get_json()["signedUrl"]
    parts = urlsplit(signed)
    assert f"{parts.scheme}://{parts.netloc}" == "https://cdn.example.test"
    assert parts.path == "/folder/file.webp"

    query = parse_qs(parts.query)
    assert query["width"] == ["800"]
    assert query["height"] == ["600"]

    expected = generate_token(
        "/folder/file.webp?width=800&height=600",
        "test-token-secret",
        int(query["expires"][0]),
    ).token
    assert query["token"] == [expected]


def test_sign_url_is_cached_between_requests(client):
    first = client.post("/api/sign-url", json={"path": "/a/a.webp", "width": 320})
    second = client.post("/api/sign-url", json={"path": "/a/a.webp", "width": 320})
    assert first.get_json()["signedUrl"] == second.get_json()["signedUrl"]


def test_sign_url_without_size(client):
    response = client.post("/api/sign-url", json={"path": "/a/a.webp"})
    assert response.status_code == 200
    assert "/a/a.webp?token=" in response.get_json()["signedUrl"]


@pytest.mark.parametrize("body", [{}, {"path": ""}, {"path": None}, {"width": 800}])
def test_sign_url_missing_path(client, body):
    response = client.post("/api/sign-url", json=body)
    assert response.status_code == 400
    assert response.get_json() == {"error": "Missing path"}


def test_sign_url_non_json_body(client):
    response = client.post("/api/sign-url", data="path=/a.webp")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Missing path"}


@pytest.mark.parametrize(
    "body",
    [
        {"path": 42},
        {"path": "   "},
        {"path": "/a.webp", "width": -5},
        {"path": "/a.webp", "height": "tall"},
        {"path": "/a.webp", "width": "²"},
    ],
)
def test_sign_url_invalid_input(client, body):
    response = client.post("/api/sign-url", json=body)
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid path"}


def test_sign_url_lone_surrogate_path(client):
    response = client.post(
        "/api/sign-url",
        data='{"path": "/a\\ud800.webp"}',
        content_type="application/json",
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid path"}


def test_sign_url_internal_failure(app, client, monkeypatch):
    def _fail(*args, **kwargs):
        raise HashingError("digest unavailable")

    monkeypatch.setattr(app.extensions[EXTENSION_KEY], "get_signed_url", _fail)

    response = client.post("/api/sign-url", json={"path": "/a.webp"})
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to generate signed URL"}


def test_sign_url_missing_service(app, client):
    del app.extensions[EXTENSION_KEY]
    response = client.post("/api/sign-url", json={"path": "/a.webp"})
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to generate signed URL"}


def test_sign_url_error_does_not_leak_secret(app, client, monkeypatch):
    def _fail(*args, **kwargs):
        raise RuntimeError("boom test-token-secret")

    monkeypatch.setattr(app.extensions[EXTENSION_KEY], "get_signed_url", _fail)
    response = client.post("/api/sign-url", json={"path": "/a.webp"})
    assert b"test-token-secret" not in response.data


def test_sign_url_rejects_get(client):
    response = client.get("/api/sign-url")
    assert response.status_code == 405
    assert response.get_json() == {"error": "Method not allowed"}


def test_unknown_route_returns_json_404(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_request_id_is_generated(client):
    response = client.get("/api/health")
    assert len(response.headers["X-Request-ID"]) == 32
