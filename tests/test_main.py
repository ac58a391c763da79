import pytest

import campus_auth.main
from campus_auth.config import settings
from campus_auth.domain.errors import ConfigError
from campus_auth.interfaces.http.deps import get_token_issuer


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"status": "ok"}


def test_metrics_endpoint(client):
    client.post("/login", json={"usuario": "ana@x.com", "contraseña": "abc"})
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text
    assert "auth_login_attempts_total" in response.text


def test_startup_fails_without_secret(monkeypatch):
    get_token_issuer.cache_clear()
    monkeypatch.setattr(settings, "SECRET_KEY", None)
    try:
        with pytest.raises(ConfigError):
            campus_auth.main.on_startup()
    finally:
        get_token_issuer.cache_clear()
