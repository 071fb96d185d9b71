import pytest
from fastapi.testclient import TestClient

from urlsentry import api


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api, "API_KEY", None)
    return TestClient(api.app)


def test_health(client):
    rv = client.get("/health")
    assert rv.status_code == 200
    assert rv.json() == {"status": "ok", "version": api.VERSION}


def test_score_url(client):
    rv = client.post("/score-url", json={"url": "http://192.168.1.1/login"})
    assert rv.status_code == 200

    data = rv.json()
    assert data["schema_version"] == "1.0"
    assert data["status"] == "dangerous"
    assert data["score"] == 70
    assert data["reasons"][0] == "High risk of phishing"


def test_score_urls(client):
    rv = client.post("/score-urls", json={"urls": ["https://www.google.com", "http://"]})
    assert rv.status_code == 200

    results = rv.json()["results"]
    assert [r["status"] for r in results] == ["safe", "suspicious"]
    assert results[0]["recommendation"] is None


def test_empty_url_rejected(client):
    rv = client.post("/score-url", json={"url": "  "})
    assert rv.status_code == 422
    assert rv.json()["detail"] == "URL Required"


def test_api_key_required_when_configured(monkeypatch):
    monkeypatch.setattr(api, "API_KEY", "secret")
    client = TestClient(api.app)

    rv = client.post("/score-url", json={"url": "example.com"})
    assert rv.status_code == 401

    rv = client.post("/score-url", json={"url": "example.com"}, headers={"X-API-KEY": "wrong"})
    assert rv.status_code == 401

    rv = client.post("/score-url", json={"url": "example.com"}, headers={"X-API-KEY": "secret"})
    assert rv.status_code == 200
