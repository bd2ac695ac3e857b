# This project was developed with assistance from AI tools.
"""Tests for health and root endpoints."""

from homerates import __version__
from homerates.core.config import settings


def test_health(client):
    response = client.get("/health/")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert all(item["status"] == "healthy" for item in data)
    api_item = next(item for item in data if item["name"] == "API")
    assert api_item["version"] == __version__


def test_health_reports_missing_dataset(client, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "KNOWLEDGE_PATH", tmp_path / "missing.yaml")
    data = client.get("/health/").json()
    item = next(item for item in data if item["name"] == "Knowledge")
    assert item["status"] == "unhealthy"


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "HomeRates" in response.json()["message"]
