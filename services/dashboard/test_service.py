"""Tests for Dashboard Service."""
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from fastapi.testclient import TestClient
from services.dashboard import service
from services.dashboard.service import app

client = TestClient(app)


def test_health_check():
    """Test the health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "dashboard"


def test_dashboard_links_follow_request_host():
    """Links on the page point at the host the page was requested on."""
    response = client.get("/", headers={"host": "10.0.0.5:8080"})
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert 'href="http://10.0.0.5:9085"' in response.text
    assert 'href="http://10.0.0.5:3000"' in response.text
    assert 'href="http://localhost:' not in response.text


def test_dashboard_uses_default_client_host():
    response = client.get("/")
    assert 'href="http://testserver:9080"' in response.text


def test_dashboard_legacy_port_links(monkeypatch):
    """Pages without data-service fall back to port matching."""
    monkeypatch.setattr(
        service,
        "TEMPLATE",
        '<a href="http://old:9080">Nginx</a><a href="http://old:9999">Other</a>',
    )
    response = client.get("/", headers={"host": "dash.example"})
    assert response.text == '<a href="http://dash.example:9080">Nginx</a><a href="http://old:9999">Other</a>'


def test_ipv6_host_is_bracketed():
    response = client.get("/api/services/redis", headers={"host": "[::1]:8080"})
    assert response.status_code == 200
    assert response.json()["url"] == "http://[::1]:9085"

    page = client.get("/", headers={"host": "[::1]:8080"})
    assert 'href="http://[::1]:9085"' in page.text


def test_service_lookup():
    response = client.get("/api/services/REDIS", headers={"host": "10.0.0.5"})
    assert response.status_code == 200
    assert response.json() == {"service": "redis", "port": 9085, "url": "http://10.0.0.5:9085"}


def test_unknown_service_is_404():
    response = client.get("/api/services/foo")
    assert response.status_code == 404
    assert response.json()["detail"] == "Service foo not found"


def test_service_list():
    response = client.get("/api/services", headers={"host": "ops.internal"})
    assert response.status_code == 200
    data = response.json()
    assert data["host"] == "ops.internal"
    assert len(data["services"]) == 21
    assert data["services"]["etcd"] == "http://ops.internal:2379"


def test_logs_endpoint():
    """Test logs endpoint."""
    client.get("/api/services/missing")
    response = client.get("/logs?limit=10")
    assert response.status_code == 200
    data = response.json()
    assert isinstance(data, list)
    assert any(entry["message"] == "Service missing not found" for entry in data)


def test_metrics_endpoint():
    """Test metrics endpoint."""
    client.get("/")
    response = client.get("/metrics?period=60")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "dashboard"
    assert data["counters"]["page_views_total"] >= 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
