"""
API tests for root, health and metrics endpoints.
"""

from fastapi.testclient import TestClient

from conftest import make_redis_with_data, signup
from nucampsite.main import create_app


def test_index(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["service"] == "NuCampsite API"


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["redis"] == "connected"
    assert body["modules"] == "initialized"


def test_metrics_counts_sessions(client):
    signup(client, "alice")
    signup(client, "bob")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "# TYPE nucampsite_active_sessions gauge" in response.text
    assert "nucampsite_active_sessions 2" in response.text


def test_not_initialized_before_startup(app_env, graph_api):
    app = create_app(app_env, redis_client=make_redis_with_data(), http_client=graph_api.client())
    # No context manager, so the lifespan never runs
    client = TestClient(app)

    response = client.get("/campsites")
    assert response.status_code == 503
    assert response.json() == {"detail": "Service not initialized"}

    assert client.get("/health").status_code == 503
    assert client.get("/metrics").status_code == 503
