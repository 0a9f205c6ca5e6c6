from fastapi.testclient import TestClient

from jobly.main import app


client = TestClient(app)


def test_health_endpoint_returns_status():
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["services"] == {"database": "healthy"}


def test_openapi_available():
    resp = client.get("/openapi.json")
    assert resp.status_code == 200
    assert resp.json().get("info", {}).get("title") == "Jobly API"
