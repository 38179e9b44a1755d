from webshop.main import app
from fastapi.testclient import TestClient

client = TestClient(app)


def test_health_ok():
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["db"] is True


def test_unknown_route_uses_error_body():
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert "error" in res.json()
