from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from webshop.main import app
from webshop.repositories.product_repo import ProductRepository


def test_first_contact_error_still_sets_cookie():
    client = TestClient(app)
    res = client.post("/api/cart/items", json={"productId": 999, "quantity": 1})
    assert res.status_code == 404
    assert res.json() == {"error": "Product not found"}
    token = res.cookies.get("sessionId")
    assert token

    # the same session is reused afterwards
    res = client.get("/api/cart")
    assert res.json()["cart"]["session_id"] == token
    assert "sessionId" not in res.cookies


def test_oversized_quantity_is_rejected(make_product):
    p = make_product()
    client = TestClient(app)
    res = client.post("/api/cart/items", json={"productId": p.id, "quantity": 10**20})
    assert res.status_code == 400
    assert "error" in res.json()

    client.post("/api/cart/items", json={"productId": p.id, "quantity": 1})
    res = client.put(f"/api/cart/items/{p.id}", json={"quantity": 10**20})
    assert res.status_code == 400
    assert client.get("/api/cart").json()["items"][0]["quantity"] == 1


def test_storage_failure_maps_to_json(monkeypatch):
    def broken(self):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ProductRepository, "list", broken)
    res = TestClient(app).get("/api/products")
    assert res.status_code == 500
    assert res.json() == {"error": "Storage error"}


def test_unexpected_failure_maps_to_json(monkeypatch):
    def broken(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(ProductRepository, "list", broken)
    res = TestClient(app, raise_server_exceptions=False).get("/api/products")
    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}
