from webshop.config import settings
from webshop.main import app
from fastapi.testclient import TestClient

client = TestClient(app)


def test_get_cart_issues_session_cookie():
    fresh = TestClient(app)
    res = fresh.get("/api/cart")
    assert res.status_code == 200
    body = res.json()
    assert body["items"] == []
    assert body["cart"]["session_id"] == res.cookies.get(settings.SESSION_COOKIE_NAME)

    # second call reuses the cookie and the same cart
    res2 = fresh.get("/api/cart")
    assert res2.json()["cart"]["id"] == body["cart"]["id"]


def test_repeat_add_merges_into_one_line(make_product):
    p = make_product()
    res = client.post("/api/cart/items", json={"productId": p.id, "quantity": 2})
    assert res.status_code == 200
    assert res.json()["success"] is True

    res = client.post("/api/cart/items", json={"productId": p.id, "quantity": 3})
    assert res.status_code == 200
    body = res.json()
    assert body["item"]["quantity"] == 5
    assert len(body["items"]) == 1
    assert body["items"][0]["product_id"] == p.id
    assert body["items"][0]["quantity"] == 5


def test_add_defaults_to_quantity_one(make_product):
    p = make_product()
    res = client.post("/api/cart/items", json={"productId": p.id})
    assert res.status_code == 200
    assert res.json()["item"]["quantity"] == 1


def test_add_unknown_product_is_not_found():
    res = client.post("/api/cart/items", json={"productId": 999, "quantity": 1})
    assert res.status_code == 404
    assert res.json() == {"error": "Product not found"}


def test_add_rejects_non_positive_quantity(make_product):
    p = make_product()
    res = client.post("/api/cart/items", json={"productId": p.id, "quantity": 0})
    assert res.status_code == 400
    assert "error" in res.json()


def test_add_requires_product_id():
    res = client.post("/api/cart/items", json={"quantity": 1})
    assert res.status_code == 400
    assert "productId" in res.json()["error"]


def test_put_sets_quantity(make_product):
    p = make_product()
    client.post("/api/cart/items", json={"productId": p.id, "quantity": 2})

    res = client.put(f"/api/cart/items/{p.id}", json={"quantity": 7})
    assert res.status_code == 200
    assert res.json()["items"][0]["quantity"] == 7


def test_put_zero_or_negative_removes_line(make_product):
    a = make_product(name="A")
    b = make_product(name="B")
    client.post("/api/cart/items", json={"productId": a.id, "quantity": 1})
    client.post("/api/cart/items", json={"productId": b.id, "quantity": 1})

    res = client.put(f"/api/cart/items/{a.id}", json={"quantity": 0})
    assert res.status_code == 200
    assert [it["product_id"] for it in res.json()["items"]] == [b.id]

    res = client.put(f"/api/cart/items/{b.id}", json={"quantity": -3})
    assert res.status_code == 200
    assert res.json()["items"] == []


def test_put_missing_line_is_not_found(make_product):
    p = make_product()
    res = client.put(f"/api/cart/items/{p.id}", json={"quantity": 2})
    assert res.status_code == 404
    assert res.json() == {"error": "Item not found in cart"}


def test_delete_line(make_product):
    p = make_product()
    client.post("/api/cart/items", json={"productId": p.id, "quantity": 1})

    res = client.delete(f"/api/cart/items/{p.id}")
    assert res.status_code == 200
    assert res.json() == {"success": True, "items": []}

    res = client.delete(f"/api/cart/items/{p.id}")
    assert res.status_code == 404


def test_clear_cart(make_product):
    a = make_product(name="A")
    b = make_product(name="B")
    client.post("/api/cart/items", json={"productId": a.id, "quantity": 1})
    client.post("/api/cart/items", json={"productId": b.id, "quantity": 2})

    res = client.delete("/api/cart")
    assert res.status_code == 200
    assert res.json()["removed"] == 2
    assert client.get("/api/cart").json()["items"] == []


def test_snapshot_price_survives_catalog_price_change(make_product):
    p = make_product(price="10.00")
    client.post("/api/cart/items", json={"productId": p.id, "quantity": 2})

    res = client.put(f"/api/admin/products/{p.id}", json={"price": "15.00"})
    assert res.status_code == 200

    assert client.get(f"/api/products/{p.id}").json()["price"] == 15.0

    body = client.get("/api/cart").json()
    item = body["items"][0]
    assert item["price"] == 10.0
    assert item["product_price"] == 15.0
    assert body["subtotal"] == 20.0

    # a repeat add keeps the first snapshot
    client.post("/api/cart/items", json={"productId": p.id, "quantity": 1})
    item = client.get("/api/cart").json()["items"][0]
    assert item["quantity"] == 3
    assert item["price"] == 10.0


def test_sessions_have_separate_carts(make_product):
    p = make_product()
    alice = TestClient(app)
    bob = TestClient(app)
    alice.post("/api/cart/items", json={"productId": p.id, "quantity": 4})

    assert len(alice.get("/api/cart").json()["items"]) == 1
    assert bob.get("/api/cart").json()["items"] == []


def test_deleting_product_drops_it_from_carts(make_product):
    p = make_product()
    client.post("/api/cart/items", json={"productId": p.id, "quantity": 1})

    assert client.delete(f"/api/admin/products/{p.id}").status_code == 200
    assert client.get("/api/cart").json()["items"] == []
