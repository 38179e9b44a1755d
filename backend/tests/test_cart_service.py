from decimal import Decimal

import pytest

from webshop.models.product import Product
from webshop.services.cart_service import CartService
from webshop.services.exceptions import NotFound, ValidationError


def test_resolve_cart_is_idempotent(db):
    svc = CartService(db)
    first = svc.resolve_cart("session-a")
    second = svc.resolve_cart("session-a")
    other = svc.resolve_cart("session-b")
    assert first.id == second.id
    assert other.id != first.id


def test_resolve_cart_requires_token(db):
    with pytest.raises(ValidationError):
        CartService(db).resolve_cart("")


def test_add_merges_and_keeps_first_snapshot(db, make_product):
    p = make_product(price=Decimal("10.00"))
    svc = CartService(db)
    cart = svc.resolve_cart("s1")

    item = svc.add_item(cart.id, p.id, 2)
    assert item.quantity == 2
    assert item.price == Decimal("10.00")

    db.get(Product, p.id).price = Decimal("12.50")
    db.commit()

    item = svc.add_item(cart.id, p.id, 3)
    assert item.quantity == 5
    assert item.price == Decimal("10.00")

    items = svc.list_items(cart.id)
    assert len(items) == 1
    assert items[0]["product_price"] == Decimal("12.50")
    assert svc.subtotal(items) == Decimal("50.00")


def test_add_has_no_upper_bound(db, make_product):
    p = make_product()
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    svc.add_item(cart.id, p.id, 100000)
    item = svc.add_item(cart.id, p.id, 100000)
    assert item.quantity == 200000


@pytest.mark.parametrize("qty", [0, -1])
def test_add_rejects_non_positive_quantity(db, make_product, qty):
    p = make_product()
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    with pytest.raises(ValidationError):
        svc.add_item(cart.id, p.id, qty)


def test_add_unknown_product(db):
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    with pytest.raises(NotFound):
        svc.add_item(cart.id, 12345, 1)
    assert svc.list_items(cart.id) == []


@pytest.mark.parametrize("qty", [0, -5])
def test_set_quantity_non_positive_removes(db, make_product, qty):
    p = make_product()
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    svc.add_item(cart.id, p.id, 2)

    assert svc.set_item_quantity(cart.id, p.id, qty) is True
    assert svc.list_items(cart.id) == []


def test_set_quantity_overwrites(db, make_product):
    p = make_product()
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    svc.add_item(cart.id, p.id, 2)

    assert svc.set_item_quantity(cart.id, p.id, 9) is True
    assert svc.list_items(cart.id)[0]["quantity"] == 9


def test_set_quantity_on_missing_line_returns_false(db, make_product):
    p = make_product()
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    assert svc.set_item_quantity(cart.id, p.id, 3) is False


def test_remove_missing_line_leaves_others(db, make_product):
    a = make_product(name="A")
    b = make_product(name="B")
    svc = CartService(db)
    cart = svc.resolve_cart("s1")
    svc.add_item(cart.id, a.id, 1)

    assert svc.remove_item(cart.id, b.id) is False
    items = svc.list_items(cart.id)
    assert [it["product_id"] for it in items] == [a.id]

    assert svc.remove_item(cart.id, a.id) is True
    assert svc.list_items(cart.id) == []


def test_lines_are_scoped_to_their_cart(db, make_product):
    p = make_product()
    svc = CartService(db)
    c1 = svc.resolve_cart("s1")
    c2 = svc.resolve_cart("s2")
    svc.add_item(c1.id, p.id, 1)

    assert svc.remove_item(c2.id, p.id) is False
    assert len(svc.list_items(c1.id)) == 1
