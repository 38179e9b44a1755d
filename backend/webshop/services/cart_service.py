from decimal import Decimal
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from webshop.models.cart import Cart
from webshop.models.cart_item import CartItem
from webshop.repositories.cart_repo import CartRepository
from webshop.repositories.product_repo import ProductRepository
from webshop.services.exceptions import NotFound, ValidationError
from webshop.utils.log import get_logger

log = get_logger("cart")


class CartService:
    """
    Session-scoped cart. Every operation takes the cart id resolved from the
    caller's session token; nothing is kept between calls.
    """

    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)

    def resolve_cart(self, session_id: str) -> Cart:
        if not session_id:
            raise ValidationError("Session id is required")
        c = self.cart_repo.get_by_session(session_id)
        if c:
            return c
        c = self.cart_repo.get_or_create(session_id)
        self.db.commit()
        log.info("Created cart id=%s for session %s", c.id, session_id)
        return c

    def add_item(self, cart_id: int, product_id: int, qty: int) -> CartItem:
        if not isinstance(qty, int) or isinstance(qty, bool) or qty < 1:
            raise ValidationError("Quantity must be a positive integer")
        product = self.product_repo.get(product_id)
        if not product:
            raise NotFound("Product not found")
        self.cart_repo.merge_item(cart_id, product_id, qty, product.price)
        self.db.commit()
        item = self.cart_repo.get_item(cart_id, product_id)
        log.info(
            "Cart %s: added %s x product %s (line quantity now %s)",
            cart_id,
            qty,
            product_id,
            item.quantity,
        )
        return item

    def set_item_quantity(self, cart_id: int, product_id: int, qty: int) -> bool:
        if qty <= 0:
            return self.remove_item(cart_id, product_id)
        updated = self.cart_repo.set_quantity(cart_id, product_id, qty)
        self.db.commit()
        if updated:
            log.info("Cart %s: product %s quantity set to %s", cart_id, product_id, qty)
        return updated

    def remove_item(self, cart_id: int, product_id: int) -> bool:
        removed = self.cart_repo.remove_item(cart_id, product_id)
        self.db.commit()
        if removed:
            log.info("Cart %s: removed product %s", cart_id, product_id)
        return removed

    def clear(self, cart_id: int) -> int:
        removed = self.cart_repo.clear(cart_id)
        self.db.commit()
        log.info("Cart %s: cleared %s line(s)", cart_id, removed)
        return removed

    def list_items(self, cart_id: int) -> List[Dict]:
        return self.cart_repo.list_items(cart_id)

    @staticmethod
    def subtotal(items: Iterable[Dict]) -> Decimal:
        # the stored snapshot governs totals, not the live catalog price
        total = sum((Decimal(it["price"]) * it["quantity"] for it in items), Decimal("0.00"))
        return total.quantize(Decimal("0.01"))
