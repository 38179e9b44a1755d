from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from webshop.models.cart import Cart
from webshop.models.cart_item import CartItem
from webshop.models.product import Product

# dialects with INSERT ... ON CONFLICT
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def _upsert_insert(self):
        return _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)

    def get_by_session(self, session_id: str) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.session_id == session_id).first()

    def get_or_create(self, session_id: str) -> Cart:
        insert = self._upsert_insert()
        if insert is None:
            c = self.get_by_session(session_id)
            if c:
                return c
            c = Cart(session_id=session_id)
            self.db.add(c)
            self.db.flush()
            return c

        now = _now()
        stmt = (
            insert(Cart)
            .values(session_id=session_id, created_at=now, updated_at=now)
            .on_conflict_do_nothing(index_elements=["session_id"])
        )
        self.db.execute(stmt)
        return self.get_by_session(session_id)

    def get_item(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        return (
            self.db.execute(
                select(CartItem)
                .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
                .execution_options(populate_existing=True)
            )
            .scalars()
            .first()
        )

    def merge_item(self, cart_id: int, product_id: int, qty: int, price_snapshot: Decimal) -> CartItem:
        """
        Insert the line, or add qty onto the existing one. The price snapshot is only
        written on insert; a repeat add keeps the price from the first add.
        """
        now = _now()
        insert = self._upsert_insert()
        if insert is not None:
            stmt = insert(CartItem).values(
                cart_id=cart_id,
                product_id=product_id,
                quantity=qty,
                price=price_snapshot,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["cart_id", "product_id"],
                set_={
                    "quantity": CartItem.quantity + stmt.excluded.quantity,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            self.db.execute(stmt)
        else:
            item = self.get_item(cart_id, product_id)
            if item:
                item.quantity = item.quantity + qty
            else:
                self.db.add(
                    CartItem(cart_id=cart_id, product_id=product_id, quantity=qty, price=price_snapshot)
                )
        self.touch(cart_id)
        self.db.flush()
        return self.get_item(cart_id, product_id)

    def set_quantity(self, cart_id: int, product_id: int, qty: int) -> bool:
        result = self.db.execute(
            update(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .values(quantity=qty, updated_at=_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            self.touch(cart_id)
        return result.rowcount > 0

    def remove_item(self, cart_id: int, product_id: int) -> bool:
        removed = (
            self.db.query(CartItem)
            .filter(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .delete(synchronize_session=False)
        )
        if removed:
            self.touch(cart_id)
        return removed > 0

    def clear(self, cart_id: int) -> int:
        removed = (
            self.db.query(CartItem)
            .filter(CartItem.cart_id == cart_id)
            .delete(synchronize_session=False)
        )
        if removed:
            self.touch(cart_id)
        return removed

    def list_items(self, cart_id: int) -> List[Dict]:
        rows = (
            self.db.query(CartItem, Product.name, Product.image, Product.price)
            .join(Product, CartItem.product_id == Product.id)
            .filter(CartItem.cart_id == cart_id)
            .order_by(CartItem.id)
            .populate_existing()
            .all()
        )
        return [
            {
                "id": it.id,
                "cart_id": it.cart_id,
                "product_id": it.product_id,
                "quantity": it.quantity,
                "price": it.price,
                "name": name,
                "image": image,
                "product_price": product_price,
                "created_at": it.created_at,
            }
            for it, name, image, product_price in rows
        ]

    def touch(self, cart_id: int):
        self.db.execute(
            update(Cart)
            .where(Cart.id == cart_id)
            .values(updated_at=_now())
            .execution_options(synchronize_session=False)
        )
