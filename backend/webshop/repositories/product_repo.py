from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from webshop.models.product import Product
from webshop.services.exceptions import ValidationError


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def get_by_name(self, name: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.name == name).first()

    def create(self, fields: Dict) -> Product:
        p = Product(**{k: v for k, v in fields.items() if k in Product.EDITABLE})
        self.db.add(p)
        self._flush()
        return p

    def update(self, product_id: int, fields: Dict) -> Optional[Product]:
        """
        Apply any subset of the editable columns. An empty subset is a caller error,
        an unknown id returns None.
        """
        changes = {k: v for k, v in fields.items() if k in Product.EDITABLE}
        if not changes:
            raise ValidationError("No valid fields to update")
        p = self.get(product_id)
        if not p:
            return None
        for k, v in changes.items():
            setattr(p, k, v)
        self._flush()
        return p

    def delete(self, product_id: int) -> bool:
        removed = self.db.query(Product).filter(Product.id == product_id).delete()
        self.db.flush()
        return removed > 0

    def _flush(self):
        # column constraints (NOT NULL, price/stock >= 0) are the only validation here
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ValidationError(f"Invalid product data: {e.orig}")
