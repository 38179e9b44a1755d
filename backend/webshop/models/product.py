from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, Text

from webshop.db import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(512), nullable=True)
    category = Column(String(128), nullable=True, index=True)
    stock = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # columns an admin update may touch
    EDITABLE = ("name", "description", "price", "image", "category", "stock")

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
