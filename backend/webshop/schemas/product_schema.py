# backend/webshop/schemas/product_schema.py
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel
from pydantic import ConfigDict


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    category: Optional[str] = None
    stock: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    category: Optional[str] = None
    stock: int = 0


class ProductUpdate(BaseModel):
    # every field optional; only the ones actually sent are applied
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = None
