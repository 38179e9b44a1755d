from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from webshop.db import get_db
from webshop.repositories.product_repo import ProductRepository
from webshop.schemas.product_schema import ProductOut
from webshop.services.exceptions import NotFound

router = APIRouter(tags=["catalogue"])


@router.get("", summary="List products")
def list_products(db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    return [ProductOut.model_validate(p).model_dump() for p in repo.list()]


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: int, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    p = repo.get(product_id)
    if not p:
        raise NotFound("Product not found")
    return ProductOut.model_validate(p).model_dump()
