from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from webshop.db import get_db
from webshop.repositories.product_repo import ProductRepository
from webshop.schemas.admin_schema import LoginIn, UpdatePasswordIn, UpdateUsernameIn
from webshop.schemas.product_schema import ProductCreate, ProductOut, ProductUpdate
from webshop.services.admin_service import AdminService
from webshop.services.exceptions import NotFound
from webshop.utils.log import get_logger

# TODO: admin endpoints other than /login are not gated on a logged-in admin yet;
# they need a server-side admin session issued by /login.

log = get_logger("api.admin")

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _product(p):
    return ProductOut.model_validate(p).model_dump()


@router.post("/login", summary="Check admin credentials")
def login(payload: LoginIn, db: Session = Depends(get_db)):
    AdminService(db).login(payload.username, payload.password)
    return {"success": True, "message": "Login successful"}


@router.get("/products", summary="List products")
def list_products(db: Session = Depends(get_db)):
    return [_product(p) for p in ProductRepository(db).list()]


@router.get("/products/{product_id}", summary="Get product")
def get_product(product_id: int, db: Session = Depends(get_db)):
    p = ProductRepository(db).get(product_id)
    if not p:
        raise NotFound("Product not found")
    return _product(p)


@router.post("/products", summary="Create product")
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    p = repo.create(payload.model_dump())
    db.commit()
    log.info("Created product id=%s name=%s", p.id, p.name)
    return {"success": True, "product": _product(p)}


@router.put("/products/{product_id}", summary="Update product")
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    p = repo.update(product_id, payload.model_dump(exclude_unset=True))
    if not p:
        raise NotFound("Product not found")
    db.commit()
    log.info("Updated product id=%s", product_id)
    return {"success": True, "product": _product(p)}


@router.delete("/products/{product_id}", summary="Delete product")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    if not repo.delete(product_id):
        raise NotFound("Product not found")
    db.commit()
    log.info("Deleted product id=%s", product_id)
    return {"success": True, "message": "Product deleted successfully"}


@router.get("/credentials", summary="Current admin username")
def get_credentials(db: Session = Depends(get_db)):
    rec = AdminService(db).get_credentials()
    return {"username": rec.username}


@router.post("/update-username", summary="Change admin username")
def update_username(payload: UpdateUsernameIn, db: Session = Depends(get_db)):
    AdminService(db).update_username(payload.newUsername)
    return {"success": True, "message": "Username updated successfully"}


@router.post("/update-password", summary="Change admin password")
def update_password(payload: UpdatePasswordIn, db: Session = Depends(get_db)):
    AdminService(db).update_password(payload.currentPassword, payload.newPassword)
    return {"success": True, "message": "Password updated successfully"}
