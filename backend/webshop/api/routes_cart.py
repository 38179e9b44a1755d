from webshop.api.deps import get_session_token
from webshop.db import get_db
from webshop.schemas.cart_schema import AddItemIn, UpdateItemIn
from webshop.services.cart_service import CartService
from webshop.services.exceptions import NotFound
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_dict(cart):
    return {
        "id": cart.id,
        "session_id": cart.session_id,
        "created_at": cart.created_at,
        "updated_at": cart.updated_at,
    }


def _item_dict(it):
    return {
        "id": it.id,
        "cart_id": it.cart_id,
        "product_id": it.product_id,
        "quantity": it.quantity,
        "price": it.price,
    }


@router.get("", summary="Get cart")
def get_cart(session_id: str = Depends(get_session_token), db: Session = Depends(get_db)):
    svc = CartService(db)
    cart = svc.resolve_cart(session_id)
    items = svc.list_items(cart.id)
    return {"cart": _cart_dict(cart), "items": items, "subtotal": svc.subtotal(items)}


@router.post("/items", summary="Add item to cart")
def add_item(
    payload: AddItemIn,
    session_id: str = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    cart = svc.resolve_cart(session_id)
    item = svc.add_item(cart.id, payload.productId, payload.quantity)
    return {"success": True, "item": _item_dict(item), "items": svc.list_items(cart.id)}


@router.put("/items/{product_id}", summary="Set item quantity (<= 0 removes)")
def update_item(
    product_id: int,
    payload: UpdateItemIn,
    session_id: str = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    cart = svc.resolve_cart(session_id)
    if not svc.set_item_quantity(cart.id, product_id, payload.quantity):
        raise NotFound("Item not found in cart")
    return {"success": True, "items": svc.list_items(cart.id)}


@router.delete("/items/{product_id}", summary="Remove item")
def remove_item(
    product_id: int,
    session_id: str = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    cart = svc.resolve_cart(session_id)
    if not svc.remove_item(cart.id, product_id):
        raise NotFound("Item not found in cart")
    return {"success": True, "items": svc.list_items(cart.id)}


@router.delete("", summary="Empty the cart")
def clear_cart(session_id: str = Depends(get_session_token), db: Session = Depends(get_db)):
    svc = CartService(db)
    cart = svc.resolve_cart(session_id)
    return {"success": True, "removed": svc.clear(cart.id)}
