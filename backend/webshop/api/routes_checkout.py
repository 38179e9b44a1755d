from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from webshop.api.deps import get_session_token
from webshop.db import get_db
from webshop.schemas.cart_schema import CheckoutIn
from webshop.services.cart_service import CartService
from webshop.services.checkout_service import CheckoutService

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.get("/summary", summary="Subtotal, shipping and total for the session cart")
def checkout_summary(session_id: str = Depends(get_session_token), db: Session = Depends(get_db)):
    cart = CartService(db).resolve_cart(session_id)
    return CheckoutService(db).summary(cart.id)


@router.post("", summary="Place order from the session cart")
def place_order(
    payload: CheckoutIn,
    session_id: str = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    cart = CartService(db).resolve_cart(session_id)
    bank_details = payload.bankDetails.model_dump() if payload.bankDetails else None
    order = CheckoutService(db).place_order(cart.id, payload.paymentMethod, bank_details)
    return {"success": True, "order": order}
