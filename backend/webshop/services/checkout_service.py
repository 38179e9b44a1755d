from decimal import Decimal
from typing import Dict, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from webshop.config import settings
from webshop.services.cart_service import CartService
from webshop.services.exceptions import ValidationError
from webshop.utils.log import get_logger

log = get_logger("checkout")

BANK_TRANSFER = "bankTransfer"
BANK_FIELDS = ("bankName", "accountNumber", "routingNumber", "accountHolderName", "billingAddress")


class CheckoutService:
    def __init__(self, db: Session, shipping: Optional[Decimal] = None):
        self.db = db
        self.cart = CartService(db)
        self.shipping = Decimal(shipping if shipping is not None else settings.SHIPPING_FLAT_RATE)

    def _gen_order_reference(self) -> str:
        return f"ORD-{uuid4().hex[:10].upper()}"

    def summary(self, cart_id: int) -> Dict:
        items = self.cart.list_items(cart_id)
        subtotal = CartService.subtotal(items)
        shipping = self.shipping if items else Decimal("0.00")
        shipping = shipping.quantize(Decimal("0.01"))
        return {
            "items": items,
            "subtotal": subtotal,
            "shipping": shipping,
            "total": subtotal + shipping,
        }

    def _validate_bank_details(self, details: Optional[Dict]):
        details = details or {}
        if any(not (details.get(f) or "").strip() for f in BANK_FIELDS):
            raise ValidationError("Please fill in all bank details")
        if len(details["accountNumber"].strip()) < 8:
            raise ValidationError("Account number must be at least 8 digits")
        if len(details["routingNumber"].strip()) != 9:
            raise ValidationError("Routing number must be 9 digits")

    def place_order(
        self, cart_id: int, payment_method: Optional[str], bank_details: Optional[Dict] = None
    ) -> Dict:
        """
        Confirm the cart contents and empty it. No payment is taken and no order
        row is written; the confirmation is only returned to the caller.
        """
        if not payment_method:
            raise ValidationError("Please select a payment method")
        if payment_method == BANK_TRANSFER:
            self._validate_bank_details(bank_details)

        summary = self.summary(cart_id)
        if not summary["items"]:
            raise ValidationError("Your cart is empty")

        order = {
            "order_reference": self._gen_order_reference(),
            "payment_method": payment_method,
            **summary,
        }
        self.cart.clear(cart_id)
        log.info(
            "Cart %s checked out as %s (%s, total %s)",
            cart_id,
            order["order_reference"],
            payment_method,
            order["total"],
        )
        return order
