from typing import Optional

from pydantic import BaseModel, Field

# largest value an INTEGER column holds
MAX_QUANTITY = 2**63 - 1


class AddItemIn(BaseModel):
    productId: int
    quantity: int = Field(1, le=MAX_QUANTITY)


class UpdateItemIn(BaseModel):
    quantity: int = Field(..., le=MAX_QUANTITY)


class BankDetails(BaseModel):
    bankName: Optional[str] = None
    accountNumber: Optional[str] = None
    routingNumber: Optional[str] = None
    accountHolderName: Optional[str] = None
    billingAddress: Optional[str] = None


class CheckoutIn(BaseModel):
    paymentMethod: Optional[str] = None
    bankDetails: Optional[BankDetails] = None
