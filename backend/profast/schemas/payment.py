"""
ProFast Backend - Payment Schemas
==================================

What:  Bodies for payment confirmation and payment-intent creation, and the
       client-secret response.
Why:   Field names match what the checkout page already sends (camelCase).
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class PaymentConfirm(BaseModel):
    """
    Body of POST /payments/confirm.

    currency and paymentMethod fall back to the configured defaults
    (BDT / Stripe) when omitted.
    """
    parcelId: Optional[str] = Field(
        default=None, description="ObjectId (hex) of the parcel being paid for"
    )
    email: Optional[str] = Field(default=None, description="Payer email")
    amount: Any = Field(default=None, description="Amount paid, stored exactly as sent")
    transactionId: Optional[str] = Field(default=None, description="Gateway transaction id")
    currency: Optional[str] = None
    paymentMethod: Optional[str] = None


class PaymentIntentCreate(BaseModel):
    """Body of POST /create-payment."""

    amountInCents: int = Field(description="Amount in the smallest currency unit")


class PaymentIntentResponse(BaseModel):
    clientSecret: str = Field(description="Secret the front end uses to confirm the card payment")
