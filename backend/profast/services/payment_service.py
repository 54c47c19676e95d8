"""
ProFast Backend - Payment Service
==================================

What:  Payment history, payment confirmation and payment-intent creation.
Who:   Called by routes/payments.py.

Confirmation Flow (POST /payments/confirm):
    ┌───────────────────────┐  modified 0  ┌──────────────────────────────┐
    │ parcels.update_one    │─────────────▶│ 404 "not found or already    │
    │ payment_status="paid" │              │ paid", no history written    │
    └───────────┬───────────┘              └──────────────────────────────┘
                │ modified 1
                ▼
    ┌───────────────────────┐
    │ paymentHistory        │
    │ .insert_one(record)   │
    └───────────────────────┘

Atomicity:
    By default the two writes are independent: a crash between them leaves
    the parcel marked paid with no history record. With
    PAYMENT_CONFIRM_TRANSACTIONAL=true both run inside one transaction on
    a single session (requires a replica set).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.asynchronous.client_session import AsyncClientSession
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from profast.config import settings
from profast.database import PARCELS, PAYMENT_HISTORY
from profast.exceptions import DatabaseError, NotFoundError
from profast.schemas.common import MessageResponse
from profast.schemas.documents import parse_object_id, serialize_document
from profast.schemas.payment import PaymentConfirm, PaymentIntentResponse
from profast.services.gateway_base import PaymentGateway

logger = logging.getLogger(__name__)

PAYMENT_CONFIRMED_MESSAGE = "Payment confirmed and history saved."
ALREADY_PAID_MESSAGE = "Parcel not found or already paid."


def iso_timestamp(moment: datetime) -> str:
    """UTC timestamp as 2024-01-15T12:00:00.000Z (millisecond precision)."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PaymentService:
    """
    Business logic for payments.

    The history record is immutable; nothing in the service updates or
    deletes it once written.
    """

    async def list_history(self, db: AsyncDatabase, email: str) -> List[Dict[str, Any]]:
        """Payment records for `email`, most recent payment first."""
        try:
            cursor = db[PAYMENT_HISTORY].find({"email": email}).sort("paid_at", DESCENDING)
            history = await cursor.to_list()
        except PyMongoError as e:
            logger.error("Failed to load payment history for %s: %s", email, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to load payment history",
                context={"error_type": type(e).__name__},
            )
        return serialize_document(history)

    async def confirm_payment(self, db: AsyncDatabase, payment: PaymentConfirm) -> MessageResponse:
        """
        Mark the parcel paid, then record the payment.

        Raises:
            ValidationError: parcelId missing or not an ObjectId (→ 400)
            NotFoundError: parcel missing or already paid (→ 404)
            DatabaseError: either write failed (→ 500)
        """
        parcel_id = parse_object_id(payment.parcelId, field="parcelId")

        try:
            if settings.payment_confirm_transactional:
                async with db.client.start_session() as session:
                    await session.with_transaction(
                        lambda s: self._mark_paid_and_record(db, parcel_id, payment, s)
                    )
            else:
                await self._mark_paid_and_record(db, parcel_id, payment)
        except PyMongoError as e:
            logger.error("Payment confirmation error for parcel %s: %s", parcel_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error",
                context={"parcel_id": str(parcel_id), "error_type": type(e).__name__},
            )

        logger.info(
            "Payment %s confirmed for parcel %s by %s",
            payment.transactionId,
            parcel_id,
            payment.email,
        )
        return MessageResponse(message=PAYMENT_CONFIRMED_MESSAGE)

    async def _mark_paid_and_record(
        self,
        db: AsyncDatabase,
        parcel_id: ObjectId,
        payment: PaymentConfirm,
        session: Optional[AsyncClientSession] = None,
    ) -> None:
        update_result = await db[PARCELS].update_one(
            {"_id": parcel_id},
            {"$set": {"payment_status": "paid"}},
            session=session,
        )

        # modified_count (not matched_count): an already-paid parcel matches
        # but is not modified, and must not get a second history record
        if update_result.modified_count == 0:
            raise NotFoundError(
                message=ALREADY_PAID_MESSAGE,
                resource="parcel",
                resource_id=str(parcel_id),
                context={"matched_count": update_result.matched_count},
            )

        paid_at = datetime.now(timezone.utc)
        history_doc = {
            "parcelId": parcel_id,
            "email": payment.email,
            "amount": payment.amount,
            "currency": payment.currency or settings.payment_default_currency,
            "transactionId": payment.transactionId,
            "paymentMethod": payment.paymentMethod or settings.payment_default_method,
            "paid_at_string": iso_timestamp(paid_at),
            "paid_at": paid_at,
        }
        await db[PAYMENT_HISTORY].insert_one(history_doc, session=session)

    async def create_payment_intent(
        self, gateway: PaymentGateway, amount_in_cents: int
    ) -> PaymentIntentResponse:
        """
        Raises:
            PaymentGatewayError: gateway rejected the request (→ 500 with its message)
            CircuitBreakerOpenError: gateway tripped (→ 503)
        """
        client_secret = await gateway.create_payment_intent(
            amount=amount_in_cents,
            currency=settings.payment_intent_currency,
        )
        return PaymentIntentResponse(clientSecret=client_secret)


payment_service = PaymentService()
