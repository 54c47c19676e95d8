"""
ProFast Backend - Payment Routes
=================================

What:  Payment history, confirmation and card payment intents.
Who:   Called by the checkout page and the "Payment History" dashboard.

Checkout sequence (front end):
    1. POST /create-payment {amountInCents}  → {clientSecret}
    2. stripe.confirmCardPayment(clientSecret) in the browser
    3. POST /payments/confirm {parcelId, email, amount, transactionId}
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from pymongo.asynchronous.database import AsyncDatabase

from profast.database import get_database
from profast.schemas.common import ErrorResponse, MessageResponse
from profast.schemas.payment import PaymentConfirm, PaymentIntentCreate, PaymentIntentResponse
from profast.services.gateway_base import PaymentGateway
from profast.services.payment_service import payment_service
from profast.services.stripe_gateway import get_payment_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


@router.get(
    "/payments",
    response_model=List[Dict[str, Any]],
    responses={500: {"description": "Failed to load payment history", "model": ErrorResponse}},
    summary="Payment history for a payer, newest first",
)
async def list_payments(
    email: str = Query(..., description="Payer email (exact match)"),
    db: AsyncDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await payment_service.list_history(db, email)


@router.post(
    "/payments/confirm",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed parcelId", "model": ErrorResponse},
        404: {"description": "Parcel not found or already paid", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Mark a parcel paid and record the payment",
)
async def confirm_payment(
    payment: PaymentConfirm,
    db: AsyncDatabase = Depends(get_database),
) -> MessageResponse:
    return await payment_service.confirm_payment(db, payment)


@router.post(
    "/create-payment",
    response_model=PaymentIntentResponse,
    responses={
        500: {"description": "Gateway rejected the request", "model": ErrorResponse},
        503: {"description": "Gateway temporarily unavailable", "model": ErrorResponse},
    },
    summary="Create a card payment intent",
)
async def create_payment(
    body: PaymentIntentCreate,
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> PaymentIntentResponse:
    logger.info("Creating payment intent for %d cents", body.amountInCents)
    return await payment_service.create_payment_intent(gateway, body.amountInCents)
