"""
ProFast Backend - Stripe Payment Gateway
=========================================

What:  PaymentGateway implementation on top of the Stripe SDK.
Why:   The checkout page confirms card payments with Stripe Elements, which
       needs a PaymentIntent client secret created server-side.
How:   Calls stripe.PaymentIntent.create in the threadpool (the SDK call is
       blocking), guarded by a circuit breaker.

Resilience:
    No retries: creating an intent twice would leave an orphaned intent, and
    the payer can simply press "Pay" again. Instead, a circuit breaker stops
    hammering Stripe after repeated failures (network outage, revoked key)
    and answers immediately with 503 until the recovery timeout elapses.
"""

import logging
import time
from typing import Optional

import stripe
from starlette.concurrency import run_in_threadpool

from profast.config import settings
from profast.exceptions import CircuitBreakerOpenError, PaymentGatewayError
from profast.services.gateway_base import PaymentGateway

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Circuit Breaker
# ══════════════════════════════════════════════════════════════════════════

class CircuitBreaker:
    """
    State Machine:
        CLOSED (normal operation)
            → On failure: increment failure_count
            → When failure_count >= threshold: transition to OPEN

        OPEN (rejecting all requests)
            → All calls raise CircuitBreakerOpenError immediately
            → After recovery_timeout seconds: transition to HALF_OPEN

        HALF_OPEN (testing recovery)
            → Allow the next request through
            → On success: CLOSED; on failure: back to OPEN

    Only touched from the event loop thread, so plain counters suffice.
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

    def __init__(self, failure_threshold: int = 5, recovery_timeout: int = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time: Optional[float] = None

    def can_execute(self) -> bool:
        """
        Returns:
            True if the call may proceed.

        Raises:
            CircuitBreakerOpenError: circuit is OPEN and the timeout has not elapsed.
        """
        if self.state != self.OPEN:
            return True

        elapsed = time.time() - (self.last_failure_time or 0)
        if elapsed >= self.recovery_timeout:
            logger.info("Gateway circuit breaker HALF_OPEN after %.1fs", elapsed)
            self.state = self.HALF_OPEN
            return True

        raise CircuitBreakerOpenError(recovery_time=int(self.recovery_timeout - elapsed) + 1)

    def record_success(self) -> None:
        if self.state == self.HALF_OPEN:
            logger.info("Gateway circuit breaker CLOSED (gateway recovered)")
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time = None

    def record_failure(self) -> None:
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self.state == self.HALF_OPEN:
            logger.warning("Gateway circuit breaker back to OPEN (test request failed)")
            self.state = self.OPEN
        elif self.failure_count >= self.failure_threshold:
            logger.warning(
                "Gateway circuit breaker OPENING after %d consecutive failures",
                self.failure_count,
            )
            self.state = self.OPEN


# ══════════════════════════════════════════════════════════════════════════
# Stripe Gateway
# ══════════════════════════════════════════════════════════════════════════

class StripeGateway(PaymentGateway):
    """
    Error Handling:
        stripe.StripeError → record failure → PaymentGatewayError(user_message)
        Circuit OPEN       → CircuitBreakerOpenError without calling Stripe

    Card errors (declines) are the payer's problem, not Stripe's, but they are
    rare at intent creation time; every StripeError counts as a failure.
    """

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.payment_gateway_key
        self.circuit_breaker = CircuitBreaker(
            failure_threshold=settings.cb_failure_threshold,
            recovery_timeout=settings.cb_recovery_timeout,
        )

    async def create_payment_intent(self, amount: int, currency: str) -> str:
        self.circuit_breaker.can_execute()

        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self.api_key,
                amount=amount,
                currency=currency,
                payment_method_types=["card"],
            )
        except stripe.StripeError as e:
            self.circuit_breaker.record_failure()
            message = e.user_message or str(e)
            logger.error(
                "Stripe rejected payment intent (amount=%s %s): %s",
                amount,
                currency,
                message,
            )
            raise PaymentGatewayError(
                message=message,
                context={
                    "error_type": type(e).__name__,
                    "code": getattr(e, "code", None),
                    "request_id": getattr(e, "request_id", None),
                },
            )

        self.circuit_breaker.record_success()
        logger.info("Payment intent %s created for %s %s", intent.id, amount, currency)
        return intent.client_secret

    async def health_check(self) -> bool:
        """
        Configured and not tripped. No network call: the health endpoint is
        polled frequently and Stripe requests are rate-limited per key.
        """
        return bool(self.api_key) and self.circuit_breaker.state != CircuitBreaker.OPEN


# ── Singleton Instance ────────────────────────────────────────────────────
# Circuit breaker state must be shared across requests
stripe_gateway = StripeGateway()


def get_payment_gateway() -> PaymentGateway:
    """FastAPI dependency; overridden in tests with a stub gateway."""
    return stripe_gateway
