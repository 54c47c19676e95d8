"""
ProFast Backend - Stripe Gateway Unit Tests (Mocked)
=====================================================

What:  Tests for StripeGateway with the Stripe SDK patched out.
How:   Patches stripe.PaymentIntent.create to simulate success/failure.

What we test:
    ✅ Successful intent creation returns the client secret
    ✅ Stripe errors become PaymentGatewayError carrying Stripe's message
    ✅ Circuit breaker opens after consecutive failures
    ✅ Open circuit rejects calls without touching Stripe
    ✅ Circuit breaker recovers after the timeout
    ❌ Real Stripe calls
"""

import time
from unittest.mock import MagicMock, patch

import pytest
import stripe

from profast.exceptions import CircuitBreakerOpenError, PaymentGatewayError
from profast.services.stripe_gateway import CircuitBreaker, StripeGateway


class TestCircuitBreaker:

    def test_initial_state_is_closed(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        assert cb.state == "closed"
        assert cb.failure_count == 0

    def test_stays_closed_under_threshold(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        for _ in range(4):
            cb.record_failure()
        assert cb.state == "closed"
        assert cb.can_execute() is True

    def test_opens_at_threshold(self):
        cb = CircuitBreaker(failure_threshold=3, recovery_timeout=60)
        for _ in range(3):
            cb.record_failure()
        assert cb.state == "open"

    def test_open_circuit_rejects_calls(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=60)
        cb.record_failure()

        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            cb.can_execute()
        assert 0 < exc_info.value.recovery_time <= 61

    def test_success_resets_failure_count(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        cb.record_failure()
        cb.record_failure()
        assert cb.failure_count == 2

        cb.record_success()
        assert cb.failure_count == 0
        assert cb.state == "closed"

    def test_half_open_after_recovery_timeout(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        assert cb.state == "open"

        time.sleep(0.01)
        assert cb.can_execute() is True
        assert cb.state == "half_open"

    def test_half_open_failure_reopens(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        cb.can_execute()

        cb.record_failure()
        assert cb.state == "open"

    def test_half_open_success_closes(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        cb.can_execute()

        cb.record_success()
        assert cb.state == "closed"


class TestStripeGateway:

    @pytest.mark.asyncio
    async def test_successful_intent(self):
        gateway = StripeGateway(api_key="sk_test_abc")
        intent = MagicMock(id="pi_123", client_secret="pi_123_secret_456")

        with patch.object(stripe.PaymentIntent, "create", return_value=intent) as create:
            secret = await gateway.create_payment_intent(15000, "usd")

        assert secret == "pi_123_secret_456"
        create.assert_called_once_with(
            api_key="sk_test_abc",
            amount=15000,
            currency="usd",
            payment_method_types=["card"],
        )
        assert gateway.circuit_breaker.failure_count == 0

    @pytest.mark.asyncio
    async def test_stripe_error_becomes_gateway_error(self):
        gateway = StripeGateway(api_key="sk_test_abc")
        error = stripe.InvalidRequestError("Amount must be at least 50 cents", param="amount")

        with patch.object(stripe.PaymentIntent, "create", side_effect=error):
            with pytest.raises(PaymentGatewayError) as exc_info:
                await gateway.create_payment_intent(10, "usd")

        assert "Amount must be at least 50 cents" in exc_info.value.message
        assert exc_info.value.context["error_type"] == "InvalidRequestError"
        assert gateway.circuit_breaker.failure_count == 1

    @pytest.mark.asyncio
    async def test_circuit_opens_after_repeated_failures(self):
        gateway = StripeGateway(api_key="sk_test_abc")
        gateway.circuit_breaker = CircuitBreaker(failure_threshold=2, recovery_timeout=60)
        error = stripe.APIConnectionError("Network unreachable")

        with patch.object(stripe.PaymentIntent, "create", side_effect=error) as create:
            for _ in range(2):
                with pytest.raises(PaymentGatewayError):
                    await gateway.create_payment_intent(15000, "usd")

            with pytest.raises(CircuitBreakerOpenError):
                await gateway.create_payment_intent(15000, "usd")

        assert create.call_count == 2

    @pytest.mark.asyncio
    async def test_health_check(self):
        gateway = StripeGateway(api_key="sk_test_abc")
        assert await gateway.health_check() is True

        gateway.circuit_breaker.state = CircuitBreaker.OPEN
        assert await gateway.health_check() is False

    @pytest.mark.asyncio
    async def test_health_check_without_key(self):
        gateway = StripeGateway(api_key="")
        assert await gateway.health_check() is False
