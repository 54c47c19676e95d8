"""
ProFast Backend - Abstract Payment Gateway Interface
=====================================================

What:  The contract PaymentService relies on for card payments.
Why:   PaymentService should not know which provider is behind it; tests
       substitute a stub gateway through FastAPI dependency overrides.
How:   StripeGateway (stripe_gateway.py) is the production implementation.
"""

from abc import ABC, abstractmethod


class PaymentGateway(ABC):
    """
    Contract:
        - create_payment_intent() returns the client secret for a card payment
        - provider errors are wrapped in PaymentGatewayError with the
          provider's human-readable message
        - implementations do not retry; a failed intent is reported to the payer
    """

    @abstractmethod
    async def create_payment_intent(self, amount: int, currency: str) -> str:
        """
        Ask the provider for a card payment intent.

        Args:
            amount:   Amount in the smallest currency unit (cents)
            currency: ISO currency code, lower case

        Returns:
            The intent's client secret.

        Raises:
            PaymentGatewayError: the provider rejected or failed the request
            CircuitBreakerOpenError: too many recent consecutive failures
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the gateway is configured and accepting calls."""
        ...
