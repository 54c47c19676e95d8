"""
ProFast Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions, one per kind of failure a handler can hit.
Why:   Services raise these instead of building error responses themselves;
       the global handlers in main.py map each type to an HTTP status and a
       consistent JSON body.
How:   Each exception carries a client-safe `message` and a `context` dict
       that is logged but never returned.

Exception Hierarchy:
    ProFastError (base)
    ├── ValidationError          → 400 Bad Request (malformed ObjectId, missing id)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    ├── PaymentGatewayError      → 500 Internal Server Error (gateway message returned)
    ├── CircuitBreakerOpenError  → 503 Service Unavailable
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, Optional


class ProFastError(Exception):
    """
    Base exception for all ProFast application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProFastError):
    """
    Raised when client input cannot be used as given.

    The main case is an identifier that is not a valid ObjectId. Those are
    client mistakes and answered with 400 rather than a generic 500.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ProFastError):
    """
    Raised when a requested document does not exist.

    The driver returns None (or a zero modified count) for missing documents;
    services convert that into this exception so the handler can answer 404.
    The message is chosen by the caller ("Parcel not found", ...).
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ProFastError):
    """
    Raised when a MongoDB operation fails.

    The message is the short, handler-specific text ("Failed to save parcel").
    Driver details (server address, error codes) go into context and the log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PaymentGatewayError(ProFastError):
    """
    Raised when the payment gateway rejects or fails a request.

    Unlike DatabaseError, the gateway's own message is passed to the client:
    it is what the checkout page shows the payer (e.g. "Amount must be at
    least 50 cents").
    """

    def __init__(
        self,
        message: str = "Payment gateway request failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CircuitBreakerOpenError(ProFastError):
    """
    Raised when the gateway circuit breaker is OPEN.

    After cb_failure_threshold consecutive gateway failures, calls are
    rejected immediately for cb_recovery_timeout seconds.
    """

    def __init__(
        self,
        recovery_time: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Payment service is temporarily unavailable due to repeated failures. "
            f"Please retry in approximately {recovery_time} seconds."
        )
        ctx = context or {}
        ctx["recovery_time"] = recovery_time
        super().__init__(message=message, context=ctx)
        self.recovery_time = recovery_time


class RateLimitExceededError(ProFastError):
    """Raised when a client exceeds the per-IP request rate limit."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
