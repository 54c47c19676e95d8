"""
ProFast Backend - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       lifespan() handles startup checks and shutdown cleanup.
Who:   uvicorn imports `profast.main:app`; `profast-server` calls run().

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Ping MongoDB (retried with backoff)
    4. Ensure collection indexes (optional)

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from profast import __version__
from profast.config import settings
from profast.database import close_client, ensure_indexes, get_database, ping_database
from profast.exceptions import (
    CircuitBreakerOpenError,
    DatabaseError,
    NotFoundError,
    PaymentGatewayError,
    ProFastError,
    ValidationError,
)
from profast.middleware.logging import RequestLoggingMiddleware
from profast.middleware.rate_limit import RateLimitMiddleware
from profast.middleware.request_id import RequestIDMiddleware, request_id_var
from profast.routes import health, parcels, payments, tracking, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("stripe").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup failures are logged but never stop the server: GET / and
    /health must keep answering so the deployment can report what is wrong.
    """
    setup_logging()
    logger.info("ProFast Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    try:
        await ping_database()
        if settings.db_ensure_indexes:
            await ensure_indexes(await get_database())
    except PyMongoError as e:
        logger.error("MongoDB is not reachable at startup: %s", str(e))

    logger.info("ProFast Server is running on port %d", settings.port)

    yield

    logger.info("ProFast Backend shutting down...")
    await close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        ValidationError         → 400
        NotFoundError           → 404
        DatabaseError           → 500 (short handler message, context logged)
        PaymentGatewayError     → 500 (gateway message returned)
        CircuitBreakerOpenError → 503 + Retry-After
        ProFastError (base)     → 500
        Exception (fallback)    → 500, stack trace logged only
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(PaymentGatewayError)
    async def handle_gateway_error(request: Request, exc: PaymentGatewayError):
        logger.error(
            "[%s] Payment gateway error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("payment_gateway_error", exc.message),
        )

    @app.exception_handler(CircuitBreakerOpenError)
    async def handle_circuit_breaker(request: Request, exc: CircuitBreakerOpenError):
        logger.warning("[%s] Circuit breaker open: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=503,
            content=_error_body(
                "service_unavailable",
                exc.message,
                {"recovery_time": exc.recovery_time},
            ),
            headers={"Retry-After": str(exc.recovery_time)},
        )

    @app.exception_handler(ProFastError)
    async def handle_app_error(request: Request, exc: ProFastError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", "Internal server error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="ProFast API",
        description=(
            "Parcel delivery backend: user registration, parcels, tracking events "
            "and Stripe-backed payments."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RateLimit → RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(parcels.router)
    app.include_router(tracking.router)
    app.include_router(payments.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    uvicorn.run(
        "profast.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
