"""
ProFast Backend - Status and Health Routes
===========================================

What:  GET / (plain-text liveness banner) and GET /health (dependency status).
Who:   GET / is what hosting dashboards and humans hit; GET /health is for
       container health checks and load balancers.

Status levels:
    - healthy:   MongoDB reachable and payment gateway available
    - degraded:  MongoDB reachable, gateway unconfigured or circuit open
    - unhealthy: MongoDB unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from profast import __version__
from profast.database import get_client
from profast.schemas.common import HealthResponse
from profast.services.gateway_base import PaymentGateway
from profast.services.stripe_gateway import CircuitBreaker, StripeGateway, get_payment_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()

STATUS_BANNER = "Profast parcel delivery Server is running!"


@router.get("/", response_class=PlainTextResponse, summary="Server status banner")
async def root() -> str:
    return STATUS_BANNER


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> HealthResponse:
    """
    Probe MongoDB with a ping and ask the gateway whether it is usable.

    The ping uses the driver's server-selection timeout, so an unreachable
    cluster answers within a few seconds rather than hanging the probe.
    """
    db_status = "connected"
    gateway_status = "available"
    overall = "healthy"

    try:
        await get_client().admin.command({"ping": 1})
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    breaker_open = (
        isinstance(gateway, StripeGateway)
        and gateway.circuit_breaker.state == CircuitBreaker.OPEN
    )
    if breaker_open:
        gateway_status = "circuit_open"
    elif not await gateway.health_check():
        gateway_status = "not_configured"

    if gateway_status != "available" and overall == "healthy":
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        payment_gateway=gateway_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
