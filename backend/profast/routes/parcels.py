"""
ProFast Backend - Parcel Routes
================================

What:  CRUD endpoints for parcels.
Who:   Called by the "Send Parcel" form and the "My Parcels" dashboard.

Parcel bodies are stored as sent; the front end fills created_by,
creation_date, payment_status, tracking_id and the cost breakdown.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from pymongo.asynchronous.database import AsyncDatabase

from profast.database import get_database
from profast.schemas.common import DeleteResult, ErrorResponse, InsertResult
from profast.services.parcel_service import parcel_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parcels", tags=["Parcels"])


@router.post(
    "",
    status_code=201,
    response_model=InsertResult,
    responses={500: {"description": "Failed to save parcel", "model": ErrorResponse}},
    summary="Create a parcel",
)
async def create_parcel(
    parcel: Dict[str, Any] = Body(..., description="Parcel document, stored as-is"),
    db: AsyncDatabase = Depends(get_database),
) -> InsertResult:
    return await parcel_service.create_parcel(db, parcel)


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses={500: {"description": "Failed to fetch parcels", "model": ErrorResponse}},
    summary="List parcels, newest first",
    description=(
        "Returns every parcel sorted by creation_date descending. "
        "With ?email=, only parcels whose created_by equals it."
    ),
)
async def list_parcels(
    email: Optional[str] = Query(default=None, description="Filter by creator email"),
    db: AsyncDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await parcel_service.list_parcels(db, email=email)


@router.get(
    "/{parcel_id}",
    response_model=Dict[str, Any],
    responses={
        400: {"description": "Malformed parcel id", "model": ErrorResponse},
        404: {"description": "Parcel not found", "model": ErrorResponse},
    },
    summary="Get a single parcel",
)
async def get_parcel(
    parcel_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await parcel_service.get_parcel(db, parcel_id)


@router.delete(
    "/{parcel_id}",
    response_model=DeleteResult,
    responses={
        400: {"description": "Malformed parcel id", "model": ErrorResponse},
        500: {"description": "Delete failed", "model": ErrorResponse},
    },
    summary="Delete a parcel",
    description="Returns the raw delete result; deletedCount is 0 when nothing matched.",
)
async def delete_parcel(
    parcel_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> DeleteResult:
    return await parcel_service.delete_parcel(db, parcel_id)
