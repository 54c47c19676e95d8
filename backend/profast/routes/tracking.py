"""ProFast Backend - Parcel Tracking Routes"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from profast.database import get_database
from profast.schemas.common import ErrorResponse, InsertResult
from profast.schemas.tracking import TrackingEventCreate
from profast.services.tracking_service import tracking_service

router = APIRouter(prefix="/parcel-tracking", tags=["Tracking"])


@router.post(
    "",
    status_code=201,
    response_model=InsertResult,
    responses={
        400: {"description": "Malformed parcelId", "model": ErrorResponse},
        500: {"description": "Failed to insert tracking data", "model": ErrorResponse},
    },
    summary="Log a tracking event for a parcel",
)
async def add_tracking_event(
    event: TrackingEventCreate,
    db: AsyncDatabase = Depends(get_database),
) -> InsertResult:
    return await tracking_service.add_event(db, event)


@router.get(
    "/{tracking_id}",
    response_model=List[Dict[str, Any]],
    summary="Tracking timeline for a tracking number, oldest first",
)
async def list_tracking_events(
    tracking_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await tracking_service.list_events(db, tracking_id)
