"""
ProFast Backend - Tracking Service
===================================

What:  Appends tracking events for parcels and returns a parcel's timeline.
How:   Events are immutable documents; the server stamps updatedAt in UTC.
       The referenced parcel is not checked for existence.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from profast.database import PARCEL_TRACKING
from profast.exceptions import DatabaseError
from profast.schemas.common import InsertResult
from profast.schemas.documents import parse_object_id, serialize_document
from profast.schemas.tracking import TrackingEventCreate

logger = logging.getLogger(__name__)


class TrackingService:

    async def add_event(self, db: AsyncDatabase, event: TrackingEventCreate) -> InsertResult:
        """
        Store one tracking event.

        Raises:
            ValidationError: parcelId missing or not an ObjectId (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        tracking_doc = {
            "trackingId": event.trackingId,
            "parcelId": parse_object_id(event.parcelId, field="parcelId"),
            "status": event.status,
            "location": event.location,
            "note": event.note,
            "updatedBy": event.updatedBy,
            "updatedAt": datetime.now(timezone.utc),
        }

        try:
            result = await db[PARCEL_TRACKING].insert_one(tracking_doc)
        except PyMongoError as e:
            logger.error("Failed to insert tracking update: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to insert tracking data",
                context={"tracking_id": event.trackingId},
            )

        logger.info(
            "Tracking %s: parcel %s is now %s",
            event.trackingId,
            event.parcelId,
            event.status,
        )
        return InsertResult.from_result(result)

    async def list_events(self, db: AsyncDatabase, tracking_id: str) -> List[Dict[str, Any]]:
        """Events for one tracking number, oldest first (a timeline)."""
        try:
            cursor = db[PARCEL_TRACKING].find({"trackingId": tracking_id}).sort("updatedAt", ASCENDING)
            events = await cursor.to_list()
        except PyMongoError as e:
            logger.error("Failed to load tracking %s: %s", tracking_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to load tracking data",
                context={"tracking_id": tracking_id},
            )
        return serialize_document(events)


tracking_service = TrackingService()
