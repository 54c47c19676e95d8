"""
ProFast Backend - Parcel Service
=================================

What:  Create, list, fetch and delete parcels.
Why:   Keeps the parcel routes thin; every database failure is turned into
       a DatabaseError carrying the short message the front end displays.
How:   One collection call per operation. Parcels are stored exactly as the
       client sent them.

Query patterns:
    List:  find({created_by: email} | {}) sorted by creation_date DESC
           → index created_by_creation_date
    Get:   find_one({_id: ObjectId})
    Delete: delete_one({_id: ObjectId}); deletedCount 0 is not an error
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from profast.database import PARCELS
from profast.exceptions import DatabaseError, NotFoundError
from profast.schemas.common import DeleteResult, InsertResult
from profast.schemas.documents import parse_object_id, serialize_document

logger = logging.getLogger(__name__)


class ParcelService:
    """
    Business logic for the parcels collection.

    Malformed ids are rejected by parse_object_id before any query runs, so
    they surface as 400 rather than as a database failure.
    """

    async def create_parcel(self, db: AsyncDatabase, parcel: Dict[str, Any]) -> InsertResult:
        try:
            result = await db[PARCELS].insert_one(parcel)
        except PyMongoError as e:
            logger.error("Failed to save parcel: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to save parcel",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Parcel %s created by %s",
            result.inserted_id,
            parcel.get("created_by", "unknown"),
        )
        return InsertResult.from_result(result)

    async def list_parcels(
        self, db: AsyncDatabase, email: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        All parcels, newest first; only those created by `email` when given.

        No pagination: a sender's parcel count is small enough to return whole.
        """
        query: Dict[str, Any] = {"created_by": email} if email else {}
        try:
            cursor = db[PARCELS].find(query).sort("creation_date", DESCENDING)
            parcels = await cursor.to_list()
        except PyMongoError as e:
            logger.error("Failed to fetch parcels (email=%s): %s", email, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch parcels",
                context={"error_type": type(e).__name__},
            )
        return serialize_document(parcels)

    async def get_parcel(self, db: AsyncDatabase, parcel_id: str) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: parcel_id is not an ObjectId (→ 400)
            NotFoundError: no parcel with that id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        object_id = parse_object_id(parcel_id, field="id")
        try:
            parcel = await db[PARCELS].find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Get parcel by ID error (%s): %s", parcel_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch parcel",
                context={"parcel_id": parcel_id},
            )

        if parcel is None:
            raise NotFoundError(message="Parcel not found", resource="parcel", resource_id=parcel_id)
        return serialize_document(parcel)

    async def delete_parcel(self, db: AsyncDatabase, parcel_id: str) -> DeleteResult:
        object_id = parse_object_id(parcel_id, field="id")
        try:
            result = await db[PARCELS].delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Delete parcel %s failed: %s", parcel_id, str(e), exc_info=True)
            raise DatabaseError(message="Delete failed", context={"parcel_id": parcel_id})

        logger.info("Delete parcel %s: %d removed", parcel_id, result.deleted_count)
        return DeleteResult.from_result(result)


parcel_service = ParcelService()
