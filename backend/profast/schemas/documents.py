"""
ProFast Backend - Document Helpers
===================================

What:  Conversions between API values and MongoDB document values.
Why:   ObjectId is not JSON-serializable and FastAPI's encoder does not know
       it, so stored documents must be converted before they are returned.
       Incoming id strings must become ObjectId before they can be queried.
"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId

from profast.exceptions import ValidationError


def parse_object_id(value: Optional[str], field: str = "id") -> ObjectId:
    """
    Convert a client-supplied string into an ObjectId.

    Raises:
        ValidationError: value is missing or not a 24-character hex string (→ 400)
    """
    if value is None or value == "":
        raise ValidationError(message=f"'{field}' is required", field=field)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(
            message=f"'{value}' is not a valid object identifier",
            field=field,
            context={"value": str(value)},
        )


def serialize_document(value: Any) -> Any:
    """
    Recursively replace ObjectId values with their hex string.

    Works on single documents, lists of documents and nested sub-documents.
    datetimes are left alone; FastAPI renders them as ISO-8601.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value
