"""
ProFast Backend - Shared Response Schemas
==========================================

What:  Response models reused across resources: write results, plain messages,
       errors and the health report.
Why:   Write results keep the shape the existing front end already reads
       ({acknowledged, insertedId} / {acknowledged, deletedCount}).
"""

from typing import Optional

from pydantic import BaseModel, Field
from pymongo.results import DeleteResult as MongoDeleteResult
from pymongo.results import InsertOneResult


class InsertResult(BaseModel):
    """Result of a single-document insert."""

    acknowledged: bool = Field(description="Whether the write was acknowledged by the server")
    inserted_id: str = Field(alias="insertedId", description="ObjectId of the new document")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: InsertOneResult) -> "InsertResult":
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class DeleteResult(BaseModel):
    """Result of a single-document delete. deletedCount is 0 when nothing matched."""

    acknowledged: bool
    deleted_count: int = Field(alias="deletedCount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: MongoDeleteResult) -> "DeleteResult":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body produced by the global exception handlers.

    Example:
        {
            "error": "not_found",
            "message": "Parcel not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    payment_gateway: str = Field(
        description="Payment gateway status: available, not_configured, circuit_open"
    )
    uptime_seconds: float = Field(description="Seconds since service started")
