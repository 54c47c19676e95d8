"""
ProFast Backend - Tracking Event Schemas
=========================================

A tracking event is an append-only status/location update for a parcel.
`updatedAt` is never accepted from the client; the service stamps it.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TrackingEventCreate(BaseModel):
    """Body of POST /parcel-tracking."""

    trackingId: Optional[str] = Field(default=None, description="Public tracking number")
    parcelId: Optional[str] = Field(
        default=None, description="ObjectId (hex) of the parcel this event belongs to"
    )
    status: Optional[str] = Field(default=None, description="e.g. picked_up, in_transit, delivered")
    location: Optional[str] = None
    note: Optional[str] = None
    updatedBy: Optional[str] = Field(default=None, description="Email of the rider or admin")
