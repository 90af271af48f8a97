"""
Pydantic models for event data.

Request bodies declare every field optional: presence and date rules
are checked by ``EventService`` so that a missing field is reported
as a 400 with the service's own message rather than as a schema
error.  ``EventRead`` renders a stored document; the Mongo ``_id`` is
exposed under the same key as a hex string.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.timeutils import as_utc


class EventFields(BaseModel):
    """Mutable event fields shared by create and update requests."""

    title: Optional[str] = Field(None, examples=["City Park Cleanup Drive"])
    description: Optional[str] = Field(None, examples=["Join us to clean up the city park."])
    eventType: Optional[str] = Field(None, examples=["Cleanup"])
    thumbnail: Optional[str] = Field(None, examples=["https://placehold.co/600x400?text=Park+Cleanup"])
    location: Optional[str] = Field(None, examples=["City Park, Main Gate"])
    # Kept as ``Any`` so unparseable values reach the service and get
    # the "Invalid event date." message.
    eventDate: Optional[Any] = Field(None, examples=["2026-11-01T09:00:00Z"])


class EventCreate(EventFields):
    """Schema for creating an event."""

    creatorEmail: Optional[str] = Field(None, examples=["alice@example.com"])


class EventUpdate(EventFields):
    """Schema for updating an event.  All mutable fields are required
    again; ``requestorEmail`` identifies the caller."""

    requestorEmail: Optional[str] = Field(None, examples=["alice@example.com"])


class EventOwnerRequest(BaseModel):
    """Optional body of ``DELETE /events/{id}``."""

    requestorEmail: Optional[str] = None


class EventRead(BaseModel):
    """Schema for reading an event from the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    description: str
    eventType: str
    thumbnail: str
    location: str
    eventDate: datetime
    creatorEmail: str
    createdAt: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("eventDate", "createdAt", mode="after")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class EventCreated(BaseModel):
    ok: bool = True
    message: str = "Event created successfully!"
    eventId: str


class EventUpdated(BaseModel):
    ok: bool = True
    message: str = "Event updated successfully."
    modifiedCount: int


class EventDeleted(BaseModel):
    ok: bool = True
    message: str = "Event deleted successfully."
    deletedJoins: int


class EventDetail(BaseModel):
    ok: bool = True
    event: EventRead


class EventList(BaseModel):
    ok: bool = True
    count: int
    events: List[EventRead]
