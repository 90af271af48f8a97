"""
Pydantic models for joined events.

A join stores a snapshot of the event's display fields taken when the
user joined, so ``JoinRead`` does not depend on the event still
existing or being unchanged.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.timeutils import as_utc


class JoinRequest(BaseModel):
    eventId: Optional[str] = Field(None, examples=["6650f0c2a1b2c3d4e5f60718"])
    userEmail: Optional[str] = Field(None, examples=["carol@example.com"])


class JoinRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    eventId: str
    userEmail: str
    joinedAt: datetime
    eventTitle: Optional[str] = None
    eventType: Optional[str] = None
    thumbnail: Optional[str] = None
    location: Optional[str] = None
    eventDate: Optional[datetime] = None
    creatorEmail: Optional[str] = None

    @field_validator("id", "eventId", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> str:
        return str(value)

    @field_validator("joinedAt", "eventDate", mode="after")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class JoinCreated(BaseModel):
    ok: bool = True
    message: str = "You have successfully joined this event."
    joinId: str


class JoinList(BaseModel):
    ok: bool = True
    count: int
    joinedEvents: List[JoinRead]
