"""
Pydantic models for user data.

Users are keyed by email.  ``UserPublic`` is the projection returned to
callers; the stored document may carry more fields (``_id``,
``updatedAt``) which are never exposed.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.timeutils import as_utc


class UserSync(BaseModel):
    """Payload sent by the client after a successful login."""

    email: Optional[str] = Field(None, examples=["alice@example.com"])
    displayName: Optional[str] = Field(None, examples=["Alice"])
    photoURL: Optional[str] = Field(None, examples=["https://example.com/alice.png"])


class RoleChange(BaseModel):
    role: Optional[str] = Field(None, examples=["admin"])
    requestorEmail: Optional[str] = Field(None, examples=["admin@example.com"])


class UserPublic(BaseModel):
    email: str
    displayName: str = ""
    photoURL: str = ""
    role: str = "user"


class UserRead(UserPublic):
    """Public projection plus creation time."""

    createdAt: Optional[datetime] = None

    @field_validator("createdAt", mode="after")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class UserSynced(BaseModel):
    ok: bool = True
    user: UserPublic


class UserDetail(BaseModel):
    ok: bool = True
    user: UserRead


class RoleChanged(BaseModel):
    ok: bool = True
    message: str = "User role updated successfully."
    user: UserPublic


class UserList(BaseModel):
    ok: bool = True
    count: int
    users: List[UserRead]
