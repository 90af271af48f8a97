"""
User endpoints.

Clients call ``POST /users/sync`` after every login so the user record
exists and carries the latest profile data.  Role changes and the full
user listing are reserved for admins; the caller identifies itself with
``requestorEmail``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_user_service
from ...schemas.user import (
    RoleChange,
    RoleChanged,
    UserDetail,
    UserList,
    UserPublic,
    UserRead,
    UserSync,
    UserSynced,
)
from ...services.user_service import UserService


router = APIRouter()


@router.post("/sync", response_model=UserSynced)
def sync_user(payload: UserSync, service: UserService = Depends(get_user_service)) -> UserSynced:
    """Create the user on first login or refresh its profile.

    New users get the ``user`` role.  Empty ``displayName`` or
    ``photoURL`` values do not overwrite stored ones.
    """
    user = service.sync_user(payload.email, payload.displayName, payload.photoURL)
    return UserSynced(user=UserPublic(**user))


@router.get("", response_model=UserList)
def list_users(
    requestorEmail: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
) -> UserList:
    """List every user (admin only)."""
    users = service.list_all_users(requestorEmail)
    return UserList(count=len(users), users=[UserRead(**user) for user in users])


@router.get("/{email}", response_model=UserDetail)
def get_user(email: str, service: UserService = Depends(get_user_service)) -> UserDetail:
    return UserDetail(user=UserRead(**service.get_user(email)))


@router.patch("/{email}/role", response_model=RoleChanged)
def set_user_role(
    email: str,
    change: RoleChange,
    service: UserService = Depends(get_user_service),
) -> RoleChanged:
    """Change a user's role.  The requestor must be an admin."""
    user = service.set_user_role(email, change.role, change.requestorEmail)
    return RoleChanged(user=UserPublic(**user))
