"""
Business logic for users.

Users are created the first time a client reports a logged-in identity
(``sync_user``) and are never deleted here.  New users get the
``user`` role; only an existing admin can change roles or list all
users.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..core.db import MongoStore, store_call
from ..core.errors import NotFound
from ..core.security import ROLE_USER, require_admin, require_identity, validate_role
from ..core.timeutils import utcnow


logger = logging.getLogger(__name__)


def public_projection(user: Dict[str, Any], with_created: bool = False) -> Dict[str, Any]:
    """Strip a stored user document down to what callers may see."""
    projected = {
        "email": user.get("email"),
        "displayName": user.get("displayName") or "",
        "photoURL": user.get("photoURL") or "",
        "role": user.get("role") or ROLE_USER,
    }
    if with_created:
        projected["createdAt"] = user.get("createdAt")
    return projected


class UserService:
    """Identity records keyed by email."""

    def __init__(self, store: MongoStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def _find(self, email: str) -> Optional[Dict[str, Any]]:
        with store_call("Failed to load user"):
            return self.store.users.find_one({"email": email})

    def sync_user(self, email: Optional[str], display_name: Optional[str] = None, photo_url: Optional[str] = None) -> Dict[str, Any]:
        """Create the user on first login, otherwise refresh its profile.

        A single upsert does both.  Non-empty ``display_name`` and
        ``photo_url`` overwrite the stored values; empty ones leave them
        alone.  The role is only ever set when the document is inserted.
        """
        email = require_identity(email, "Email is required.")
        now = self.clock()

        to_set: Dict[str, Any] = {"updatedAt": now}
        on_insert: Dict[str, Any] = {"role": ROLE_USER, "createdAt": now}
        if display_name:
            to_set["displayName"] = display_name
        else:
            on_insert["displayName"] = ""
        if photo_url:
            to_set["photoURL"] = photo_url
        else:
            on_insert["photoURL"] = ""

        def upsert() -> Dict[str, Any]:
            return self.store.users.find_one_and_update(
                {"email": email},
                {"$set": to_set, "$setOnInsert": on_insert},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )

        with store_call("Failed to sync user"):
            try:
                user = upsert()
            except DuplicateKeyError:
                # A concurrent first sync inserted the user; the retry
                # matches that document and only applies ``$set``.
                logger.info("Concurrent first sync for %s, retrying", email)
                user = upsert()
        logger.info("Synced user %s", email)
        return public_projection(user)

    def get_user(self, email: str) -> Dict[str, Any]:
        user = self._find(email)
        if not user:
            raise NotFound("User not found.")
        return public_projection(user, with_created=True)

    def set_user_role(self, target_email: str, new_role: Optional[str], requestor_email: Optional[str]) -> Dict[str, Any]:
        """Change ``target_email``'s role on behalf of an admin."""
        role = validate_role(new_role)
        requestor = require_identity(requestor_email)
        require_admin(self._find(requestor))

        with store_call("Failed to update user role"):
            user = self.store.users.find_one_and_update(
                {"email": target_email},
                {"$set": {"role": role, "updatedAt": self.clock()}},
                return_document=ReturnDocument.AFTER,
            )
        if not user:
            raise NotFound("User not found.")
        logger.info("Role of %s set to %s by %s", target_email, role, requestor)
        return public_projection(user)

    def list_all_users(self, requestor_email: Optional[str]) -> List[Dict[str, Any]]:
        requestor = require_identity(requestor_email)
        require_admin(self._find(requestor))
        with store_call("Failed to load users"):
            users = list(self.store.users.find({}).sort("createdAt", ASCENDING))
        return [public_projection(user, with_created=True) for user in users]
