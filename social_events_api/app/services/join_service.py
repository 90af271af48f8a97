"""
Business logic for joining events.

A join copies the event's display fields at the moment the user
joins.  Later edits to the event do not change existing joins.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from ..core.db import MongoStore, store_call
from ..core.errors import Conflict, NotFound, ValidationError
from ..core.security import require_identity
from ..core.timeutils import utcnow
from ..schemas.join import JoinRequest
from .event_service import parse_object_id


logger = logging.getLogger(__name__)

ALREADY_JOINED = "You have already joined this event."


class JoinService:
    def __init__(self, store: MongoStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def join_event(self, data: JoinRequest) -> str:
        """Record that ``userEmail`` joins ``eventId``; return the join id.

        The duplicate check gives the usual answer; the unique index on
        (eventId, userEmail) turns a lost race into the same ``Conflict``.
        """
        if not data.eventId or not data.userEmail:
            raise ValidationError("eventId and userEmail are required.")
        oid = parse_object_id(data.eventId, "Invalid eventId.")

        with store_call("Failed to join event."):
            event = self.store.events.find_one({"_id": oid})
            if not event:
                raise NotFound("Event not found.")
            if self.store.joined_events.find_one({"eventId": oid, "userEmail": data.userEmail}):
                raise Conflict(ALREADY_JOINED)

            doc = {
                "eventId": oid,
                "userEmail": data.userEmail,
                "joinedAt": self.clock(),
                "eventTitle": event.get("title"),
                "eventType": event.get("eventType"),
                "thumbnail": event.get("thumbnail"),
                "location": event.get("location"),
                "eventDate": event.get("eventDate"),
                "creatorEmail": event.get("creatorEmail"),
            }
            try:
                result = self.store.joined_events.insert_one(doc)
            except DuplicateKeyError as exc:
                raise Conflict(ALREADY_JOINED) from exc

        logger.info("%s joined event %s", data.userEmail, oid)
        return str(result.inserted_id)

    def list_joined_events(self, user_email: Optional[str]) -> List[Dict[str, Any]]:
        """The user's joins ordered by the snapshot event date."""
        user_email = require_identity(user_email, "User email is required.")
        with store_call("Failed to load joined events"):
            return list(self.store.joined_events.find({"userEmail": user_email}).sort("eventDate", ASCENDING))
