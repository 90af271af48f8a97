"""
Business logic for events.

Events live in the ``events`` collection.  Every event has a single
owner identified by ``creatorEmail``; only that owner may update or
delete it.  Deleting an event cascades to the ``joinedEvents``
collection.  The cascade runs after the event is removed and is not
rolled back if it fails: joins are display snapshots, so an orphan is
harmless and is logged.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..core.db import MongoStore, store_call
from ..core.errors import NotFound, StoreError, ValidationError
from ..core.security import require_creator, require_identity
from ..core.timeutils import parse_event_date, require_future, utcnow
from ..schemas.event import EventCreate, EventFields, EventUpdate


logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("title", "description", "eventType", "thumbnail", "location", "eventDate")


def parse_object_id(value: Any, message: str) -> ObjectId:
    """Convert a client-supplied id into an ``ObjectId`` or raise ``ValidationError``."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError(message)
    return ObjectId(value)


def _blank(value: Any) -> bool:
    return value is None or value == ""


class EventService:
    """Create, browse, update and delete events.

    The service holds the shared ``MongoStore``; ``clock`` returns the
    current naive-UTC time and exists so the future-date rule can be
    exercised deterministically.
    """

    def __init__(self, store: MongoStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def _validated_fields(self, data: EventFields, extra_required: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        values = {name: getattr(data, name) for name in MUTABLE_FIELDS}
        required = dict(values)
        if extra_required:
            required.update(extra_required)
        if any(_blank(value) for value in required.values()):
            raise ValidationError("All fields are required.")
        event_date = parse_event_date(values["eventDate"])
        values["eventDate"] = require_future(event_date, self.clock())
        return values

    def create_event(self, data: EventCreate) -> str:
        """Validate and insert a new event; return its id as a string."""
        values = self._validated_fields(data, {"creatorEmail": data.creatorEmail})
        doc = {
            **values,
            "creatorEmail": data.creatorEmail,
            "createdAt": self.clock(),
        }
        with store_call("Failed to create event"):
            result = self.store.events.insert_one(doc)
        logger.info("Event %s '%s' created by %s", result.inserted_id, doc["title"], doc["creatorEmail"])
        return str(result.inserted_id)

    def list_events(self) -> List[Dict[str, Any]]:
        with store_call("Failed to load events"):
            return list(self.store.events.find({}).sort("eventDate", ASCENDING))

    def list_upcoming_events(self) -> List[Dict[str, Any]]:
        """Events strictly after now, soonest first."""
        now = self.clock()
        with store_call("Failed to load upcoming events"):
            return list(self.store.events.find({"eventDate": {"$gt": now}}).sort("eventDate", ASCENDING))

    def list_events_by_creator(self, email: Optional[str]) -> List[Dict[str, Any]]:
        email = require_identity(email, "User email is required.")
        with store_call("Failed to load user events"):
            return list(self.store.events.find({"creatorEmail": email}).sort("eventDate", ASCENDING))

    def _find(self, oid: ObjectId, action: str) -> Dict[str, Any]:
        with store_call(action):
            event = self.store.events.find_one({"_id": oid})
        if not event:
            raise NotFound("Event not found.")
        return event

    def get_event(self, event_id: Any) -> Dict[str, Any]:
        oid = parse_object_id(event_id, "Invalid event id.")
        return self._find(oid, "Failed to load event details")

    def update_event(self, event_id: Any, data: EventUpdate) -> int:
        """Overwrite the mutable fields of an event owned by the requestor.

        ``creatorEmail`` and ``createdAt`` are never changed.  The write
        is filtered on the owner as well as the id, so it only lands on
        the document that passed the ownership check.  Returns the
        modified count (0 when the new values equal the stored ones).
        """
        oid = parse_object_id(event_id, "Invalid event id.")
        requestor = require_identity(data.requestorEmail)
        existing = self._find(oid, "Failed to update event")
        require_creator(existing, requestor, "update")
        values = self._validated_fields(data)

        with store_call("Failed to update event"):
            result = self.store.events.update_one(
                {"_id": oid, "creatorEmail": requestor},
                {"$set": values},
            )
        if result.matched_count == 0:
            # Deleted between the read and the write.
            raise NotFound("Event not found.")
        logger.info("Event %s updated by %s", oid, requestor)
        return result.modified_count

    def delete_event(self, event_id: Any, requestor_email: Optional[str]) -> int:
        """Delete an event owned by the requestor and cascade to its joins.

        Returns the number of join records removed.
        """
        oid = parse_object_id(event_id, "Invalid event id.")
        requestor = require_identity(requestor_email)
        existing = self._find(oid, "Failed to delete event")
        require_creator(existing, requestor, "delete")

        with store_call("Failed to delete event"):
            result = self.store.events.delete_one({"_id": oid, "creatorEmail": requestor})
        if result.deleted_count == 0:
            raise NotFound("Event not found.")
        logger.info("Event %s deleted by %s", oid, requestor)

        try:
            cascade = self.store.joined_events.delete_many({"eventId": oid})
        except PyMongoError as exc:
            logger.exception("Event %s deleted but its joins could not be removed", oid)
            raise StoreError("Event deleted, but failed to remove its joined records", error=str(exc)) from exc
        if cascade.deleted_count:
            logger.info("Removed %d joins of deleted event %s", cascade.deleted_count, oid)
        return cascade.deleted_count
