"""
MongoDB integration.

``MongoStore`` owns the single ``pymongo.MongoClient`` shared by every
request.  It is constructed explicitly by the application factory and
connected once at startup: ``connect`` pings the server and ensures the
indexes the services rely on.  Until ``connect`` succeeds the store is
not ready and ``require_ready`` raises ``StoreUnavailable``; the
application middleware uses that to reject requests uniformly.

Collections:

* ``events``        event documents
* ``joinedEvents``  participation records with an event snapshot
* ``users``         identity and role records keyed by email
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import OperationFailure, PyMongoError

from .config import settings
from .errors import StoreError, StoreUnavailable


logger = logging.getLogger(__name__)

EVENTS = "events"
JOINED_EVENTS = "joinedEvents"
USERS = "users"


class MongoStore:
    """Shared handle on the backing MongoDB database."""

    def __init__(
        self,
        client: Optional[MongoClient] = None,
        db_name: Optional[str] = None,
        uri: Optional[str] = None,
    ) -> None:
        self._client = client
        self._uri = uri if uri is not None else settings.mongo_uri
        self._db_name = db_name or settings.mongo_db_name
        self._db: Optional[Database] = None
        self.ready = False
        self.init_error: Optional[str] = None

    def connect(self) -> bool:
        """Connect, ping and prepare indexes.

        Returns ``True`` when the store is ready.  Failures are logged
        and remembered in ``init_error``; they never raise so that the
        application can still start and answer every request with a
        uniform 500.
        """
        if self.ready:
            return True
        try:
            if self._client is None:
                if not self._uri:
                    raise RuntimeError("MONGO_URI is not set in environment variables.")
                self._client = MongoClient(
                    self._uri,
                    serverSelectionTimeoutMS=settings.mongo_timeout_ms,
                    appname=settings.project_name,
                )
            db = self._client[self._db_name]
            db.command("ping")
            self._db = db
            self.ensure_indexes()
        except (PyMongoError, RuntimeError) as exc:
            self.init_error = str(exc)
            logger.error("Database initialisation failed: %s", exc)
            return False
        self.ready = True
        self.init_error = None
        logger.info("Connected to MongoDB database '%s'", self._db_name)
        return True

    def ensure_indexes(self) -> None:
        """Create the indexes backing the uniqueness invariants.

        An existing duplicate (written before the index existed) makes
        index creation fail; that is logged and the service keeps
        running with the explicit duplicate checks only.
        """
        try:
            self.db[JOINED_EVENTS].create_index(
                [("eventId", ASCENDING), ("userEmail", ASCENDING)],
                unique=True,
                name="uniq_event_user",
            )
            self.db[USERS].create_index([("email", ASCENDING)], unique=True, name="uniq_email")
            self.db[EVENTS].create_index([("eventDate", ASCENDING)], name="by_event_date")
            self.db[EVENTS].create_index([("creatorEmail", ASCENDING)], name="by_creator")
        except OperationFailure as exc:
            logger.warning("Could not create unique indexes: %s", exc)

    def close(self) -> None:
        """Close the client and mark the store as not ready."""
        if self._client is not None:
            self._client.close()
        self.ready = False
        logger.info("MongoDB connection closed")

    def require_ready(self) -> None:
        """Raise ``StoreUnavailable`` unless ``connect`` has succeeded."""
        if not self.ready:
            raise StoreUnavailable(
                "Database initialization failed.",
                error=self.init_error or "Database is not connected.",
            )

    @property
    def db(self) -> Database:
        """The connected database; ``StoreUnavailable`` before ``connect``."""
        if self._db is None:
            raise StoreUnavailable("Database initialization failed.", error="Database is not connected.")
        return self._db

    @property
    def events(self) -> Collection:
        """The ``events`` collection."""
        return self.db[EVENTS]

    @property
    def joined_events(self) -> Collection:
        """The ``joinedEvents`` collection."""
        return self.db[JOINED_EVENTS]

    @property
    def users(self) -> Collection:
        """The ``users`` collection."""
        return self.db[USERS]

    def ping(self) -> None:
        """Round-trip to the server; raises the driver error on failure."""
        self.db.command("ping")


@contextmanager
def store_call(action: str) -> Iterator[None]:
    """Translate driver failures into ``StoreError``.

    ``action`` is the client-facing message, e.g. ``"Failed to load
    events"``.  Service errors raised inside the block pass through.
    """
    try:
        yield
    except PyMongoError as exc:
        logger.exception("%s", action)
        raise StoreError(action, error=str(exc)) from exc


def get_store(request: Request) -> MongoStore:
    """FastAPI dependency returning the application's store."""
    return request.app.state.store
