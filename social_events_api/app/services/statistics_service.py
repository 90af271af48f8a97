"""
Service layer for dashboard statistics.

Counts use the collection metadata (``estimated_document_count``) and
may lag slightly behind concurrent writes; they feed a dashboard, not
billing.  ``totalUsers`` counts distinct emails that either created an
event or joined one.  Emails are compared exactly: no case folding
and no trimming.
"""

import logging
from typing import Any, Dict

from ..core.db import MongoStore, store_call


logger = logging.getLogger(__name__)


class StatisticsService:
    """Aggregated counts across events and joins."""

    def __init__(self, store: MongoStore) -> None:
        self.store = store

    def compute_statistics(self) -> Dict[str, Any]:
        with store_call("Failed to load statistics"):
            total_events = self.store.events.estimated_document_count()
            total_joined = self.store.joined_events.estimated_document_count()
            creators = self.store.events.distinct("creatorEmail")
            participants = self.store.joined_events.distinct("userEmail")
        total_users = len(set(creators) | set(participants))
        return {
            "totalEvents": total_events,
            "totalUsers": total_users,
            "totalJoined": total_joined,
        }

    def probe_store(self) -> int:
        """Ping the database and return the estimated event count."""
        with store_call("MongoDB is not reachable"):
            self.store.ping()
            return self.store.events.estimated_document_count()
