"""
Demo data for fresh deployments.

``seed_demo_events`` inserts a fixed set of upcoming events so that a
new installation has something to browse.  Dates are relative to the
moment of seeding.  Calling it again inserts the set again.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from ..core.db import MongoStore, store_call
from ..core.timeutils import utcnow


logger = logging.getLogger(__name__)

DEMO_EVENTS: List[Dict[str, object]] = [
    {
        "title": "City Park Cleanup Drive",
        "description": "Join us to clean up the city park and make it a cleaner space for everyone.",
        "eventType": "Cleanup",
        "thumbnail": "https://placehold.co/600x400?text=Park+Cleanup",
        "location": "City Park, Main Gate",
        "days_ahead": 3,
        "creatorEmail": "demo1@example.com",
    },
    {
        "title": "Tree Plantation Day",
        "description": "Plant trees in the community area and help us make the city greener.",
        "eventType": "Plantation",
        "thumbnail": "https://placehold.co/600x400?text=Tree+Plantation",
        "location": "Community Ground, Sector 5",
        "days_ahead": 7,
        "creatorEmail": "demo2@example.com",
    },
    {
        "title": "Food Donation for Street Children",
        "description": "Distribute food packs and clothes to underprivileged children.",
        "eventType": "Donation",
        "thumbnail": "https://placehold.co/600x400?text=Food+Donation",
        "location": "Central Bus Stand Area",
        "days_ahead": 10,
        "creatorEmail": "demo3@example.com",
    },
    {
        "title": "Road Safety Awareness Campaign",
        "description": "Raise awareness about road safety rules among drivers and pedestrians.",
        "eventType": "Awareness",
        "thumbnail": "https://placehold.co/600x400?text=Road+Safety",
        "location": "City Square, Near Traffic Signal",
        "days_ahead": 5,
        "creatorEmail": "demo4@example.com",
    },
    {
        "title": "Free Health Checkup Camp",
        "description": "Free basic health checkup and consultation for low-income families.",
        "eventType": "Health Camp",
        "thumbnail": "https://placehold.co/600x400?text=Health+Camp",
        "location": "Community Clinic, Block C",
        "days_ahead": 14,
        "creatorEmail": "demo5@example.com",
    },
]


class DemoDataService:
    def __init__(self, store: MongoStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def build_demo_events(self) -> List[Dict[str, object]]:
        now = self.clock()
        docs = []
        for template in DEMO_EVENTS:
            doc = {key: value for key, value in template.items() if key != "days_ahead"}
            doc["eventDate"] = now + timedelta(days=template["days_ahead"])
            doc["createdAt"] = now
            docs.append(doc)
        return docs

    def seed_demo_events(self) -> int:
        docs = self.build_demo_events()
        with store_call("Failed to seed demo events"):
            result = self.store.events.insert_many(docs)
        logger.info("Seeded %d demo events", len(result.inserted_ids))
        return len(result.inserted_ids)
