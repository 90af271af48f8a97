"""Shared fixtures: an application wired to an in-memory mongomock store."""

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from social_events_api.app.core.db import MongoStore
from social_events_api.app.main import create_app


def iso_in(days: float) -> str:
    """ISO-8601 UTC timestamp ``days`` from now (negative for the past)."""
    moment = datetime.now(timezone.utc) + timedelta(days=days)
    return moment.replace(microsecond=0).isoformat()


def event_payload(creator: str = "alice@x.com", days: float = 7, **overrides) -> dict:
    payload = {
        "title": "Beach Cleanup",
        "description": "Collect plastic along the shore.",
        "eventType": "Cleanup",
        "thumbnail": "https://placehold.co/600x400?text=Beach",
        "location": "North Beach",
        "eventDate": iso_in(days),
        "creatorEmail": creator,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def store(mongo_client):
    return MongoStore(client=mongo_client, db_name="social_events_test")


@pytest.fixture
def ready_store(store):
    assert store.connect()
    return store


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def create_event(client):
    """Create an event through the API and return its id."""

    def _create(**kwargs) -> str:
        response = client.post("/events", json=event_payload(**kwargs))
        assert response.status_code == 201, response.text
        return response.json()["eventId"]

    return _create
