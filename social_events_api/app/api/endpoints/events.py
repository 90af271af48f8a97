"""
Event endpoints.

CRUD over the ``events`` collection.  Anyone may create and browse
events; updates and deletes are limited to the event's creator, whose
identity is the ``requestorEmail`` sent with the request.  Handlers
are plain functions: FastAPI runs them on its thread pool, which keeps
the blocking pymongo calls off the event loop.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ..deps import get_event_service
from ...schemas.event import (
    EventCreate,
    EventCreated,
    EventDeleted,
    EventDetail,
    EventList,
    EventOwnerRequest,
    EventRead,
    EventUpdate,
    EventUpdated,
)
from ...services.event_service import EventService


router = APIRouter()


def _listing(events) -> EventList:
    return EventList(count=len(events), events=[EventRead.model_validate(event) for event in events])


@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
def create_event(event: EventCreate, service: EventService = Depends(get_event_service)) -> EventCreated:
    """Create a new event.

    Every field is required and ``eventDate`` must lie in the future.
    """
    return EventCreated(eventId=service.create_event(event))


@router.get("", response_model=EventList)
def list_events(service: EventService = Depends(get_event_service)) -> EventList:
    """All events, earliest ``eventDate`` first."""
    return _listing(service.list_events())


@router.get("/upcoming", response_model=EventList)
def list_upcoming_events(service: EventService = Depends(get_event_service)) -> EventList:
    return _listing(service.list_upcoming_events())


@router.get("/user", response_model=EventList)
def list_user_events(
    email: Optional[str] = Query(None),
    service: EventService = Depends(get_event_service),
) -> EventList:
    """Events created by ``email`` (the "manage events" page)."""
    return _listing(service.list_events_by_creator(email))


@router.get("/{event_id}", response_model=EventDetail)
def get_event(event_id: str, service: EventService = Depends(get_event_service)) -> EventDetail:
    return EventDetail(event=EventRead.model_validate(service.get_event(event_id)))


@router.put("/{event_id}", response_model=EventUpdated)
def update_event(
    event_id: str,
    updates: EventUpdate,
    service: EventService = Depends(get_event_service),
) -> EventUpdated:
    """Replace the mutable fields of an event.

    Only the creator may update.  All fields must be sent again and
    the date must still be in the future.
    """
    return EventUpdated(modifiedCount=service.update_event(event_id, updates))


@router.delete("/{event_id}", response_model=EventDeleted)
def delete_event(
    event_id: str,
    requestorEmail: Optional[str] = Query(None),
    body: Optional[EventOwnerRequest] = Body(None),
    service: EventService = Depends(get_event_service),
) -> EventDeleted:
    """Delete an event and every join that references it.

    ``requestorEmail`` may be given as a query parameter or in a JSON
    body; the query parameter wins when both are present.
    """
    requestor = requestorEmail or (body.requestorEmail if body else None)
    return EventDeleted(deletedJoins=service.delete_event(event_id, requestor))
