"""
Join endpoints.

``POST /join-event`` records a user's participation and
``GET /joined`` lists it back.  Both live at the application root,
not under ``/events``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..deps import get_join_service
from ...schemas.join import JoinCreated, JoinList, JoinRead, JoinRequest
from ...services.join_service import JoinService


router = APIRouter()


@router.post("/join-event", response_model=JoinCreated, status_code=status.HTTP_201_CREATED)
def join_event(payload: JoinRequest, service: JoinService = Depends(get_join_service)) -> JoinCreated:
    """Join an event.  Joining the same event twice is rejected."""
    return JoinCreated(joinId=service.join_event(payload))


@router.get("/joined", response_model=JoinList)
def list_joined_events(
    email: Optional[str] = Query(None),
    service: JoinService = Depends(get_join_service),
) -> JoinList:
    joined = service.list_joined_events(email)
    return JoinList(count=len(joined), joinedEvents=[JoinRead.model_validate(doc) for doc in joined])
