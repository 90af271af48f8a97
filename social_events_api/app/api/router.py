"""
Top-level router.

Aggregates the domain routers.  Paths are served from the application
root; joins and the system endpoints define their full paths
themselves, so they are included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import events, joins, system, users

router = APIRouter()

router.include_router(system.router, tags=["system"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(joins.router, tags=["joins"])
router.include_router(users.router, prefix="/users", tags=["users"])
