"""
FastAPI dependencies that hand each request a service bound to the
application's shared ``MongoStore``.
"""

from fastapi import Depends

from ..core.db import MongoStore, get_store
from ..services.demo_service import DemoDataService
from ..services.event_service import EventService
from ..services.join_service import JoinService
from ..services.statistics_service import StatisticsService
from ..services.user_service import UserService


def get_event_service(store: MongoStore = Depends(get_store)) -> EventService:
    return EventService(store)


def get_join_service(store: MongoStore = Depends(get_store)) -> JoinService:
    return JoinService(store)


def get_user_service(store: MongoStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_statistics_service(store: MongoStore = Depends(get_store)) -> StatisticsService:
    return StatisticsService(store)


def get_demo_service(store: MongoStore = Depends(get_store)) -> DemoDataService:
    return DemoDataService(store)
