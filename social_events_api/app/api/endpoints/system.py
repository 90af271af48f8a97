"""
Service-level endpoints: liveness text, dashboard statistics, the
database probe and demo data seeding.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..deps import get_demo_service, get_statistics_service
from ...schemas.stats import SeedResult, Statistics, StoreProbe
from ...services.demo_service import DemoDataService
from ...services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Social Development Events API is running."


@router.get("/stats", response_model=Statistics)
def statistics(service: StatisticsService = Depends(get_statistics_service)) -> Statistics:
    """Event, join and distinct-user counts for the home page."""
    return Statistics(**service.compute_statistics())


@router.get("/test-db", response_model=StoreProbe)
def test_db(service: StatisticsService = Depends(get_statistics_service)) -> StoreProbe:
    return StoreProbe(totalEvents=service.probe_store())


@router.get("/seed-demo-events", response_model=SeedResult)
def seed_demo_events(service: DemoDataService = Depends(get_demo_service)) -> SeedResult:
    """Insert the fixed demo events.  Not idempotent."""
    return SeedResult(insertedCount=service.seed_demo_events())
