"""Response models for the dashboard and diagnostics endpoints."""

from pydantic import BaseModel


class Statistics(BaseModel):
    ok: bool = True
    totalEvents: int
    totalUsers: int
    totalJoined: int


class StoreProbe(BaseModel):
    ok: bool = True
    message: str = "MongoDB is working"
    totalEvents: int


class SeedResult(BaseModel):
    ok: bool = True
    message: str = "Demo events inserted successfully."
    insertedCount: int
