"""
Schedule API - FastAPI router exposing the active fee schedule.
"""
from fastapi import APIRouter
from pydantic import BaseModel

from .state import engine

router = APIRouter(prefix="/api/schedule", tags=["schedule"])


class TierResponse(BaseModel):
    """Response model for one distance tier."""
    tier: str
    from_km: float
    to_km: float
    upper_inclusive: bool
    base_fee: str
    rush_hour_fee: str


class ScheduleResponse(BaseModel):
    """Response model for the whole schedule."""
    tiers: list[TierResponse]
    max_distance_km: float
    rush_hour_multiplier: str
    free_delivery_threshold: str
    free_delivery_inclusive: bool


@router.get("", response_model=ScheduleResponse)
async def get_schedule():
    """Distance tiers plus the surcharge and free delivery settings."""
    settings = engine.settings
    return ScheduleResponse(
        tiers=[TierResponse(**row) for row in engine.fee_schedule()],
        max_distance_km=settings.max_distance_km,
        rush_hour_multiplier=str(settings.rush_hour_multiplier),
        free_delivery_threshold=f"{settings.free_delivery_threshold:.2f}",
        free_delivery_inclusive=settings.free_delivery_inclusive,
    )
