"""
Pydantic models for check-in request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from fittrack.tracking.models import ChartPoint, CheckinRecord, Goal, LoggedActivity, Profile


# =============================================================================
# Request Schemas
# =============================================================================

class WaterRequest(BaseModel):
    """POST /api/v1/checkin/water"""
    amount_ml: int = Field(..., description="Millilitres to add, e.g. 250, 500, 1000")


class SleepRequest(BaseModel):
    """PUT /api/v1/checkin/sleep"""
    hours: float = Field(..., ge=0, le=24)


class MealsRequest(BaseModel):
    """PUT /api/v1/checkin/meals"""
    breakfast: int = Field(0, ge=0)
    lunch: int = Field(0, ge=0)
    dinner: int = Field(0, ge=0)
    snacks: int = Field(0, ge=0)


class ActivityRequest(BaseModel):
    """POST /api/v1/checkin/activities"""
    type: str = Field(..., min_length=1, max_length=50)
    duration_minutes: int = Field(..., ge=0, le=1440)
    calories_burned: int = Field(0, ge=0)


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class CheckinResponseData(BaseModel):
    """Response data for check-in reads and mutations"""
    date: str
    label: str
    checkin: CheckinRecord


class ChartResponseData(BaseModel):
    """Response data for GET /api/v1/dashboard/chart"""
    points: List[ChartPoint]
    recentActivities: List[LoggedActivity]


class DashboardResponseData(BaseModel):
    """Response data for GET /api/v1/dashboard"""
    date: str
    label: str
    checkin: CheckinRecord
    profile: Optional[Profile] = None
    goal: Optional[Goal] = None
    chart: List[ChartPoint]
