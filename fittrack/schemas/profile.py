"""
Pydantic models for profile and goal requests.

Range checks live in ProfileValidator so every failing field is
reported together.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ProfileRequest(BaseModel):
    """PUT /api/v1/profile"""
    height_cm: Optional[float] = None
    current_weight_kg: Optional[float] = None
    age: Optional[int] = None
    activity_level: str = "moderate"
    gender: Optional[str] = Field(None, pattern="^(male|female)$")


class GoalRequest(BaseModel):
    """PUT /api/v1/profile/goal"""
    target_weight_kg: Optional[float] = None
    daily_calorie_target: Optional[int] = None
    daily_water_goal_ml: Optional[int] = None
    sleep_goal_hours: Optional[float] = None
    days_to_goal: Optional[int] = Field(None, ge=0)


class OnboardingRequest(BaseModel):
    """POST /api/v1/profile/onboarding"""
    profile: ProfileRequest
    goal: GoalRequest
