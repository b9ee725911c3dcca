"""
Pydantic models for daily check-in tracking.

Shared by both persistence backends so callers see one record shape
regardless of where the data lives.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MealSlots(BaseModel):
    """Calories per meal slot for one day."""
    breakfast: int = Field(0, ge=0)
    lunch: int = Field(0, ge=0)
    dinner: int = Field(0, ge=0)
    snacks: int = Field(0, ge=0)

    def total(self) -> int:
        return self.breakfast + self.lunch + self.dinner + self.snacks


class ActivityEntry(BaseModel):
    """One logged activity."""
    type: str = Field(..., min_length=1)
    duration_minutes: int = Field(..., ge=0)
    calories_burned: int = Field(0, ge=0)


class CheckinRecord(BaseModel):
    """
    The per-user, per-date aggregate of consumption, water, sleep and activity.

    total_calories_consumed is derived from meals and only changes when
    meals are saved.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    date: str
    total_calories_consumed: int = 0
    meals: MealSlots = Field(default_factory=MealSlots)
    water_intake_ml: int = 0
    sleep_hours: Optional[float] = None
    steps_count: Optional[int] = None
    activities: List[ActivityEntry] = Field(default_factory=list)

    def with_meals(self, meals: MealSlots) -> "CheckinRecord":
        """Copy with meals replaced and the calorie total recomputed."""
        return self.model_copy(update={
            "meals": meals,
            "total_calories_consumed": meals.total(),
        })


class ChartPoint(BaseModel):
    """Calories burned on one date."""
    date: str
    calories: int = 0


class Profile(BaseModel):
    """User body profile."""
    user_id: Optional[str] = None
    height_cm: float
    current_weight_kg: float
    age: Optional[int] = None
    activity_level: str = "moderate"
    gender: Optional[str] = None


class Goal(BaseModel):
    """Daily targets; at most one active goal per user."""
    user_id: Optional[str] = None
    target_weight_kg: float
    daily_calorie_target: int
    daily_water_goal_ml: int
    sleep_goal_hours: float
    days_to_goal: Optional[int] = None
    is_active: bool = True


class LoggedActivity(ActivityEntry):
    """An activity together with the date it was logged on."""
    date: str
