"""
Abstract check-in repository interface.

Defines the date-scoped contract both persistence backends implement,
so the DataStore can work against either without knowing which one is
active.

Example:
    from fittrack.tracking import CheckinRepository, RemoteCheckinRepository, OfflineCheckinRepository

    def get_repository(settings, db, store) -> CheckinRepository:
        if settings.OFFLINE_DEMO:
            return OfflineCheckinRepository(store)
        return RemoteCheckinRepository(db)
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from fittrack.tracking.models import (
    ActivityEntry,
    ChartPoint,
    CheckinRecord,
    Goal,
    LoggedActivity,
    MealSlots,
    Profile,
)

DEFAULT_WINDOW_DAYS = 7


class CheckinRepository(ABC):
    """
    Abstract check-in persistence.

    Methods never raise for expected conditions: a missing record is
    None from get_by_date, and backend failures come back as None (or an
    empty/zero-filled result) after being logged.
    """

    supports_reset: bool = False

    async def initialize(self) -> bool:
        """Prepare the backend. Returns False if it could not be prepared."""
        return True

    async def reset(self) -> bool:
        """Wipe all stored data. Only meaningful where supports_reset is True."""
        return False

    @abstractmethod
    async def get_by_date(self, user_id: Optional[str], date: str) -> Optional[CheckinRecord]:
        """
        Fetch the record for an exact (user, date) pair.

        Returns:
            CheckinRecord, or None if no record exists (or on failure)
        """
        pass

    @abstractmethod
    async def get_or_create(self, user_id: Optional[str], date: str) -> Optional[CheckinRecord]:
        """
        Fetch the record, creating a zeroed one if absent.

        Safe to call repeatedly for the same pair.

        Returns:
            CheckinRecord, or None on failure
        """
        pass

    @abstractmethod
    async def add_water(self, user_id: Optional[str], date: str, amount_ml: int) -> Optional[CheckinRecord]:
        """Add amount_ml to the day's water intake (additive, never absolute)."""
        pass

    @abstractmethod
    async def update_sleep(self, user_id: Optional[str], date: str, hours: float) -> Optional[CheckinRecord]:
        """Overwrite the day's sleep hours."""
        pass

    @abstractmethod
    async def save_meals(self, user_id: Optional[str], date: str, meals: MealSlots) -> Optional[CheckinRecord]:
        """Replace the day's meals and recompute total_calories_consumed."""
        pass

    @abstractmethod
    async def add_activity(self, user_id: Optional[str], date: str, activity: ActivityEntry) -> Optional[CheckinRecord]:
        """Append an activity to the day; consumed calories are untouched."""
        pass

    @abstractmethod
    async def chart_series(self, user_id: Optional[str], window_days: int = DEFAULT_WINDOW_DAYS) -> List[ChartPoint]:
        """Dense ascending calories-burned series ending today."""
        pass

    @abstractmethod
    async def get_recent_activities(self, user_id: Optional[str], days: int = DEFAULT_WINDOW_DAYS) -> List[LoggedActivity]:
        """Activities logged over the last N days, oldest first."""
        pass

    @abstractmethod
    async def get_profile(self, user_id: Optional[str]) -> Optional[Profile]:
        pass

    @abstractmethod
    async def save_profile(self, user_id: Optional[str], profile: Profile) -> Optional[Profile]:
        pass

    @abstractmethod
    async def get_goal(self, user_id: Optional[str]) -> Optional[Goal]:
        pass

    @abstractmethod
    async def save_goal(self, user_id: Optional[str], goal: Goal) -> Optional[Goal]:
        pass
