"""
Offline demo check-in repository.

Keeps a single "today" check-in, a 7-day chart series and the
profile/goal in a local key-value store. There is no history: past
dates are simply not found, and the today record is reset when the
calendar day rolls over.
"""

import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from common.storage import KeyValueStore
from fittrack.tracking.chart import ChartAggregator
from fittrack.tracking.dates import DateIndex
from fittrack.tracking.models import (
    ActivityEntry,
    ChartPoint,
    CheckinRecord,
    Goal,
    LoggedActivity,
    MealSlots,
    Profile,
)
from fittrack.tracking.repository import CheckinRepository, DEFAULT_WINDOW_DAYS

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "profile": "@fittrack_offline_profile",
    "goal": "@fittrack_offline_goal",
    "today": "@fittrack_offline_today",
    "chart": "@fittrack_offline_chart",
    "initialized": "@fittrack_offline_init",
}

CHART_DAYS = 7

DEFAULT_PROFILE = Profile(
    height_cm=180,
    current_weight_kg=80,
    age=30,
    activity_level="moderate",
)

DEFAULT_GOAL = Goal(
    target_weight_kg=72,
    daily_calorie_target=2000,
    daily_water_goal_ml=2000,
    sleep_goal_hours=8,
)

DEFAULT_MEALS = MealSlots(breakfast=350, lunch=500, dinner=0, snacks=0)
DEFAULT_WATER_ML = 750
DEFAULT_SLEEP_HOURS = 7.5
DEFAULT_ACTIVITIES = [ActivityEntry(type="walk", duration_minutes=30, calories_burned=150)]

# Oldest first; the last value is today's
DEMO_CHART_CALORIES = [280, 420, 350, 180, 450, 320, 150]

_chart_adapter = TypeAdapter(List[ChartPoint])


class OfflineCheckinRepository(CheckinRepository):
    """
    CheckinRepository backed by a local KeyValueStore.

    The user argument of every operation is ignored. Reads of corrupt
    blobs fall back to the hardcoded demo defaults.
    """

    supports_reset = True

    def __init__(self, store: KeyValueStore, date_index: Optional[DateIndex] = None):
        """
        Initialize OfflineCheckinRepository.

        Args:
            store: Persistent key-value store
            date_index: Date helper (local clock by default)
        """
        self._store = store
        self._dates = date_index or DateIndex()

    # ─────────────────────────────────────────────────────────────
    # Defaults
    # ─────────────────────────────────────────────────────────────

    def default_checkin(self) -> CheckinRecord:
        """The seeded demo record for today."""
        return CheckinRecord(
            date=self._dates.today(),
            total_calories_consumed=DEFAULT_MEALS.total(),
            meals=DEFAULT_MEALS.model_copy(),
            water_intake_ml=DEFAULT_WATER_ML,
            sleep_hours=DEFAULT_SLEEP_HOURS,
            activities=[a.model_copy() for a in DEFAULT_ACTIVITIES],
        )

    def default_chart(self) -> List[ChartPoint]:
        return [
            ChartPoint(date=day, calories=calories)
            for day, calories in zip(self._dates.last_n_days(CHART_DAYS), DEMO_CHART_CALORIES)
        ]

    def _new_day_checkin(self) -> CheckinRecord:
        """A fresh record for a new day: consumption, water and activities cleared."""
        return self.default_checkin().model_copy(update={
            "total_calories_consumed": 0,
            "meals": MealSlots(),
            "water_intake_ml": 0,
            "activities": [],
        })

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    async def initialize(self) -> bool:
        """
        Seed demo data once, or roll today's record over to a new day.

        Returns:
            True on success, False if the store could not be written
        """
        try:
            initialized = await self._store.get(STORAGE_KEYS["initialized"])
            if not initialized:
                await self._store.set(STORAGE_KEYS["profile"], DEFAULT_PROFILE.model_dump_json())
                await self._store.set(STORAGE_KEYS["goal"], DEFAULT_GOAL.model_dump_json())
                await self._store.set(STORAGE_KEYS["today"], self.default_checkin().model_dump_json())
                await self._store.set(STORAGE_KEYS["chart"], _chart_adapter.dump_json(self.default_chart()).decode())
                await self._store.set(STORAGE_KEYS["initialized"], "true")
                logger.info("Offline demo data initialized")
            else:
                await self.load_today()
                logger.debug("Offline demo data already exists")
            return True
        except Exception as e:
            logger.error(f"Error initializing offline demo data: {e}")
            return False

    async def reset(self) -> bool:
        """Clear every offline key and seed the demo data again."""
        try:
            await self._store.remove(STORAGE_KEYS.values())
        except Exception as e:
            logger.error(f"Error resetting offline demo data: {e}")
            return False
        logger.info("Offline demo data cleared")
        return await self.initialize()

    # ─────────────────────────────────────────────────────────────
    # Today's record
    # ─────────────────────────────────────────────────────────────

    async def load_today(self) -> CheckinRecord:
        """
        Read today's record, rolling it over if it belongs to an earlier day.

        A missing or unreadable blob yields the demo default without
        writing it back.
        """
        try:
            raw = await self._store.get(STORAGE_KEYS["today"])
        except Exception as e:
            logger.warning(f"Could not read offline checkin: {e}")
            return self.default_checkin()
        if raw is None:
            return self.default_checkin()

        try:
            record = CheckinRecord.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Stored offline checkin is corrupt, using default: {e.error_count()} errors")
            return self.default_checkin()

        if record.date != self._dates.today():
            logger.info(f"Offline checkin rolled over from {record.date} to {self._dates.today()}")
            record = self._new_day_checkin()
            try:
                await self._store.set(STORAGE_KEYS["today"], record.model_dump_json())
            except Exception as e:
                logger.error(f"Could not persist rolled-over offline checkin: {e}")
        return record

    async def _save_today(self, record: CheckinRecord) -> CheckinRecord:
        """Persist today's record with the date pinned and the meal total recomputed."""
        record = record.with_meals(record.meals).model_copy(update={"date": self._dates.today()})
        await self._store.set(STORAGE_KEYS["today"], record.model_dump_json())
        return record

    def _is_today(self, date: str) -> bool:
        if date == self._dates.today():
            return True
        logger.warning(f"Offline demo keeps no history; ignoring request for {date}")
        return False

    async def get_by_date(self, user_id: Optional[str], date: str) -> Optional[CheckinRecord]:
        if date != self._dates.today():
            return None
        return await self.load_today()

    async def get_or_create(self, user_id: Optional[str], date: str) -> Optional[CheckinRecord]:
        if not self._is_today(date):
            return None
        return await self.load_today()

    async def add_water(self, user_id: Optional[str], date: str, amount_ml: int) -> Optional[CheckinRecord]:
        if not self._is_today(date):
            return None
        try:
            record = await self.load_today()
            record = record.model_copy(update={"water_intake_ml": record.water_intake_ml + amount_ml})
            return await self._save_today(record)
        except Exception as e:
            logger.error(f"Error adding offline water: {e}")
            return None

    async def update_sleep(self, user_id: Optional[str], date: str, hours: float) -> Optional[CheckinRecord]:
        if not self._is_today(date):
            return None
        try:
            record = await self.load_today()
            return await self._save_today(record.model_copy(update={"sleep_hours": hours}))
        except Exception as e:
            logger.error(f"Error updating offline sleep: {e}")
            return None

    async def save_meals(self, user_id: Optional[str], date: str, meals: MealSlots) -> Optional[CheckinRecord]:
        if not self._is_today(date):
            return None
        try:
            record = await self.load_today()
            return await self._save_today(record.with_meals(meals))
        except Exception as e:
            logger.error(f"Error saving offline meals: {e}")
            return None

    async def add_activity(self, user_id: Optional[str], date: str, activity: ActivityEntry) -> Optional[CheckinRecord]:
        """Append to today's activities and add its calories to today's chart entry."""
        if not self._is_today(date):
            return None
        try:
            record = await self.load_today()
            record = await self._save_today(
                record.model_copy(update={"activities": [*record.activities, activity]})
            )
        except Exception as e:
            logger.error(f"Error adding offline activity: {e}")
            return None

        # The activity is already stored; chart failures only log.
        try:
            today = self._dates.today()
            series = await self._load_chart()
            for point in series:
                if point.date == today:
                    point.calories += activity.calories_burned
                    break
            else:
                series.append(ChartPoint(date=today, calories=activity.calories_burned))
            await self._store.set(STORAGE_KEYS["chart"], _chart_adapter.dump_json(series).decode())
        except Exception as e:
            logger.warning(f"Offline activity saved but chart update failed: {e}")

        logger.info(f"Offline activity '{activity.type}' logged")
        return record

    # ─────────────────────────────────────────────────────────────
    # Chart
    # ─────────────────────────────────────────────────────────────

    async def _load_chart(self) -> List[ChartPoint]:
        """Stored series reconciled to the last 7 days."""
        dates = self._dates.last_n_days(CHART_DAYS)
        try:
            raw = await self._store.get(STORAGE_KEYS["chart"])
        except Exception as e:
            logger.warning(f"Could not read offline chart: {e}")
            return self.default_chart()
        if raw is None:
            return self.default_chart()

        try:
            stored = _chart_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Stored offline chart is corrupt, using default: {e.error_count()} errors")
            return self.default_chart()
        return ChartAggregator.from_stored(dates, stored)

    async def chart_series(self, user_id: Optional[str], window_days: int = DEFAULT_WINDOW_DAYS) -> List[ChartPoint]:
        series = await self._load_chart()
        if window_days == CHART_DAYS:
            return series
        return ChartAggregator.from_stored(self._dates.last_n_days(window_days), series)

    async def get_recent_activities(self, user_id: Optional[str], days: int = DEFAULT_WINDOW_DAYS) -> List[LoggedActivity]:
        record = await self.load_today()
        return [
            LoggedActivity(date=record.date, **activity.model_dump())
            for activity in record.activities
        ]

    # ─────────────────────────────────────────────────────────────
    # Profile and goals
    # ─────────────────────────────────────────────────────────────

    async def get_profile(self, user_id: Optional[str]) -> Optional[Profile]:
        try:
            raw = await self._store.get(STORAGE_KEYS["profile"])
            return Profile.model_validate_json(raw) if raw else DEFAULT_PROFILE.model_copy()
        except Exception as e:
            logger.warning(f"Could not read offline profile, using default: {e}")
            return DEFAULT_PROFILE.model_copy()

    async def save_profile(self, user_id: Optional[str], profile: Profile) -> Optional[Profile]:
        try:
            await self._store.set(STORAGE_KEYS["profile"], profile.model_dump_json())
        except Exception as e:
            logger.error(f"Error saving offline profile: {e}")
            return None
        return profile

    async def get_goal(self, user_id: Optional[str]) -> Optional[Goal]:
        try:
            raw = await self._store.get(STORAGE_KEYS["goal"])
            return Goal.model_validate_json(raw) if raw else DEFAULT_GOAL.model_copy()
        except Exception as e:
            logger.warning(f"Could not read offline goal, using default: {e}")
            return DEFAULT_GOAL.model_copy()

    async def save_goal(self, user_id: Optional[str], goal: Goal) -> Optional[Goal]:
        goal = goal.model_copy(update={"is_active": True})
        try:
            await self._store.set(STORAGE_KEYS["goal"], goal.model_dump_json())
        except Exception as e:
            logger.error(f"Error saving offline goal: {e}")
            return None
        return goal
