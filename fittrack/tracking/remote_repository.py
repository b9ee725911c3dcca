"""
Remote check-in repository.

Date-scoped get-or-create and incremental updates against MongoDB,
plus profile/goal storage and the activity chart.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

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

# meal_type stored per row -> MealSlots field
MEAL_TYPE_SLOTS = {
    "breakfast": "breakfast",
    "lunch": "lunch",
    "dinner": "dinner",
    "snack": "snacks",
}

PROFILE_FIELDS = ("height_cm", "current_weight_kg", "age", "activity_level", "gender")
GOAL_FIELDS = (
    "target_weight_kg",
    "daily_calorie_target",
    "daily_water_goal_ml",
    "sleep_goal_hours",
    "days_to_goal",
)

DEMO_EXERCISE = [
    {"calories": 250, "type": "walk", "duration": 30},
    {"calories": 400, "type": "run", "duration": 40},
    {"calories": 300, "type": "gym", "duration": 45},
    {"calories": 200, "type": "walk", "duration": 25},
    {"calories": 450, "type": "gym", "duration": 60},
    {"calories": 350, "type": "run", "duration": 35},
    {"calories": 280, "type": "walk", "duration": 35},
]


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class RemoteCheckinRepository(CheckinRepository):
    """
    CheckinRepository backed by MongoDB collections.

    daily_checkins is unique on (user_id, checkin_date); meals and
    activities reference their checkin through checkin_id.
    """

    def __init__(self, db: AsyncIOMotorDatabase, date_index: Optional[DateIndex] = None):
        """
        Initialize RemoteCheckinRepository.

        Args:
            db: MongoDB database connection
            date_index: Date helper (local clock by default)
        """
        self._db = db
        self._dates = date_index or DateIndex()
        self._profiles_collection = db["user_profiles"]
        self._goals_collection = db["user_goals"]
        self._checkins_collection = db["daily_checkins"]
        self._meals_collection = db["meals"]
        self._activities_collection = db["activities"]

    async def initialize(self) -> bool:
        return await self.ensure_indexes()

    async def ensure_indexes(self) -> bool:
        """
        Create the indexes the repository relies on.

        The unique (user_id, checkin_date) index makes get-or-create
        duplicate-free under concurrent callers.
        """
        try:
            await self._checkins_collection.create_index(
                [("user_id", ASCENDING), ("checkin_date", ASCENDING)],
                unique=True,
            )
            await self._meals_collection.create_index("checkin_id")
            await self._activities_collection.create_index("checkin_id")
            await self._profiles_collection.create_index("user_id", unique=True)
            await self._goals_collection.create_index(
                [("user_id", ASCENDING), ("is_active", ASCENDING)]
            )
            logger.info("Check-in indexes ensured")
            return True
        except Exception as e:
            logger.error(f"Failed to create check-in indexes: {e}")
            return False

    # ─────────────────────────────────────────────────────────────
    # Check-ins
    # ─────────────────────────────────────────────────────────────

    async def get_by_date(self, user_id: Optional[str], date: str) -> Optional[CheckinRecord]:
        try:
            row = await self._checkins_collection.find_one({
                "user_id": user_id,
                "checkin_date": date,
            })
            if row is None:
                return None
            return await self._to_record(row)
        except Exception as e:
            logger.error(f"Error fetching checkin for {user_id} on {date}: {e}")
            return None

    async def get_or_create(self, user_id: Optional[str], date: str) -> Optional[CheckinRecord]:
        record = await self.get_by_date(user_id, date)
        if record is not None:
            return record

        now = _utcnow()
        try:
            row = await self._checkins_collection.find_one_and_update(
                {"user_id": user_id, "checkin_date": date},
                {
                    "$setOnInsert": {
                        "total_calories_consumed": 0,
                        "water_intake_ml": 0,
                        "sleep_hours": None,
                        "steps_count": None,
                        "created_at": now,
                        "updated_at": now,
                    }
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
            record = await self._to_record(row)
        except DuplicateKeyError:
            # Another caller inserted the row between our read and upsert.
            logger.debug(f"Checkin for {user_id} on {date} created concurrently")
            return await self.get_by_date(user_id, date)
        except Exception as e:
            logger.error(f"Error creating checkin for {user_id} on {date}: {e}")
            return None

        logger.info(f"Checkin ready for user {user_id} on {date}")
        return record

    async def add_water(self, user_id: Optional[str], date: str, amount_ml: int) -> Optional[CheckinRecord]:
        checkin = await self.get_or_create(user_id, date)
        if checkin is None:
            return None

        return await self._update_checkin(
            checkin,
            {"$inc": {"water_intake_ml": amount_ml}},
            action="adding water",
        )

    async def update_sleep(self, user_id: Optional[str], date: str, hours: float) -> Optional[CheckinRecord]:
        checkin = await self.get_or_create(user_id, date)
        if checkin is None:
            return None

        return await self._update_checkin(
            checkin,
            {"$set": {"sleep_hours": hours}},
            action="updating sleep",
        )

    async def save_meals(self, user_id: Optional[str], date: str, meals: MealSlots) -> Optional[CheckinRecord]:
        """
        Replace the day's meal rows.

        Every existing meal row for the checkin is deleted, then one row
        per non-zero slot is inserted. The checkin total is the sum of
        all four slots.
        """
        checkin = await self.get_or_create(user_id, date)
        if checkin is None:
            return None

        checkin_id = ObjectId(checkin.id)
        now = _utcnow()
        rows = [
            {
                "user_id": user_id,
                "checkin_id": checkin_id,
                "meal_type": meal_type,
                "estimated_calories": getattr(meals, slot),
                "created_at": now,
            }
            for meal_type, slot in MEAL_TYPE_SLOTS.items()
            if getattr(meals, slot) > 0
        ]

        try:
            await self._meals_collection.delete_many({"checkin_id": checkin_id})
            if rows:
                await self._meals_collection.insert_many(rows)
        except Exception as e:
            logger.error(f"Error saving meals for checkin {checkin.id}: {e}")
            return None

        return await self._update_checkin(
            checkin,
            {"$set": {"total_calories_consumed": meals.total()}},
            action="saving meal total",
        )

    async def add_activity(self, user_id: Optional[str], date: str, activity: ActivityEntry) -> Optional[CheckinRecord]:
        checkin = await self.get_or_create(user_id, date)
        if checkin is None:
            return None

        try:
            await self._activities_collection.insert_one({
                "user_id": user_id,
                "checkin_id": ObjectId(checkin.id),
                "activity_type": activity.type,
                "duration_minutes": activity.duration_minutes,
                "calories_burned": activity.calories_burned,
                "created_at": _utcnow(),
            })
        except Exception as e:
            logger.error(f"Error inserting activity for checkin {checkin.id}: {e}")
            return None

        logger.info(f"Activity '{activity.type}' logged for user {user_id} on {date}")
        return await self.get_by_date(user_id, date)

    async def get_meals(self, checkin_id: str) -> List[Dict[str, Any]]:
        """
        Get the meal rows of a checkin.

        Returns:
            List of meal rows, empty on failure
        """
        try:
            cursor = self._meals_collection.find({"checkin_id": ObjectId(checkin_id)})
            return await cursor.to_list(length=None)
        except Exception as e:
            logger.error(f"Error fetching meals for checkin {checkin_id}: {e}")
            return []

    async def get_checkins_for_dates(self, user_id: Optional[str], dates: List[str]) -> List[Dict[str, Any]]:
        """Raw checkin rows for the given dates, ascending by date."""
        cursor = self._checkins_collection.find({
            "user_id": user_id,
            "checkin_date": {"$in": dates},
        })
        cursor = cursor.sort("checkin_date", ASCENDING)
        return await cursor.to_list(length=len(dates))

    async def chart_series(self, user_id: Optional[str], window_days: int = DEFAULT_WINDOW_DAYS) -> List[ChartPoint]:
        dates = self._dates.last_n_days(window_days)
        try:
            checkins = await self.get_checkins_for_dates(user_id, dates)
            activities = await self._activities_for_checkins(checkins)
            return ChartAggregator.from_rows(dates, checkins, activities)
        except Exception as e:
            logger.error(f"Error loading chart data for {user_id}: {e}")
            return ChartAggregator.build(dates, {})

    async def get_recent_activities(self, user_id: Optional[str], days: int = DEFAULT_WINDOW_DAYS) -> List[LoggedActivity]:
        """
        Activities logged over the last N days, oldest first.

        Returns:
            List of LoggedActivity, empty on failure
        """
        dates = self._dates.last_n_days(days)
        try:
            checkins = await self.get_checkins_for_dates(user_id, dates)
            activities = await self._activities_for_checkins(checkins)
            date_by_checkin = {c["_id"]: c["checkin_date"] for c in checkins}
            return [
                LoggedActivity(date=date_by_checkin[a["checkin_id"]], **self._activity_fields(a))
                for a in activities
                if a.get("checkin_id") in date_by_checkin
            ]
        except Exception as e:
            logger.error(f"Error fetching recent activities for {user_id}: {e}")
            return []

    # ─────────────────────────────────────────────────────────────
    # Profile and goals
    # ─────────────────────────────────────────────────────────────

    async def get_profile(self, user_id: Optional[str]) -> Optional[Profile]:
        try:
            row = await self._profiles_collection.find_one({"user_id": user_id})
            if row is None:
                return None
            return Profile(user_id=user_id, **{k: row.get(k) for k in PROFILE_FIELDS if k in row})
        except Exception as e:
            logger.error(f"Error fetching profile for {user_id}: {e}")
            return None

    async def save_profile(self, user_id: Optional[str], profile: Profile) -> Optional[Profile]:
        now = _utcnow()
        fields = profile.model_dump(include=set(PROFILE_FIELDS))
        try:
            await self._profiles_collection.update_one(
                {"user_id": user_id},
                {
                    "$set": {**fields, "updated_at": now},
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
            )
        except Exception as e:
            logger.error(f"Error saving profile for {user_id}: {e}")
            return None
        logger.info(f"Profile saved for user {user_id}")
        return profile.model_copy(update={"user_id": user_id})

    async def get_goal(self, user_id: Optional[str]) -> Optional[Goal]:
        try:
            row = await self._goals_collection.find_one(
                {"user_id": user_id, "is_active": True},
                sort=[("created_at", DESCENDING)],
            )
            if row is None:
                return None
            return Goal(user_id=user_id, is_active=True, **{k: row.get(k) for k in GOAL_FIELDS if k in row})
        except Exception as e:
            logger.error(f"Error fetching goal for {user_id}: {e}")
            return None

    async def save_goal(self, user_id: Optional[str], goal: Goal) -> Optional[Goal]:
        """Deactivate the current goal, then insert the new one as active."""
        now = _utcnow()
        try:
            await self._goals_collection.update_many(
                {"user_id": user_id, "is_active": True},
                {"$set": {"is_active": False, "updated_at": now}},
            )
            await self._goals_collection.insert_one({
                **goal.model_dump(include=set(GOAL_FIELDS)),
                "user_id": user_id,
                "is_active": True,
                "created_at": now,
                "updated_at": now,
            })
        except Exception as e:
            logger.error(f"Error saving goal for {user_id}: {e}")
            return None
        logger.info(f"Goal saved for user {user_id}")
        return goal.model_copy(update={"user_id": user_id, "is_active": True})

    # ─────────────────────────────────────────────────────────────
    # Demo data
    # ─────────────────────────────────────────────────────────────

    async def seed_demo_data(self, user_id: str) -> bool:
        """
        Populate a week of demo data for a user.

        Only fills in what is missing: an existing profile, goal, checkin
        or activity is left alone, so running it twice is harmless.

        Returns:
            True on success, False if the seed could not complete
        """
        try:
            if await self._profiles_collection.find_one({"user_id": user_id}) is None:
                await self._profiles_collection.insert_one({
                    "user_id": user_id,
                    "height_cm": 180,
                    "current_weight_kg": 80,
                    "age": 30,
                    "activity_level": "moderate",
                    "created_at": _utcnow(),
                    "updated_at": _utcnow(),
                })

            if await self._goals_collection.find_one({"user_id": user_id, "is_active": True}) is None:
                await self._goals_collection.insert_one({
                    "user_id": user_id,
                    "target_weight_kg": 72,
                    "daily_calorie_target": 2000,
                    "daily_water_goal_ml": 2000,
                    "sleep_goal_hours": 8,
                    "is_active": True,
                    "created_at": _utcnow(),
                    "updated_at": _utcnow(),
                })

            today = self._dates.today()
            for i, date in enumerate(self._dates.last_n_days(len(DEMO_EXERCISE))):
                row = await self._checkins_collection.find_one({"user_id": user_id, "checkin_date": date})
                if row is None:
                    if date == today:
                        values = {
                            "total_calories_consumed": 600,
                            "water_intake_ml": 750,
                            "sleep_hours": 7.0,
                            "steps_count": 5000,
                        }
                    else:
                        values = {
                            "total_calories_consumed": 1500 + random.randint(0, 499),
                            "water_intake_ml": 1500 + random.randint(0, 999),
                            "sleep_hours": round(6 + random.random() * 2, 1),
                            "steps_count": 4000 + random.randint(0, 5999),
                        }
                    result = await self._checkins_collection.insert_one({
                        "user_id": user_id,
                        "checkin_date": date,
                        **values,
                        "created_at": _utcnow(),
                        "updated_at": _utcnow(),
                    })
                    checkin_id = result.inserted_id
                else:
                    checkin_id = row["_id"]

                if await self._activities_collection.find_one({"checkin_id": checkin_id}) is None:
                    exercise = DEMO_EXERCISE[i]
                    await self._activities_collection.insert_one({
                        "user_id": user_id,
                        "checkin_id": checkin_id,
                        "activity_type": exercise["type"],
                        "duration_minutes": exercise["duration"],
                        "calories_burned": exercise["calories"],
                        "created_at": _utcnow(),
                    })
        except Exception as e:
            logger.error(f"Error seeding demo data for {user_id}: {e}")
            return False

        logger.info(f"Demo data seeded for user {user_id}")
        return True

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    async def _update_checkin(
        self,
        checkin: CheckinRecord,
        update: Dict[str, Any],
        action: str,
    ) -> Optional[CheckinRecord]:
        """Apply an update to a checkin row and return the refreshed record."""
        update.setdefault("$set", {})["updated_at"] = _utcnow()
        try:
            row = await self._checkins_collection.find_one_and_update(
                {"_id": ObjectId(checkin.id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
            if row is None:
                logger.warning(f"Checkin {checkin.id} vanished while {action}")
                return None
            return await self._to_record(row)
        except Exception as e:
            logger.error(f"Error {action} for checkin {checkin.id}: {e}")
            return None

    async def _activities_for_checkins(self, checkins: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not checkins:
            return []
        cursor = self._activities_collection.find({
            "checkin_id": {"$in": [c["_id"] for c in checkins]},
        })
        cursor = cursor.sort("created_at", ASCENDING)
        return await cursor.to_list(length=None)

    @staticmethod
    def _activity_fields(row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "type": row.get("activity_type") or "other",
            "duration_minutes": row.get("duration_minutes") or 0,
            "calories_burned": row.get("calories_burned") or 0,
        }

    async def _to_record(self, row: Dict[str, Any]) -> CheckinRecord:
        """Build a CheckinRecord from a checkin row plus its meal and activity rows."""
        checkin_id = row["_id"]

        meal_rows = await self._meals_collection.find({"checkin_id": checkin_id}).to_list(length=None)
        slots: Dict[str, int] = {}
        for meal in meal_rows:
            slot = MEAL_TYPE_SLOTS.get(meal.get("meal_type"))
            if slot:
                slots[slot] = slots.get(slot, 0) + (meal.get("estimated_calories") or 0)

        cursor = self._activities_collection.find({"checkin_id": checkin_id})
        activity_rows = await cursor.sort("created_at", ASCENDING).to_list(length=None)

        return CheckinRecord(
            id=str(checkin_id),
            user_id=row.get("user_id"),
            date=row["checkin_date"],
            total_calories_consumed=row.get("total_calories_consumed") or 0,
            meals=MealSlots(**slots),
            water_intake_ml=row.get("water_intake_ml") or 0,
            sleep_hours=row.get("sleep_hours"),
            steps_count=row.get("steps_count"),
            activities=[ActivityEntry(**self._activity_fields(a)) for a in activity_rows],
        )
