"""Unit tests for OfflineCheckinRepository (single-day demo store)."""

import json

import pytest

from common.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from fittrack.tracking.dates import DateIndex
from fittrack.tracking.models import ActivityEntry, ChartPoint, CheckinRecord, MealSlots, Profile
from fittrack.tracking.offline_repository import (
    DEFAULT_GOAL,
    DEFAULT_PROFILE,
    DEMO_CHART_CALORIES,
    STORAGE_KEYS,
    OfflineCheckinRepository,
)

DAY = "2024-01-15"
YESTERDAY = "2024-01-14"


# ─────────────────────────────────────────────────────────────────
# Initialization and reset
# ─────────────────────────────────────────────────────────────────


class TestInitialize:
    @pytest.mark.asyncio
    async def test_seeds_defaults_once(self, offline_repo, kv_store):
        assert await offline_repo.initialize() is True

        record = await offline_repo.get_or_create(None, DAY)
        assert record.water_intake_ml == 750
        assert record.sleep_hours == 7.5
        assert record.meals == MealSlots(breakfast=350, lunch=500)
        assert record.total_calories_consumed == 850
        assert [a.type for a in record.activities] == ["walk"]
        assert await kv_store.get(STORAGE_KEYS["initialized"]) == "true"

    @pytest.mark.asyncio
    async def test_second_initialize_keeps_changes(self, offline_repo):
        await offline_repo.initialize()
        await offline_repo.add_water(None, DAY, 250)
        await offline_repo.initialize()

        record = await offline_repo.get_or_create(None, DAY)
        assert record.water_intake_ml == 1000

    @pytest.mark.asyncio
    async def test_default_profile_and_goal(self, offline_repo):
        await offline_repo.initialize()

        assert await offline_repo.get_profile(None) == DEFAULT_PROFILE
        assert await offline_repo.get_goal(None) == DEFAULT_GOAL

    @pytest.mark.asyncio
    async def test_reset_restores_defaults(self, offline_repo):
        await offline_repo.initialize()
        await offline_repo.add_water(None, DAY, 500)
        await offline_repo.save_meals(None, DAY, MealSlots(dinner=900))
        await offline_repo.save_profile(None, Profile(height_cm=160, current_weight_kg=55))

        assert await offline_repo.reset() is True

        assert await offline_repo.get_or_create(None, DAY) == offline_repo.default_checkin()
        assert await offline_repo.get_profile(None) == DEFAULT_PROFILE

    @pytest.mark.asyncio
    async def test_supports_reset(self, offline_repo):
        assert offline_repo.supports_reset is True


# ─────────────────────────────────────────────────────────────────
# Day rollover
# ─────────────────────────────────────────────────────────────────


class TestRollover:
    @pytest.mark.asyncio
    async def test_stale_record_is_reset_but_profile_kept(self, date_index):
        stale = CheckinRecord(
            date=YESTERDAY,
            total_calories_consumed=1200,
            meals=MealSlots(lunch=1200),
            water_intake_ml=1800,
            sleep_hours=6.0,
            activities=[ActivityEntry(type="run", duration_minutes=20, calories_burned=200)],
        )
        custom_profile = Profile(height_cm=165, current_weight_kg=60, age=28, activity_level="active")
        store = InMemoryKeyValueStore({
            STORAGE_KEYS["initialized"]: "true",
            STORAGE_KEYS["today"]: stale.model_dump_json(),
            STORAGE_KEYS["profile"]: custom_profile.model_dump_json(),
        })
        repo = OfflineCheckinRepository(store, date_index=date_index)

        assert await repo.initialize() is True
        record = await repo.get_or_create(None, DAY)

        assert record.date == DAY
        assert record.water_intake_ml == 0
        assert record.total_calories_consumed == 0
        assert record.meals == MealSlots()
        assert record.activities == []
        assert record.sleep_hours == 7.5
        assert await repo.get_profile(None) == custom_profile

        persisted = CheckinRecord.model_validate_json(await store.get(STORAGE_KEYS["today"]))
        assert persisted.date == DAY

    @pytest.mark.asyncio
    async def test_rollover_happens_on_read(self, kv_store):
        current = {"day": YESTERDAY}
        repo = OfflineCheckinRepository(
            kv_store, date_index=DateIndex(clock=lambda: DateIndex.parse(current["day"]))
        )
        await repo.initialize()
        await repo.add_water(None, YESTERDAY, 500)

        current["day"] = DAY
        record = await repo.get_or_create(None, DAY)

        assert record.water_intake_ml == 0


# ─────────────────────────────────────────────────────────────────
# Mutations
# ─────────────────────────────────────────────────────────────────


class TestMutations:
    @pytest.mark.asyncio
    async def test_water_is_additive(self, offline_repo):
        await offline_repo.initialize()
        await offline_repo.add_water(None, DAY, 250)
        record = await offline_repo.add_water(None, DAY, 500)
        assert record.water_intake_ml == 1500

    @pytest.mark.asyncio
    async def test_sleep_overwrites(self, offline_repo):
        await offline_repo.initialize()
        record = await offline_repo.update_sleep(None, DAY, 9.0)
        assert record.sleep_hours == 9.0

    @pytest.mark.asyncio
    async def test_meals_replace_total(self, offline_repo):
        await offline_repo.initialize()
        record = await offline_repo.save_meals(
            None, DAY, MealSlots(breakfast=300, lunch=400, dinner=200, snacks=0)
        )
        assert record.total_calories_consumed == 900
        assert record.water_intake_ml == 750

    @pytest.mark.asyncio
    async def test_user_argument_is_ignored(self, offline_repo):
        await offline_repo.initialize()
        await offline_repo.add_water("alice", DAY, 100)
        record = await offline_repo.get_or_create("bob", DAY)
        assert record.water_intake_ml == 850

    @pytest.mark.asyncio
    async def test_past_dates_are_not_found(self, offline_repo):
        await offline_repo.initialize()

        assert await offline_repo.get_by_date(None, YESTERDAY) is None
        assert await offline_repo.get_or_create(None, YESTERDAY) is None
        assert await offline_repo.add_water(None, YESTERDAY, 250) is None

        today = await offline_repo.get_or_create(None, DAY)
        assert today.water_intake_ml == 750


# ─────────────────────────────────────────────────────────────────
# Activities and chart
# ─────────────────────────────────────────────────────────────────


class TestChart:
    @pytest.mark.asyncio
    async def test_default_chart(self, offline_repo, date_index):
        await offline_repo.initialize()

        series = await offline_repo.chart_series(None)

        assert [p.calories for p in series] == DEMO_CHART_CALORIES
        assert [p.date for p in series] == date_index.last_n_days(7)

    @pytest.mark.asyncio
    async def test_activity_adds_to_today(self, offline_repo):
        await offline_repo.initialize()

        record = await offline_repo.add_activity(
            None, DAY, ActivityEntry(type="run", duration_minutes=20, calories_burned=200)
        )
        series = await offline_repo.chart_series(None)

        assert series[-1].calories == 350
        assert [a.type for a in record.activities] == ["walk", "run"]
        assert record.total_calories_consumed == 850

    @pytest.mark.asyncio
    async def test_sparse_stored_chart_is_zero_filled(self, kv_store, date_index):
        await kv_store.set(
            STORAGE_KEYS["chart"],
            json.dumps([{"date": "2024-01-12", "calories": 90}, {"date": "2023-12-01", "calories": 999}]),
        )
        repo = OfflineCheckinRepository(kv_store, date_index=date_index)

        series = await repo.chart_series(None)

        assert series == [
            ChartPoint(date=day, calories=90 if day == "2024-01-12" else 0)
            for day in date_index.last_n_days(7)
        ]

    @pytest.mark.asyncio
    async def test_recent_activities_are_today_only(self, offline_repo):
        await offline_repo.initialize()

        recent = await offline_repo.get_recent_activities(None)

        assert [(a.date, a.type, a.calories_burned) for a in recent] == [(DAY, "walk", 150)]


# ─────────────────────────────────────────────────────────────────
# Corrupt and persistent storage
# ─────────────────────────────────────────────────────────────────


class TestStorage:
    @pytest.mark.asyncio
    async def test_corrupt_today_blob_uses_default(self, date_index):
        store = InMemoryKeyValueStore({
            STORAGE_KEYS["initialized"]: "true",
            STORAGE_KEYS["today"]: "{not json",
            STORAGE_KEYS["chart"]: "[{\"date\": 5}]",
        })
        repo = OfflineCheckinRepository(store, date_index=date_index)

        record = await repo.get_or_create(None, DAY)
        series = await repo.chart_series(None)

        assert record == repo.default_checkin()
        assert [p.calories for p in series] == DEMO_CHART_CALORIES

    @pytest.mark.asyncio
    async def test_missing_store_reads_as_defaults(self, offline_repo):
        record = await offline_repo.get_or_create(None, DAY)
        assert record == offline_repo.default_checkin()

    @pytest.mark.asyncio
    async def test_survives_restart_with_json_file(self, tmp_path, date_index):
        path = tmp_path / "offline.json"
        repo = OfflineCheckinRepository(JsonFileKeyValueStore(str(path)), date_index=date_index)
        await repo.initialize()
        await repo.add_water(None, DAY, 250)

        restarted = OfflineCheckinRepository(JsonFileKeyValueStore(str(path)), date_index=date_index)
        await restarted.initialize()
        record = await restarted.get_or_create(None, DAY)

        assert record.water_intake_ml == 1000


class ChartWriteFailingStore(InMemoryKeyValueStore):
    """In-memory store whose chart writes fail."""

    async def set(self, key: str, value: str) -> None:
        if key == STORAGE_KEYS["chart"]:
            raise OSError("disk full")
        await super().set(key, value)


class TestChartWriteFailure:
    @pytest.mark.asyncio
    async def test_activity_is_reported_once_stored(self, date_index):
        repo = OfflineCheckinRepository(ChartWriteFailingStore(), date_index=date_index)

        record = await repo.add_activity(
            None, DAY, ActivityEntry(type="run", duration_minutes=20, calories_burned=200)
        )
        stored = await repo.load_today()

        assert record is not None
        assert [a.type for a in record.activities] == ["walk", "run"]
        assert stored == record
