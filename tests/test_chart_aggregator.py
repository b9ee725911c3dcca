"""Unit tests for ChartAggregator."""

from bson import ObjectId

from fittrack.tracking.chart import ChartAggregator
from fittrack.tracking.models import ChartPoint

DATES = ["2024-01-13", "2024-01-14", "2024-01-15"]


class TestBuild:
    def test_zero_fills_missing_dates(self):
        series = ChartAggregator.build(DATES, {"2024-01-14": 120})
        assert [p.calories for p in series] == [0, 120, 0]
        assert [p.date for p in series] == DATES


class TestFromRows:
    def test_sums_activities_per_checkin(self):
        monday, tuesday = ObjectId(), ObjectId()
        checkins = [
            {"_id": monday, "checkin_date": "2024-01-13"},
            {"_id": tuesday, "checkin_date": "2024-01-15"},
        ]
        activities = [
            {"checkin_id": monday, "calories_burned": 100},
            {"checkin_id": monday, "calories_burned": 50},
            {"checkin_id": tuesday, "calories_burned": 200},
            {"checkin_id": tuesday, "calories_burned": None},
        ]

        series = ChartAggregator.from_rows(DATES, checkins, activities)

        assert [p.calories for p in series] == [150, 0, 200]

    def test_checkin_without_activities_is_zero(self):
        checkins = [{"_id": ObjectId(), "checkin_date": "2024-01-14"}]
        series = ChartAggregator.from_rows(DATES, checkins, [])
        assert [p.calories for p in series] == [0, 0, 0]


class TestFromStored:
    def test_drops_stale_and_fills_gaps(self):
        stored = [
            ChartPoint(date="2024-01-01", calories=999),
            ChartPoint(date="2024-01-15", calories=150),
        ]
        series = ChartAggregator.from_stored(DATES, stored)
        assert [(p.date, p.calories) for p in series] == [
            ("2024-01-13", 0),
            ("2024-01-14", 0),
            ("2024-01-15", 150),
        ]
