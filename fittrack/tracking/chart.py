"""
Chart series aggregation.

Folds activity data from either backend into a dense, ascending
(date, calories burned) series with zero-filled gaps.
"""

from typing import Any, Dict, Iterable, List, Mapping

from fittrack.tracking.models import ChartPoint


class ChartAggregator:
    """
    Builds fixed-length chart series.

    Both backends reduce their data to a date -> calories mapping and
    share build() for the final shape.
    """

    @classmethod
    def build(cls, dates: List[str], calories_by_date: Mapping[str, int]) -> List[ChartPoint]:
        """
        Produce one point per date, in the given (ascending) order.

        Args:
            dates: Window dates, oldest first
            calories_by_date: Known totals; missing dates become 0

        Returns:
            List of ChartPoint, same length as dates
        """
        return [
            ChartPoint(date=day, calories=int(calories_by_date.get(day) or 0))
            for day in dates
        ]

    @classmethod
    def from_rows(
        cls,
        dates: List[str],
        checkins: Iterable[Mapping[str, Any]],
        activities: Iterable[Mapping[str, Any]],
    ) -> List[ChartPoint]:
        """
        Series from remote rows.

        Args:
            dates: Window dates, oldest first
            checkins: daily_checkins rows with _id and checkin_date
            activities: activities rows with checkin_id and calories_burned

        Returns:
            Dense series; days without a checkin or activities are 0
        """
        calories_by_checkin: Dict[Any, int] = {}
        for activity in activities:
            checkin_id = activity.get("checkin_id")
            calories_by_checkin[checkin_id] = (
                calories_by_checkin.get(checkin_id, 0) + (activity.get("calories_burned") or 0)
            )

        calories_by_date: Dict[str, int] = {}
        for checkin in checkins:
            day = checkin.get("checkin_date")
            calories_by_date[day] = calories_by_date.get(day, 0) + calories_by_checkin.get(checkin.get("_id"), 0)

        return cls.build(dates, calories_by_date)

    @classmethod
    def from_stored(cls, dates: List[str], stored: Iterable[ChartPoint]) -> List[ChartPoint]:
        """
        Series from a stored offline series.

        Entries outside the window are dropped; missing dates are synthesized as 0.
        """
        calories_by_date: Dict[str, int] = {}
        for point in stored:
            calories_by_date.setdefault(point.date, point.calories)
        return cls.build(dates, calories_by_date)
