"""
Calendar date helpers.

All dates are local wall-clock calendar days rendered as ISO
``YYYY-MM-DD`` strings, with no time component and no timezone.
"""

from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

DATE_FORMAT = "%Y-%m-%d"


class DateIndex:
    """
    Supplies calendar-date strings relative to "today".

    Holds no state beyond the clock, which defaults to the local date
    and can be replaced for deterministic behaviour.
    """

    def __init__(self, clock: Optional[Callable[[], date]] = None):
        self._clock = clock or date.today

    @staticmethod
    def parse(value: str) -> date:
        """
        Parse an ISO date string.

        Raises:
            ValueError: If value is not a valid YYYY-MM-DD date
        """
        return datetime.strptime(value, DATE_FORMAT).date()

    @staticmethod
    def format(value: date) -> str:
        return value.strftime(DATE_FORMAT)

    def today(self) -> str:
        """Today's local date as YYYY-MM-DD."""
        return self.format(self._clock())

    def last_n_days(self, n: int) -> List[str]:
        """
        Consecutive dates ending at today, oldest first.

        Args:
            n: Number of days in the window

        Returns:
            List of n date strings, the last one being today
        """
        today = self._clock()
        return [self.format(today - timedelta(days=i)) for i in range(n - 1, -1, -1)]

    def previous_day(self, value: str) -> str:
        return self.format(self.parse(value) - timedelta(days=1))

    def next_day(self, value: str) -> str:
        # Callers keep the result from passing today.
        return self.format(self.parse(value) + timedelta(days=1))

    def is_future(self, value: str) -> bool:
        """True if value is after today."""
        return self.parse(value) > self._clock()

    def display_label(self, value: str) -> str:
        """
        Human label for a date.

        Returns:
            "Today" for today, otherwise e.g. "Jan 30 · Fri"
        """
        if value == self.today():
            return "Today"
        day = self.parse(value)
        return f"{day.strftime('%b')} {day.day} · {day.strftime('%a')}"
