"""
DataStore façade.

The single state container callers use for check-in data. It owns the
selected date and the materialized record for that date, routes every
read and mutation to the active repository, and republishes the
repository's result to subscribers.
"""

import logging
from typing import Awaitable, Callable, List, Optional

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

Subscriber = Callable[["DataStore"], None]

LOAD_FAILED = "Something went wrong"


class DataStore:
    """
    Owned state container with explicit subscribe/notify.

    Mutations are load-modify-store cycles in the repository; the
    in-memory record is replaced by whatever the repository returns,
    never updated optimistically. Mutations for one store are expected
    to be awaited one at a time.
    """

    def __init__(
        self,
        repository: CheckinRepository,
        user_id: Optional[str] = None,
        date_index: Optional[DateIndex] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        """
        Initialize DataStore.

        Args:
            repository: Active backend, fixed for the life of the store
            user_id: Caller-supplied user identifier
            date_index: Date helper (local clock by default)
            window_days: Chart window length
        """
        self._repository = repository
        self._user_id = user_id
        self._dates = date_index or DateIndex()
        self._window_days = window_days
        self._subscribers: List[Subscriber] = []

        self.selected_date: str = self._dates.today()
        self.current_record: Optional[CheckinRecord] = None
        self.profile: Optional[Profile] = None
        self.goal: Optional[Goal] = None
        self.chart: List[ChartPoint] = []
        self.recent_activities: List[LoggedActivity] = []
        self.is_loading: bool = False
        self.last_error: Optional[str] = None

    @property
    def repository(self) -> CheckinRepository:
        return self._repository

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def date_label(self) -> str:
        return self._dates.display_label(self.selected_date)

    # ─────────────────────────────────────────────────────────────
    # Subscriptions
    # ─────────────────────────────────────────────────────────────

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked after every state change.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception as e:
                logger.exception(f"DataStore subscriber failed: {e}")

    # ─────────────────────────────────────────────────────────────
    # Date navigation
    # ─────────────────────────────────────────────────────────────

    def set_selected_date(self, date: str) -> None:
        """
        Select a date. The loaded record is cleared until load_checkin runs.

        Raises:
            ValueError: If date is malformed or after today
        """
        if self._dates.is_future(date):
            raise ValueError(f"Cannot select a future date: {date}")
        if date != self.selected_date:
            self.selected_date = date
            self.current_record = None
        self._publish()

    def go_to_previous_day(self) -> str:
        self.set_selected_date(self._dates.previous_day(self.selected_date))
        return self.selected_date

    def go_to_next_day(self) -> str:
        """Move forward one day; does nothing when today is already selected."""
        if self.selected_date >= self._dates.today():
            return self.selected_date
        self.set_selected_date(self._dates.next_day(self.selected_date))
        return self.selected_date

    # ─────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────

    async def load_checkin(self, date: Optional[str] = None) -> Optional[CheckinRecord]:
        """
        Get-or-create the record for a date (the selected date by default).

        Returns:
            The loaded record, or None if the backend returned no data
        """
        if date is not None:
            self.set_selected_date(date)

        record = await self._repository.get_or_create(self._user_id, self.selected_date)
        return self._apply_record(record, "load checkin")

    async def load_user_data(self) -> None:
        self.is_loading = True
        self._publish()
        try:
            self.profile = await self._repository.get_profile(self._user_id)
            self.goal = await self._repository.get_goal(self._user_id)
        finally:
            self.is_loading = False
        self._publish()

    async def load_chart(self) -> List[ChartPoint]:
        self.chart = await self._repository.chart_series(self._user_id, self._window_days)
        self.recent_activities = await self._repository.get_recent_activities(
            self._user_id, self._window_days
        )
        self._publish()
        return self.chart

    async def refresh(self) -> None:
        """Reload user data, the selected record and the chart."""
        await self.load_user_data()
        await self.load_checkin()
        await self.load_chart()

    # ─────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────

    async def add_water(self, amount_ml: int) -> Optional[CheckinRecord]:
        return await self._mutate(
            "add water",
            lambda: self._repository.add_water(self._user_id, self.selected_date, amount_ml),
        )

    async def update_sleep(self, hours: float) -> Optional[CheckinRecord]:
        return await self._mutate(
            "update sleep",
            lambda: self._repository.update_sleep(self._user_id, self.selected_date, hours),
        )

    async def save_meals(self, meals: MealSlots) -> Optional[CheckinRecord]:
        return await self._mutate(
            "save meals",
            lambda: self._repository.save_meals(self._user_id, self.selected_date, meals),
        )

    async def add_activity(self, activity: ActivityEntry) -> Optional[CheckinRecord]:
        """Log an activity, then reload the chart it feeds."""
        record = await self._mutate(
            "add activity",
            lambda: self._repository.add_activity(self._user_id, self.selected_date, activity),
        )
        if record is not None:
            await self.load_chart()
        return record

    async def save_profile(self, profile: Profile) -> Optional[Profile]:
        saved = await self._repository.save_profile(self._user_id, profile)
        if saved is None:
            self._fail("save profile")
        else:
            self.profile = saved
            self.last_error = None
        self._publish()
        return saved

    async def save_goal(self, goal: Goal) -> Optional[Goal]:
        saved = await self._repository.save_goal(self._user_id, goal)
        if saved is None:
            self._fail("save goal")
        else:
            self.goal = saved
            self.last_error = None
        self._publish()
        return saved

    async def reset(self) -> bool:
        """
        Wipe and reseed the backend, then reload everything.

        Returns:
            False if the active backend does not support reset or it failed
        """
        if not self._repository.supports_reset:
            logger.warning("Reset requested on a backend without reset support")
            return False
        if not await self._repository.reset():
            self._fail("reset")
            self._publish()
            return False
        self.selected_date = self._dates.today()
        self.current_record = None
        await self.refresh()
        return True

    async def _mutate(
        self,
        action: str,
        operation: Callable[[], Awaitable[Optional[CheckinRecord]]],
    ) -> Optional[CheckinRecord]:
        record = await operation()
        return self._apply_record(record, action)

    def _apply_record(self, record: Optional[CheckinRecord], action: str) -> Optional[CheckinRecord]:
        if record is None:
            self._fail(action)
        else:
            self.current_record = record
            self.last_error = None
        self._publish()
        return record

    def _fail(self, action: str) -> None:
        logger.warning(f"DataStore could not {action} for {self._user_id} on {self.selected_date}")
        self.last_error = LOAD_FAILED
