"""
FastAPI router for daily check-in endpoints.

Every endpoint works on one date (the `date` query parameter, today by
default) through a request-scoped DataStore.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from common.utils import success_response, list_response
from common.utils.exceptions import ServiceUnavailableException
from fittrack.dependencies import get_data_store
from fittrack.schemas.checkin import (
    ActivityRequest,
    CheckinResponseData,
    MealsRequest,
    SleepRequest,
    WaterRequest,
)
from fittrack.tracking.data_store import DataStore
from fittrack.tracking.models import ActivityEntry, CheckinRecord, MealSlots

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkin", tags=["checkin"])


def _checkin_payload(store: DataStore, record: Optional[CheckinRecord]) -> dict:
    if record is None:
        raise ServiceUnavailableException()
    data = CheckinResponseData(date=store.selected_date, label=store.date_label, checkin=record)
    return success_response(data.model_dump())


@router.get("")
async def get_checkin(store: Annotated[DataStore, Depends(get_data_store)]):
    """
    Get the check-in for a date.

    Creates an empty check-in if none exists yet.
    """
    record = await store.load_checkin()
    return _checkin_payload(store, record)


@router.post("/water")
async def add_water(
    body: WaterRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """Add water to the day's intake."""
    record = await store.add_water(body.amount_ml)
    return _checkin_payload(store, record)


@router.put("/sleep")
async def update_sleep(
    body: SleepRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """Set the day's sleep hours."""
    record = await store.update_sleep(body.hours)
    return _checkin_payload(store, record)


@router.put("/meals")
async def save_meals(
    body: MealsRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """
    Replace the day's meals.

    The calorie total is recomputed from the four slots.
    """
    record = await store.save_meals(MealSlots(**body.model_dump()))
    return _checkin_payload(store, record)


@router.post("/activities")
async def add_activity(
    body: ActivityRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """Log an activity for the day."""
    record = await store.add_activity(ActivityEntry(**body.model_dump()))
    return _checkin_payload(store, record)


@router.get("/activities")
async def get_recent_activities(store: Annotated[DataStore, Depends(get_data_store)]):
    """Activities logged over the chart window, oldest first."""
    await store.load_chart()
    return list_response([a.model_dump() for a in store.recent_activities])
