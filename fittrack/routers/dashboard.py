"""
FastAPI router for the dashboard.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from common.utils.exceptions import ServiceUnavailableException
from fittrack.dependencies import get_data_store
from fittrack.schemas.checkin import ChartResponseData, DashboardResponseData
from fittrack.tracking.data_store import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(store: Annotated[DataStore, Depends(get_data_store)]):
    """
    Get everything the dashboard shows.

    Profile, goal, the selected day's check-in and the activity chart.
    """
    await store.refresh()
    if store.current_record is None:
        raise ServiceUnavailableException()

    data = DashboardResponseData(
        date=store.selected_date,
        label=store.date_label,
        checkin=store.current_record,
        profile=store.profile,
        goal=store.goal,
        chart=store.chart,
    )
    return success_response(data.model_dump())


@router.get("/chart")
async def get_chart(store: Annotated[DataStore, Depends(get_data_store)]):
    """Calories burned per day over the chart window, oldest first."""
    await store.load_chart()
    data = ChartResponseData(points=store.chart, recentActivities=store.recent_activities)
    return success_response(data.model_dump())
