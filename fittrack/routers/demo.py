"""
FastAPI router for offline demo maintenance.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from common.utils.exceptions import BadRequestException, ServiceUnavailableException
from fittrack.dependencies import get_data_store
from fittrack.tracking.data_store import DataStore

router = APIRouter(prefix="/demo", tags=["demo"])


@router.post("/reset")
async def reset_demo(store: Annotated[DataStore, Depends(get_data_store)]):
    """Wipe the offline demo data and reseed the defaults."""
    if not store.repository.supports_reset:
        raise BadRequestException("Reset is only available in offline demo mode", code="RESET_UNSUPPORTED")
    if not await store.reset():
        raise ServiceUnavailableException()
    return success_response(
        {"checkin": store.current_record.model_dump() if store.current_record else None},
        message="Demo data reset",
    )
