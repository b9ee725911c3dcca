"""
FastAPI dependencies for check-in tracking.

Selects the active repository once at startup and provides a
per-request DataStore bound to the calling user.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from common.utils.exceptions import BadRequestException, UnauthorizedException
from fittrack.config import Settings
from fittrack.tracking.data_store import DataStore
from fittrack.tracking.dates import DateIndex
from fittrack.tracking.offline_repository import OfflineCheckinRepository
from fittrack.tracking.remote_repository import RemoteCheckinRepository
from fittrack.tracking.repository import CheckinRepository

logger = logging.getLogger(__name__)


_repository: Optional[CheckinRepository] = None
_settings: Optional[Settings] = None
_date_index: DateIndex = DateIndex()


def create_local_store(settings: Settings) -> KeyValueStore:
    """Offline store from settings: a JSON file, or memory when no path is set."""
    if settings.LOCAL_STORE_PATH:
        return JsonFileKeyValueStore(settings.LOCAL_STORE_PATH)
    return InMemoryKeyValueStore()


def create_repository(
    settings: Settings,
    db: Optional[AsyncIOMotorDatabase] = None,
    store: Optional[KeyValueStore] = None,
) -> CheckinRepository:
    """
    Build the repository for the configured backend.

    Args:
        settings: Application settings (OFFLINE_DEMO picks the backend)
        db: MongoDB database, required for the remote backend
        store: Key-value store override for the offline backend

    Returns:
        The active CheckinRepository
    """
    if settings.OFFLINE_DEMO:
        logger.info("Using offline demo check-in backend")
        return OfflineCheckinRepository(store or create_local_store(settings), date_index=_date_index)

    if db is None:
        raise RuntimeError("A database is required when OFFLINE_DEMO is off")
    logger.info("Using remote check-in backend")
    return RemoteCheckinRepository(db, date_index=_date_index)


def init_tracking_services(repository: CheckinRepository, settings: Settings) -> None:
    """
    Register the active repository.

    Called once at application startup.
    """
    global _repository, _settings

    _repository = repository
    _settings = settings


def get_repository() -> CheckinRepository:
    """Get the active check-in repository."""
    if _repository is None:
        raise RuntimeError("Tracking services not initialized. Call init_tracking_services first.")
    return _repository


def get_settings() -> Settings:
    if _settings is None:
        raise RuntimeError("Tracking services not initialized. Call init_tracking_services first.")
    return _settings


async def require_user_id(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> Optional[str]:
    """
    Extract the caller-supplied user id.

    The offline backend ignores users, so the header is optional there.

    Raises:
        UnauthorizedException: Header missing while using the remote backend
    """
    user_id = request.headers.get(settings.USER_ID_HEADER)
    if user_id:
        return user_id.strip()
    if settings.OFFLINE_DEMO:
        return None
    raise UnauthorizedException(
        message=f"Missing {settings.USER_ID_HEADER} header",
        code="USER_ID_REQUIRED",
    )


async def get_data_store(
    user_id: Annotated[Optional[str], Depends(require_user_id)],
    repository: Annotated[CheckinRepository, Depends(get_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
    date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
) -> DataStore:
    """
    DataStore for this request, with the requested date selected.

    Raises:
        BadRequestException: Date malformed or in the future
    """
    store = DataStore(
        repository,
        user_id=user_id,
        date_index=_date_index,
        window_days=settings.CHART_WINDOW_DAYS,
    )
    if date:
        try:
            store.set_selected_date(date)
        except ValueError as e:
            raise BadRequestException(message=str(e), code="INVALID_DATE")
    return store
