"""
Check-in tracking

Date-scoped check-in synchronization for the remote and offline
backends, chart aggregation, and the DataStore façade callers use.
"""

from fittrack.tracking.dates import DateIndex
from fittrack.tracking.chart import ChartAggregator
from fittrack.tracking.repository import CheckinRepository
from fittrack.tracking.remote_repository import RemoteCheckinRepository
from fittrack.tracking.offline_repository import OfflineCheckinRepository
from fittrack.tracking.data_store import DataStore
from fittrack.tracking.validation import ProfileValidator

__all__ = [
    "DateIndex",
    "ChartAggregator",
    "CheckinRepository",
    "RemoteCheckinRepository",
    "OfflineCheckinRepository",
    "DataStore",
    "ProfileValidator",
]
