"""
FitTrack API Routers.

All routers are imported here for easy access.
"""

from fittrack.routers.checkin import router as checkin_router
from fittrack.routers.dashboard import router as dashboard_router
from fittrack.routers.profile import router as profile_router
from fittrack.routers.demo import router as demo_router

__all__ = [
    "checkin_router",
    "dashboard_router",
    "profile_router",
    "demo_router",
]
