"""
FitTrack application settings.

Extends the base settings with check-in tracking configuration.
"""

from typing import Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """FitTrack-specific settings."""

    # ==========================================================================
    # Backend Selection
    # ==========================================================================
    # Read once at startup; True swaps MongoDB for the local demo store
    OFFLINE_DEMO: bool = False

    # JSON file for the offline store; empty keeps it in memory
    LOCAL_STORE_PATH: Optional[str] = "~/.fittrack/offline_demo.json"

    # ==========================================================================
    # Check-in Settings
    # ==========================================================================
    CHART_WINDOW_DAYS: int = 7

    # Header carrying the caller-supplied user identifier
    USER_ID_HEADER: str = "X-User-Id"


# Global settings instance
settings = Settings()
