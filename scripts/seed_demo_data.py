#!/usr/bin/env python3
"""
Seed a week of demo check-ins for a user.

This script:
1. Creates a profile and an active goal if the user has none
2. Creates check-ins for the last 7 days where missing
3. Adds one activity per day where the day has none

Existing data is left alone, so it is safe to run repeatedly.

Usage:
    python scripts/seed_demo_data.py <user_id>

Environment variables required:
    MONGODB_URI - MongoDB connection string
    MONGODB_DATABASE - Database name (default: fittrack)
"""

import asyncio
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from common.database import MongoDB
from fittrack.tracking.remote_repository import RemoteCheckinRepository

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def seed(user_id: str) -> bool:
    """Seed demo data for one user."""
    mongodb_uri = os.getenv("MONGODB_URI")
    database_name = os.getenv("MONGODB_DATABASE", "fittrack")

    if not mongodb_uri:
        logger.error("MONGODB_URI environment variable not set")
        return False

    db = MongoDB()
    await db.connect(uri=mongodb_uri, database_name=database_name)
    try:
        repository = RemoteCheckinRepository(db.db)
        await repository.ensure_indexes()
        return await repository.seed_demo_data(user_id)
    finally:
        await db.disconnect()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/seed_demo_data.py <user_id>")
        sys.exit(1)

    ok = asyncio.run(seed(sys.argv[1]))
    sys.exit(0 if ok else 1)
