"""
Database module - Generic async MongoDB connection using Motor.

Provides reusable MongoDB connectivity for any project.

Usage:
    from common.database import MongoDB, get_main_database

    # Set up singleton
    db = MongoDB()
    await db.connect(uri, database_name)
    set_main_database(db)

    # Access anywhere
    main_db = get_main_database()
    checkins = main_db.db["daily_checkins"]
"""

from common.database.mongodb import (
    MongoDB,
    # Singleton management
    set_main_database,
    get_main_database,
)

__all__ = [
    "MongoDB",
    # Singleton management
    "set_main_database",
    "get_main_database",
]
