"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across
multiple projects:

- database: Async MongoDB connection with Motor
- storage: Small persistent key-value stores (JSON file, in-memory)
- utils: Standard responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB, get_main_database, set_main_database
from common.storage import KeyValueStore, JsonFileKeyValueStore, InMemoryKeyValueStore
from common.utils import (
    success_response,
    error_response,
    list_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
    ServiceUnavailableException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    "get_main_database",
    "set_main_database",
    # Storage
    "KeyValueStore",
    "JsonFileKeyValueStore",
    "InMemoryKeyValueStore",
    # Utils
    "success_response",
    "error_response",
    "list_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
    "ServiceUnavailableException",
    # Config
    "BaseAppSettings",
]
