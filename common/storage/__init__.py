"""
Storage module - Pluggable local key-value stores (JSON file, in-memory).
"""

from common.storage.base import KeyValueStore
from common.storage.json_file import JsonFileKeyValueStore
from common.storage.memory import InMemoryKeyValueStore

__all__ = ["KeyValueStore", "JsonFileKeyValueStore", "InMemoryKeyValueStore"]
