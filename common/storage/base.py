"""
Abstract key-value store interface.

Defines the contract for small persistent string stores used by
on-device style caches. Values are opaque strings; callers own the
serialization format.

Example:
    from common.storage import KeyValueStore, JsonFileKeyValueStore, InMemoryKeyValueStore

    def get_store(path: str) -> KeyValueStore:
        if path:
            return JsonFileKeyValueStore(path)
        return InMemoryKeyValueStore()
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional


class KeyValueStore(ABC):
    """
    Abstract persistent key-value store.

    All methods are async so file or network backed stores never block
    the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Storage key
            value: String to store
        """
        pass

    @abstractmethod
    async def remove(self, keys: Iterable[str]) -> None:
        """
        Remove several keys at once. Missing keys are ignored.

        Args:
            keys: Keys to delete
        """
        pass
