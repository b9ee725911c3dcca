"""
In-memory key-value store.

Non-persistent; useful for ephemeral demo sessions and tests.
"""

from typing import Dict, Iterable, Optional

from common.storage.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed KeyValueStore."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)
