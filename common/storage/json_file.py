"""
JSON file backed key-value store.

Persists all keys in a single JSON object on disk. Writes go to a
temporary file first and are then atomically moved into place, so a
crash mid-write never leaves a half-written store behind.

Example:
    from common.storage import JsonFileKeyValueStore

    store = JsonFileKeyValueStore("~/.fittrack/offline.json")
    await store.set("greeting", "hello")
    print(await store.get("greeting"))
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional

from common.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    KeyValueStore persisted to a JSON file.

    File I/O runs in a worker thread. An asyncio lock serializes
    read-modify-write cycles within one event loop.
    """

    def __init__(self, path: str):
        """
        Initialize JsonFileKeyValueStore.

        Args:
            path: File path; parent directories are created on first write
        """
        self._path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data[key] = value
            await asyncio.to_thread(self._write, data)

    async def remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            for key in keys:
                data.pop(key, None)
            await asyncio.to_thread(self._write, data)
        logger.debug(f"Removed {len(keys)} keys from {self._path}")

    def _read(self) -> Dict[str, str]:
        """Load the whole store. A missing or unreadable file is an empty store."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read key-value store {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Key-value store {self._path} is not a JSON object, ignoring")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self._path)
