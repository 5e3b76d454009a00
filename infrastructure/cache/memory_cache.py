import asyncio
import time
from collections import OrderedDict
from typing import Any

from infrastructure.cache.base import CacheStore


class MemoryCache(CacheStore):
    """In-process LRU cache with per-entry expiry checked on read."""

    def __init__(self, max_entries: int = 5000, clock=time.monotonic):
        if max_entries <= 0:
            raise ValueError('max_entries must be positive')
        self.max_entries = max_entries
        self._clock = clock
        self._data: OrderedDict[str, tuple[float, dict[str, Any]]] = OrderedDict()
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> dict[str, Any] | None:
        async with self._lock:
            item = self._data.get(key)
            if item is None:
                return None

            expires_at, value = item
            if self._clock() >= expires_at:
                del self._data[key]
                return None

            self._data.move_to_end(key)
            return value

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        async with self._lock:
            self._data[key] = (self._clock() + ttl_seconds, value)
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                self._data.popitem(last=False)

    def __len__(self) -> int:
        return len(self._data)
