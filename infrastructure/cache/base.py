from abc import ABC, abstractmethod
from typing import Any


class CacheStore(ABC):
    """Key/value store with a TTL fixed at write time."""

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        ...

    async def close(self) -> None:
        return None
