import json
from typing import Any

from redis import asyncio as redis
from redis.exceptions import RedisError

from domain.exceptions.currency import CacheError
from infrastructure.cache.base import CacheStore


class RedisCache(CacheStore):
    """Shared cache backed by Redis. Expiry is enforced by Redis itself."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    @classmethod
    def from_url(cls, url: str) -> 'RedisCache':
        return cls(redis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> dict[str, Any] | None:
        try:
            data = await self.redis.get(key)
        except RedisError as e:
            raise CacheError(f'Redis get failed for {key}: {e}') from e

        if not data:
            return None

        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise CacheError(f'Invalid json data for {key}') from e

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        try:
            payload = json.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise CacheError(f'Cannot serialize value for {key}: {e}') from e

        try:
            await self.redis.setex(key, ttl_seconds, payload)
        except RedisError as e:
            raise CacheError(f'Redis set failed for {key}: {e}') from e

    async def close(self) -> None:
        await self.redis.aclose()
