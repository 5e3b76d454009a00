from .base import CacheStore
from .memory_cache import MemoryCache
from .redis_cache import RedisCache

__all__ = ['CacheStore', 'MemoryCache', 'RedisCache']
