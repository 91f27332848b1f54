"""Cache engine adapters (in-memory and Redis)."""

from .memory_adapter import MemoryCacheEngine, MemoryCacheHandle
from .redis_adapter import RedisCacheEngine, RedisCacheHandle

__all__ = [
    "MemoryCacheEngine",
    "MemoryCacheHandle",
    "RedisCacheEngine",
    "RedisCacheHandle",
]
