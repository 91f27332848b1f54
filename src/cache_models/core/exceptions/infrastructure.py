"""Infrastructure-specific exceptions for cache-models.

This module defines exceptions raised by cache engine integrations.
The cache provider never wraps or interprets these; they reach the
caller exactly as the engine raised them.
"""

from .base import CacheModelsError


# Cache Errors
class CacheError(CacheModelsError):
    """Base class for cache engine errors."""
    pass


class CacheNotFoundError(CacheError):
    """Raised when the engine has no cache with the requested name."""
    
    def __init__(self, cache_name: str, **kwargs):
        super().__init__(
            f"Cache '{cache_name}' does not exist and missing caches are not created",
            details={"cache_name": cache_name},
            **kwargs
        )
        self.cache_name = cache_name


class CacheConnectionError(CacheError):
    """Raised when the cache backend cannot be reached."""
    pass


class CacheSerializationError(CacheError):
    """Raised when a cache value cannot be serialized or deserialized."""
    pass
