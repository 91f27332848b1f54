"""cache-models - named caching and flushing models over pluggable cache engines.

Register caching models (how a named cache is configured) and flushing
models (which caches are flushed together), then resolve their ids to
cache handles from an in-memory or Redis engine.
"""

from .__version__ import __version__

from .config import CacheBackend, CacheSettings, get_settings, setup_logging

from .core.exceptions import (
    # Base Exception
    CacheModelsError,
    
    # Configuration Errors
    ConfigurationError,
    CacheConfigurationError,
    
    # Lookup Errors
    ModelNotFoundError,
    InvalidCachingModelError,
    InvalidFlushingModelError,
    
    # Cache Errors
    CacheError,
    CacheNotFoundError,
    CacheConnectionError,
)

from .features.cache import (
    CachingModel,
    FlushingModel,
    CacheHandle,
    CacheResolver,
    ModelFactory,
    PropertiesModelFactory,
    ModelRegistry,
    CacheProvider,
    create_cache_provider,
    MemoryCacheEngine,
    RedisCacheEngine,
)

__all__ = [
    "__version__",
    
    # Configuration
    "CacheBackend",
    "CacheSettings",
    "get_settings",
    "setup_logging",
    
    # Exceptions
    "CacheModelsError",
    "ConfigurationError",
    "CacheConfigurationError",
    "ModelNotFoundError",
    "InvalidCachingModelError",
    "InvalidFlushingModelError",
    "CacheError",
    "CacheNotFoundError",
    "CacheConnectionError",
    
    # Models and provider
    "CachingModel",
    "FlushingModel",
    "CacheHandle",
    "CacheResolver",
    "ModelFactory",
    "PropertiesModelFactory",
    "ModelRegistry",
    "CacheProvider",
    "create_cache_provider",
    
    # Engines
    "MemoryCacheEngine",
    "RedisCacheEngine",
]
