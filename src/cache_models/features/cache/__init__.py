"""Cache feature for cache-models.

Feature-First layout:
- entities/: Caching and flushing models and the protocols the provider relies on
- services/: Model factory, model registries and the cache provider
- adapters/: In-memory and Redis cache engines
"""

# Models and protocols
from .entities.models import CachingModel, FlushingModel
from .entities.protocols import Model, CacheHandle, CacheResolver, ModelFactory

# Provider orchestration
from .services.model_factory import PropertiesModelFactory, get_required_property
from .services.model_registry import ModelRegistry
from .services.cache_provider import CacheProvider
from .services.provider_factory import create_cache_provider

# Engines
from .adapters.memory_adapter import MemoryCacheEngine, MemoryCacheHandle
from .adapters.redis_adapter import RedisCacheEngine, RedisCacheHandle

__all__ = [
    # Models and protocols
    "CachingModel",
    "FlushingModel",
    "Model",
    "CacheHandle",
    "CacheResolver",
    "ModelFactory",
    
    # Services
    "PropertiesModelFactory",
    "get_required_property",
    "ModelRegistry",
    "CacheProvider",
    "create_cache_provider",
    
    # Engines
    "MemoryCacheEngine",
    "MemoryCacheHandle",
    "RedisCacheEngine",
    "RedisCacheHandle",
]
