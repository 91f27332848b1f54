"""Wiring a cache provider to the engine selected in settings."""

import logging
from typing import Any, Optional

from .cache_provider import CacheProvider
from .model_factory import PropertiesModelFactory
from ..adapters.memory_adapter import MemoryCacheEngine
from ..adapters.options import validate_caching_options
from ..adapters.redis_adapter import RedisCacheEngine
from ....config.settings import CacheBackend, CacheSettings, get_settings
from ....core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_cache_provider(settings: Optional[CacheSettings] = None,
                          redis_client: Optional[Any] = None,
                          **overrides: Any) -> CacheProvider:
    """Create a cache provider for the configured backend.
    
    Args:
        settings: Settings to use, the process-wide settings when omitted
        redis_client: Existing Redis client for the redis backend
        **overrides: Settings fields to override
        
    Returns:
        A provider with an empty model registry
    """
    settings = settings or get_settings()
    if overrides:
        settings = CacheSettings(**{**settings.model_dump(), **overrides})
    
    factory = PropertiesModelFactory.from_settings(
        settings, caching_validators=[validate_caching_options]
    )
    
    if settings.backend == CacheBackend.MEMORY:
        resolver = MemoryCacheEngine.from_settings(settings)
    elif settings.backend == CacheBackend.REDIS:
        resolver = RedisCacheEngine.from_settings(settings, redis_client=redis_client)
    else:
        raise ConfigurationError(f"Unsupported cache backend: {settings.backend}")
    
    logger.info(f"Created cache provider with {settings.backend.value} backend")
    return CacheProvider(resolver, factory=factory)
