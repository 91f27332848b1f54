"""Exception hierarchy for cache-models."""

from .base import CacheModelsError, create_error_response
from .domain import (
    # Configuration Errors
    ConfigurationError,
    CacheConfigurationError,
    
    # Lookup Errors
    ModelNotFoundError,
    InvalidCachingModelError,
    InvalidFlushingModelError,
)
from .infrastructure import (
    # Cache Errors
    CacheError,
    CacheNotFoundError,
    CacheConnectionError,
    CacheSerializationError,
)

__all__ = [
    # Base
    "CacheModelsError",
    "create_error_response",
    
    # Configuration Errors
    "ConfigurationError",
    "CacheConfigurationError",
    
    # Lookup Errors
    "ModelNotFoundError",
    "InvalidCachingModelError",
    "InvalidFlushingModelError",
    
    # Cache Errors
    "CacheError",
    "CacheNotFoundError",
    "CacheConnectionError",
    "CacheSerializationError",
]
