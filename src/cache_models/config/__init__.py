"""Configuration for cache-models: settings and logging."""

from .settings import (
    CacheBackend,
    EvictionPolicy,
    CacheSettings,
    get_settings,
)
from .logging_config import (
    setup_logging,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Settings
    "CacheBackend",
    "EvictionPolicy",
    "CacheSettings",
    "get_settings",
    
    # Logging
    "setup_logging",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
