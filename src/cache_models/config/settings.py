"""Settings for cache-models.

Values come from the environment (prefix ``CACHE_MODELS_``) or a ``.env``
file, and can be overridden with keyword arguments.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheBackend(str, Enum):
    """Supported cache engine backends."""
    MEMORY = "memory"
    REDIS = "redis"


class EvictionPolicy(str, Enum):
    """Eviction policies understood by the in-memory engine."""
    LRU = "lru"
    LFU = "lfu"


class CacheSettings(BaseSettings):
    """Global cache-models settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="CACHE_MODELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Engine selection
    backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache engine backend")
    
    # Model property names
    cache_name_property: str = Field(default="cacheName", description="Caching model key naming the target cache")
    cache_names_property: str = Field(default="cacheNames", description="Flushing model key listing caches to flush")
    cache_names_separator: str = Field(default=",", description="Separator between cache names")
    
    # Cache defaults
    default_ttl_seconds: int = Field(default=0, ge=0, description="Default TTL in seconds, 0 disables expiry")
    memory_max_size: int = Field(default=1000, ge=1, description="Default max entries per in-memory cache")
    default_eviction_policy: EvictionPolicy = Field(default=EvictionPolicy.LRU, description="Default eviction policy")
    create_missing_caches: bool = Field(default=True, description="Create caches on first resolution")
    
    # Redis configuration
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    redis_key_prefix: str = Field(default="cache", description="Prefix for all Redis keys")
    redis_socket_timeout: float = Field(default=3.0, gt=0, description="Redis command timeout")
    redis_connect_timeout: float = Field(default=5.0, gt=0, description="Redis connection timeout")
    
    @field_validator("cache_name_property", "cache_names_property")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Property names must not be blank."""
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v
    
    @field_validator("cache_names_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Separators may be whitespace but not empty."""
        if not v:
            raise ValueError("must not be empty")
        return v
    
    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        """Validate Redis URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(f"Invalid Redis URL: {v}. Expected redis://, rediss:// or unix://")
        return v


@lru_cache()
def get_settings() -> CacheSettings:
    """Get cached settings instance."""
    return CacheSettings()
