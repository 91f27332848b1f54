"""Redis cache engine for cache-models."""

import json
import logging
import threading
from typing import Any, Dict, Optional, Tuple

import redis
from redis.exceptions import RedisError

from ..entities.models import CachingModel
from .options import TIME_TO_LIVE_PROPERTY, parse_int_option
from ....config.settings import CacheSettings
from ....core.exceptions import (
    CacheConnectionError,
    CacheSerializationError,
)

logger = logging.getLogger(__name__)


class RedisCacheHandle:
    """Cache handle storing JSON values under a per-cache key namespace."""
    
    def __init__(self,
                 redis_client: redis.Redis,
                 name: str,
                 key_prefix: str = "cache",
                 ttl_seconds: int = 0,
                 scan_count: int = 500):
        self.redis_client = redis_client
        self._name = name
        self.namespace = f"{key_prefix}:{name}" if key_prefix else name
        self.ttl_seconds = ttl_seconds
        self.scan_count = scan_count
    
    @property
    def name(self) -> str:
        return self._name
    
    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"
    
    def get(self, key: str) -> Optional[Any]:
        """Get value by key, None when absent."""
        try:
            raw = self.redis_client.get(self._key(key))
        except RedisError as e:
            raise CacheConnectionError(
                f"Failed to get key {key} from cache '{self._name}': {e}",
                details={"cache_name": self._name, "key": key}
            ) from e
        
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(
                f"Failed to deserialize key {key} of cache '{self._name}': {e}",
                details={"cache_name": self._name, "key": key}
            ) from e
    
    def put(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value, with the cache TTL as expiry."""
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(
                f"Failed to serialize value for key {key} of cache '{self._name}': {e}",
                details={"cache_name": self._name, "key": key}
            ) from e
        
        try:
            self.redis_client.set(self._key(key), payload, ex=self.ttl_seconds or None)
        except RedisError as e:
            raise CacheConnectionError(
                f"Failed to set key {key} in cache '{self._name}': {e}",
                details={"cache_name": self._name, "key": key}
            ) from e
    
    def invalidate(self, key: str) -> None:
        """Remove a single key."""
        try:
            self.redis_client.delete(self._key(key))
        except RedisError as e:
            raise CacheConnectionError(
                f"Failed to delete key {key} from cache '{self._name}': {e}",
                details={"cache_name": self._name, "key": key}
            ) from e
    
    def clear(self) -> None:
        """Delete every key in this cache's namespace."""
        deleted = 0
        try:
            batch = []
            for key in self.redis_client.scan_iter(match=f"{self.namespace}:*", count=self.scan_count):
                batch.append(key)
                if len(batch) >= self.scan_count:
                    deleted += self.redis_client.delete(*batch)
                    batch = []
            if batch:
                deleted += self.redis_client.delete(*batch)
        except RedisError as e:
            raise CacheConnectionError(
                f"Failed to clear cache '{self._name}': {e}",
                details={"cache_name": self._name}
            ) from e
        
        logger.debug(f"Cleared {deleted} keys from redis cache '{self._name}'")


class RedisCacheEngine:
    """Resolver handing out Redis-backed caches sharing one client.
    
    Handles are lightweight views over the client and are reused per
    cache name and TTL. Resolution performs no I/O; connection failures
    surface on the first cache operation.
    """
    
    def __init__(self,
                 redis_client: redis.Redis,
                 key_prefix: str = "cache",
                 default_ttl_seconds: int = 0):
        self.redis_client = redis_client
        self.key_prefix = key_prefix
        self.default_ttl_seconds = default_ttl_seconds
        
        self._handles: Dict[Tuple[str, int], RedisCacheHandle] = {}
        self._lock = threading.Lock()
    
    @classmethod
    def from_settings(cls,
                      settings: CacheSettings,
                      redis_client: Optional[redis.Redis] = None) -> "RedisCacheEngine":
        """Create an engine from settings, building a client when none is given."""
        if redis_client is None:
            redis_client = redis.Redis.from_url(
                settings.redis_url,
                socket_timeout=settings.redis_socket_timeout,
                socket_connect_timeout=settings.redis_connect_timeout,
            )
        return cls(
            redis_client,
            key_prefix=settings.redis_key_prefix,
            default_ttl_seconds=settings.default_ttl_seconds,
        )
    
    def resolve(self, caching_model: CachingModel) -> RedisCacheHandle:
        """Get the cache named by a caching model."""
        ttl_seconds = parse_int_option(
            caching_model.id, caching_model.properties, TIME_TO_LIVE_PROPERTY, 0
        )
        if ttl_seconds is None:
            ttl_seconds = self.default_ttl_seconds
        
        handle_key = (caching_model.cache_name, ttl_seconds)
        with self._lock:
            handle = self._handles.get(handle_key)
            if handle is None:
                handle = RedisCacheHandle(
                    self.redis_client,
                    caching_model.cache_name,
                    key_prefix=self.key_prefix,
                    ttl_seconds=ttl_seconds,
                )
                self._handles[handle_key] = handle
            return handle
    
    def health_check(self) -> bool:
        """Check Redis connectivity."""
        try:
            return bool(self.redis_client.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False
