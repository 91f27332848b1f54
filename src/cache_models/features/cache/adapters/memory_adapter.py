"""In-memory cache engine for cache-models."""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..entities.models import CachingModel
from .options import (
    MAX_ELEMENTS_PROPERTY,
    TIME_TO_LIVE_PROPERTY,
    parse_eviction_policy,
    parse_int_option,
)
from ....config.settings import CacheSettings, EvictionPolicy
from ....core.exceptions import CacheNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with metadata."""
    value: Any
    expires_at: Optional[float] = None
    access_count: int = 0
    
    @property
    def is_expired(self) -> bool:
        """Check if entry is expired."""
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at
    
    def access(self) -> None:
        """Record access to this entry."""
        self.access_count += 1


class MemoryCacheHandle:
    """Thread-safe in-memory cache with TTL and LRU or LFU eviction."""
    
    def __init__(self,
                 name: str,
                 max_size: int = 1000,
                 ttl_seconds: int = 0,
                 eviction_policy: EvictionPolicy = EvictionPolicy.LRU):
        self._name = name
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.eviction_policy = EvictionPolicy(eviction_policy)
        
        self._store: "OrderedDict[str, MemoryCacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0, "puts": 0, "evictions": 0}
    
    @property
    def name(self) -> str:
        return self._name
    
    def get(self, key: str) -> Optional[Any]:
        """Get value by key, None when absent or expired."""
        with self._lock:
            entry = self._store.get(key)
            
            if entry is None or entry.is_expired:
                if entry is not None:
                    del self._store[key]
                self._stats["misses"] += 1
                return None
            
            entry.access()
            self._store.move_to_end(key)
            self._stats["hits"] += 1
            return entry.value
    
    def put(self, key: str, value: Any) -> None:
        """Store value, evicting one entry when the cache is full."""
        expires_at = time.time() + self.ttl_seconds if self.ttl_seconds > 0 else None
        
        with self._lock:
            self._store.pop(key, None)
            while len(self._store) >= self.max_size:
                self._evict_one()
            
            self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)
            self._stats["puts"] += 1
    
    def invalidate(self, key: str) -> None:
        """Remove a single key."""
        with self._lock:
            self._store.pop(key, None)
    
    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._store.clear()
        logger.debug(f"Cleared memory cache '{self._name}'")
    
    def size(self) -> int:
        """Get number of live entries."""
        with self._lock:
            self._cleanup_expired()
            return len(self._store)
    
    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / total_requests) if total_requests > 0 else 0.0
            
            return {
                "name": self._name,
                "total_hits": self._stats["hits"],
                "total_misses": self._stats["misses"],
                "total_puts": self._stats["puts"],
                "total_evictions": self._stats["evictions"],
                "hit_rate": hit_rate,
                "entries": len(self._store),
                "max_entries": self.max_size,
                "eviction_policy": self.eviction_policy.value,
            }
    
    def _evict_one(self) -> None:
        """Evict one entry based on policy. Caller holds the lock."""
        if not self._store:
            return
        
        if self.eviction_policy == EvictionPolicy.LFU:
            key = min(self._store, key=lambda k: self._store[k].access_count)
        else:
            # Least recently used sits first
            key = next(iter(self._store))
        
        del self._store[key]
        self._stats["evictions"] += 1
    
    def _cleanup_expired(self) -> None:
        """Remove all expired entries. Caller holds the lock."""
        expired_keys = [key for key, entry in self._store.items() if entry.is_expired]
        for key in expired_keys:
            del self._store[key]


class MemoryCacheEngine:
    """Resolver backed by process-local memory caches.
    
    Caches are keyed by cache name. The first caching model resolving a
    name decides that cache's size, TTL and eviction policy; later models
    targeting the same name share the existing cache.
    """
    
    def __init__(self,
                 default_max_size: int = 1000,
                 default_ttl_seconds: int = 0,
                 default_eviction_policy: EvictionPolicy = EvictionPolicy.LRU,
                 create_missing_caches: bool = True):
        self.default_max_size = default_max_size
        self.default_ttl_seconds = default_ttl_seconds
        self.default_eviction_policy = EvictionPolicy(default_eviction_policy)
        self.create_missing_caches = create_missing_caches
        
        self._caches: Dict[str, MemoryCacheHandle] = {}
        self._lock = threading.Lock()
    
    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "MemoryCacheEngine":
        """Create an engine from settings."""
        return cls(
            default_max_size=settings.memory_max_size,
            default_ttl_seconds=settings.default_ttl_seconds,
            default_eviction_policy=settings.default_eviction_policy,
            create_missing_caches=settings.create_missing_caches,
        )
    
    def declare_cache(self,
                      name: str,
                      max_size: Optional[int] = None,
                      ttl_seconds: Optional[int] = None,
                      eviction_policy: Optional[EvictionPolicy] = None) -> MemoryCacheHandle:
        """Create a cache up front, returning the existing one if already present."""
        with self._lock:
            handle = self._caches.get(name)
            if handle is None:
                handle = MemoryCacheHandle(
                    name,
                    max_size=max_size or self.default_max_size,
                    ttl_seconds=self.default_ttl_seconds if ttl_seconds is None else ttl_seconds,
                    eviction_policy=eviction_policy or self.default_eviction_policy,
                )
                self._caches[name] = handle
                logger.info(f"Created memory cache '{name}' with max_size={handle.max_size}")
            return handle
    
    def resolve(self, caching_model: CachingModel) -> MemoryCacheHandle:
        """Get or create the cache named by a caching model.
        
        Raises:
            CacheNotFoundError: If the cache does not exist and missing
                caches are not created
        """
        name = caching_model.cache_name
        handle = self._caches.get(name)
        if handle is not None:
            return handle
        
        if not self.create_missing_caches:
            raise CacheNotFoundError(name)
        
        model_id, properties = caching_model.id, caching_model.properties
        return self.declare_cache(
            name,
            max_size=parse_int_option(model_id, properties, MAX_ELEMENTS_PROPERTY, 1),
            ttl_seconds=parse_int_option(model_id, properties, TIME_TO_LIVE_PROPERTY, 0),
            eviction_policy=parse_eviction_policy(model_id, properties),
        )
    
    def cache_names(self) -> List[str]:
        """Get names of all existing caches."""
        with self._lock:
            return sorted(self._caches)
