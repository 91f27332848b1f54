"""Caching and flushing model entities."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


def _freeze(properties: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(properties))


@dataclass(frozen=True)
class CachingModel:
    """Named configuration describing how one cache is set up.
    
    ``properties`` keeps the insertion order of the configuration it was
    built from and is exposed read-only.
    """
    
    id: str
    properties: Mapping[str, str] = field(default_factory=dict)
    cache_name_property: str = field(default="cacheName", compare=False, repr=False)
    
    def __post_init__(self):
        object.__setattr__(self, "properties", _freeze(self.properties))
    
    @property
    def cache_name(self) -> str:
        """Name of the cache this model targets."""
        return self.properties.get(self.cache_name_property, self.id)
    
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a configuration value."""
        return self.properties.get(key, default)
    
    def __hash__(self) -> int:
        return hash((self.id, tuple(self.properties.items())))
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {"id": self.id, "properties": dict(self.properties)}


@dataclass(frozen=True)
class FlushingModel:
    """Named group of caches that are invalidated together."""
    
    id: str
    cache_names: Tuple[str, ...] = ()
    
    def __post_init__(self):
        object.__setattr__(self, "cache_names", tuple(self.cache_names))
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {"id": self.id, "cache_names": list(self.cache_names)}
