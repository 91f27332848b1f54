"""Cache protocols for cache-models.

This module defines the protocol interfaces the provider depends on:
models identified by an id, the opaque cache handle handed back to
callers, and the engine-specific seams (resolver and model factory).
"""

from abc import abstractmethod
from typing import (
    Protocol,
    runtime_checkable,
    Optional,
    Any,
    Mapping,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from .models import CachingModel, FlushingModel


@runtime_checkable
class Model(Protocol):
    """Anything registrable in a model registry."""
    
    @property
    @abstractmethod
    def id(self) -> str:
        """Get the model id."""
        ...


@runtime_checkable
class CacheHandle(Protocol):
    """Protocol for a resolved cache owned by a cache engine."""
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Get the cache name."""
        ...
    
    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get value by key, None when absent."""
        ...
    
    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store a value under key."""
        ...
    
    @abstractmethod
    def invalidate(self, key: str) -> None:
        """Remove a single key."""
        ...
    
    @abstractmethod
    def clear(self) -> None:
        """Remove every entry of this cache."""
        ...


@runtime_checkable
class CacheResolver(Protocol):
    """Protocol for the engine hook turning a caching model into a cache handle.
    
    Implementations must be deterministic: the same model configuration
    always yields the handle that configuration identifies.
    """
    
    @abstractmethod
    def resolve(self, caching_model: "CachingModel") -> CacheHandle:
        """Resolve the cache handle for a caching model."""
        ...


@runtime_checkable
class ModelFactory(Protocol):
    """Protocol for building models from configuration properties."""
    
    @abstractmethod
    def create_caching_model(self, model_id: str, properties: Mapping[str, str]) -> "CachingModel":
        """Create a caching model from properties."""
        ...
    
    @abstractmethod
    def create_flushing_model(self, model_id: str, properties: Mapping[str, str]) -> "FlushingModel":
        """Create a flushing model from properties."""
        ...
    
    @abstractmethod
    def caching_model_for_cache(self, cache_name: str) -> "CachingModel":
        """Create a caching model targeting a cache by name only."""
        ...
