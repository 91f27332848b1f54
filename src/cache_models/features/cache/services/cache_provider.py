"""Cache provider resolving caching and flushing model ids to cache handles."""

import logging
from typing import Dict, List, Mapping, Optional, Tuple, Union

from ..entities.models import CachingModel, FlushingModel
from ..entities.protocols import CacheHandle, CacheResolver, ModelFactory
from .model_factory import PropertiesModelFactory
from .model_registry import ModelRegistry
from ....core.exceptions import InvalidCachingModelError, InvalidFlushingModelError

logger = logging.getLogger(__name__)


class CacheProvider:
    """Registry of caching and flushing models in front of a cache engine.
    
    The engine is plugged in through ``resolver``, which turns a caching
    model into a cache handle. ``factory`` builds models from raw
    configuration properties and defaults to ``PropertiesModelFactory``.
    Errors raised by the resolver reach the caller unchanged.
    """
    
    def __init__(self,
                 resolver: CacheResolver,
                 factory: Optional[ModelFactory] = None):
        self.resolver = resolver
        self.factory = factory or PropertiesModelFactory()
        self._caching_models: ModelRegistry[CachingModel] = ModelRegistry(InvalidCachingModelError)
        self._flushing_models: ModelRegistry[FlushingModel] = ModelRegistry(InvalidFlushingModelError)
    
    # Registration
    
    def add_caching_model(self,
                          model: Union[CachingModel, str],
                          properties: Optional[Mapping[str, str]] = None) -> CachingModel:
        """Register a caching model.
        
        Accepts either a built ``CachingModel`` or a model id together with
        its configuration properties. Malformed properties raise
        ``CacheConfigurationError`` and nothing is registered.
        """
        if not isinstance(model, CachingModel):
            model = self.factory.create_caching_model(model, properties or {})
        self._caching_models.add(model)
        return model
    
    def add_flushing_model(self,
                           model: Union[FlushingModel, str],
                           properties: Optional[Mapping[str, str]] = None) -> FlushingModel:
        """Register a flushing model.
        
        Accepts either a built ``FlushingModel`` or a model id together with
        its configuration properties.
        """
        if not isinstance(model, FlushingModel):
            model = self.factory.create_flushing_model(model, properties or {})
        self._flushing_models.add(model)
        return model
    
    def register_models(self,
                        caching_models: Optional[Mapping[str, Mapping[str, str]]] = None,
                        flushing_models: Optional[Mapping[str, Mapping[str, str]]] = None) -> None:
        """Register models from ``{id: properties}`` definitions.
        
        Every model is built before any is registered, so one malformed
        definition leaves both registries untouched.
        """
        built_caching = [
            self.factory.create_caching_model(model_id, properties)
            for model_id, properties in (caching_models or {}).items()
        ]
        built_flushing = [
            self.factory.create_flushing_model(model_id, properties)
            for model_id, properties in (flushing_models or {}).items()
        ]
        
        self._caching_models.add_all(built_caching)
        self._flushing_models.add_all(built_flushing)
        logger.info(
            f"Registered {len(built_caching)} caching models and {len(built_flushing)} flushing models"
        )
    
    # Lookup
    
    def get_caching_model(self, caching_model_id: str) -> CachingModel:
        """Get a registered caching model.
        
        Raises:
            InvalidCachingModelError: If the id is not registered
        """
        return self._caching_models.get(caching_model_id)
    
    def get_flushing_model(self, flushing_model_id: str) -> FlushingModel:
        """Get a registered flushing model.
        
        Raises:
            InvalidFlushingModelError: If the id is not registered
        """
        return self._flushing_models.get(flushing_model_id)
    
    def has_caching_model(self, caching_model_id: str) -> bool:
        return caching_model_id in self._caching_models
    
    def has_flushing_model(self, flushing_model_id: str) -> bool:
        return flushing_model_id in self._flushing_models
    
    def caching_model_ids(self) -> List[str]:
        return self._caching_models.ids()
    
    def flushing_model_ids(self) -> List[str]:
        return self._flushing_models.ids()
    
    # Resolution
    
    def get_cache(self, caching_model_id: str) -> CacheHandle:
        """Get the cache for a caching model id.
        
        Raises:
            InvalidCachingModelError: If the id is not registered
        """
        caching_model = self._caching_models.get(caching_model_id)
        return self.resolver.resolve(caching_model)
    
    def get_caches(self, flushing_model_id: str) -> Tuple[CacheHandle, ...]:
        """Get the caches named by a flushing model, in declared order.
        
        Each entry is a cache name. It resolves through the registered
        caching model targeting that cache, so the cache gets that model's
        configuration; when several models target it, the one whose id
        equals the cache name wins, then the lowest id. A name no
        registered model targets resolves through a model built for the
        bare cache name. If any resolution fails the whole call fails and
        no handles are returned.
        
        Raises:
            InvalidFlushingModelError: If the id is not registered
        """
        flushing_model = self._flushing_models.get(flushing_model_id)
        caching_models = self._models_by_cache_name()
        
        handles: List[CacheHandle] = []
        for cache_name in flushing_model.cache_names:
            caching_model = caching_models.get(cache_name)
            if caching_model is None:
                caching_model = self.factory.caching_model_for_cache(cache_name)
            handles.append(self.resolver.resolve(caching_model))
        
        return tuple(handles)
    
    def flush(self, flushing_model_id: str) -> int:
        """Clear every cache named by a flushing model.
        
        All caches are resolved before the first one is cleared.
        
        Returns:
            Number of caches cleared
        """
        handles = self.get_caches(flushing_model_id)
        for handle in handles:
            handle.clear()
        
        logger.debug(f"Flushed {len(handles)} caches for flushing model '{flushing_model_id}'")
        return len(handles)
    
    def _models_by_cache_name(self) -> Dict[str, CachingModel]:
        """Index one registry snapshot by the cache each model targets."""
        by_cache_name: Dict[str, CachingModel] = {}
        for model_id, model in sorted(self._caching_models.snapshot().items()):
            current = by_cache_name.get(model.cache_name)
            if current is None or (model_id == model.cache_name and current.id != current.cache_name):
                by_cache_name[model.cache_name] = model
        return by_cache_name
