"""Model factory building caching and flushing models from properties."""

import logging
from typing import Callable, Iterable, List, Mapping, Optional

from ..entities.models import CachingModel, FlushingModel
from ....config.settings import CacheSettings
from ....core.exceptions import CacheConfigurationError

logger = logging.getLogger(__name__)

PropertiesValidator = Callable[[str, Mapping[str, str]], None]


def get_required_property(properties: Mapping[str, str], property_name: str) -> str:
    """Get a property that must be present.
    
    Args:
        properties: Model configuration properties
        property_name: Key that must be present
        
    Returns:
        The property value
        
    Raises:
        CacheConfigurationError: If the key is absent, carrying the key and
            a snapshot of the properties
    """
    value = properties.get(property_name)
    if value is None:
        raise CacheConfigurationError(
            f"Required property {property_name} not found in {dict(properties)}",
            property_name=property_name,
            properties=properties
        )
    return value


def split_cache_names(value: str, separator: str = ",") -> List[str]:
    """Split a delimited cache name list, dropping blanks."""
    return [name.strip() for name in value.split(separator) if name.strip()]


class PropertiesModelFactory:
    """Builds models from flat string properties.
    
    Caching models require the cache name property, flushing models
    require the cache names property. Engine integrations add their own
    checks through ``caching_validators``; each validator receives the
    model id and properties and raises ``CacheConfigurationError``.
    """
    
    def __init__(self,
                 cache_name_property: str = "cacheName",
                 cache_names_property: str = "cacheNames",
                 cache_names_separator: str = ",",
                 caching_validators: Optional[Iterable[PropertiesValidator]] = None):
        self.cache_name_property = cache_name_property
        self.cache_names_property = cache_names_property
        self.cache_names_separator = cache_names_separator
        self.caching_validators = list(caching_validators or [])
    
    @classmethod
    def from_settings(cls,
                      settings: CacheSettings,
                      caching_validators: Optional[Iterable[PropertiesValidator]] = None) -> "PropertiesModelFactory":
        """Create a factory using the property names from settings."""
        return cls(
            cache_name_property=settings.cache_name_property,
            cache_names_property=settings.cache_names_property,
            cache_names_separator=settings.cache_names_separator,
            caching_validators=caching_validators,
        )
    
    def create_caching_model(self, model_id: str, properties: Mapping[str, str]) -> CachingModel:
        """Create a caching model initialized with the specified properties."""
        properties = self._normalize(model_id, properties)
        get_required_property(properties, self.cache_name_property)
        
        for validator in self.caching_validators:
            validator(model_id, properties)
        
        return CachingModel(
            id=model_id,
            properties=properties,
            cache_name_property=self.cache_name_property
        )
    
    def create_flushing_model(self, model_id: str, properties: Mapping[str, str]) -> FlushingModel:
        """Create a flushing model initialized with the specified properties."""
        properties = self._normalize(model_id, properties)
        raw_names = get_required_property(properties, self.cache_names_property)
        
        cache_names = split_cache_names(raw_names, self.cache_names_separator)
        if not cache_names:
            raise CacheConfigurationError(
                f"Property {self.cache_names_property} of flushing model '{model_id}' names no caches",
                property_name=self.cache_names_property,
                properties=properties
            )
        
        return FlushingModel(id=model_id, cache_names=tuple(cache_names))
    
    def caching_model_for_cache(self, cache_name: str) -> CachingModel:
        """Create a caching model that targets a cache by name only."""
        return self.create_caching_model(cache_name, {self.cache_name_property: cache_name})
    
    def _normalize(self, model_id: str, properties: Mapping[str, str]) -> dict:
        """Validate the id and coerce properties to an ordered str mapping."""
        if not isinstance(model_id, str) or not model_id.strip():
            raise CacheConfigurationError(
                f"Model id must be a non-empty string, got {model_id!r}",
                properties=properties or {}
            )
        
        # None values count as absent
        return {
            str(key): str(value)
            for key, value in (properties or {}).items()
            if value is not None
        }
