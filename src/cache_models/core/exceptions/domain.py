"""Model-level exceptions for cache-models.

Raised by the model factory and the model registries when configuration
is incomplete or a requested model id is unknown.
"""

from typing import Any, Mapping, Optional

from .base import CacheModelsError


# Configuration Errors
class ConfigurationError(CacheModelsError):
    """Raised when configuration is missing or invalid."""
    pass


class CacheConfigurationError(ConfigurationError):
    """Raised when a caching or flushing model cannot be built from its properties."""
    
    def __init__(
        self,
        message: str,
        property_name: Optional[str] = None,
        properties: Optional[Mapping[str, Any]] = None,
        **kwargs
    ):
        snapshot = dict(properties) if properties is not None else {}
        details = {"property_name": property_name, "properties": snapshot}
        details.update(kwargs.pop("details", None) or {})
        super().__init__(message, details=details, **kwargs)
        self.property_name = property_name
        self.properties = snapshot


# Lookup Errors
class ModelNotFoundError(CacheModelsError):
    """Raised when no model is registered under the requested id."""
    
    model_kind = "model"
    
    def __init__(self, model_id: str, message: Optional[str] = None, **kwargs):
        super().__init__(
            message or f"No {self.model_kind} registered with id '{model_id}'",
            details={"model_id": model_id},
            **kwargs
        )
        self.model_id = model_id


class InvalidCachingModelError(ModelNotFoundError):
    """Raised when a caching model id is not registered."""
    
    model_kind = "caching model"


class InvalidFlushingModelError(ModelNotFoundError):
    """Raised when a flushing model id is not registered."""
    
    model_kind = "flushing model"
