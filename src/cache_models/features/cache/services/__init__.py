"""Cache services - model factory, registries and provider."""

from .model_factory import PropertiesModelFactory, get_required_property, split_cache_names
from .model_registry import ModelRegistry
from .cache_provider import CacheProvider
from .provider_factory import create_cache_provider

__all__ = [
    "PropertiesModelFactory",
    "get_required_property",
    "split_cache_names",
    "ModelRegistry",
    "CacheProvider",
    "create_cache_provider",
]
