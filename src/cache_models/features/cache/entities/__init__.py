"""Cache entities - models and protocols."""

from .models import CachingModel, FlushingModel
from .protocols import Model, CacheHandle, CacheResolver, ModelFactory

__all__ = [
    "CachingModel",
    "FlushingModel",
    "Model",
    "CacheHandle",
    "CacheResolver",
    "ModelFactory",
]
