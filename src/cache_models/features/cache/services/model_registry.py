"""Id-keyed model registry with copy-on-write snapshots."""

import logging
import threading
from types import MappingProxyType
from typing import Generic, List, Mapping, Type, TypeVar

from ..entities.protocols import Model
from ....core.exceptions import ModelNotFoundError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Model)


class ModelRegistry(Generic[M]):
    """Mapping from model id to model for one kind of model.
    
    Writers serialize on a lock and publish a fresh read-only snapshot
    with a single reference assignment. Readers never take the lock, so
    a lookup sees either the snapshot before an ``add`` or the one after
    it, never a partial update.
    """
    
    def __init__(self, not_found_error: Type[ModelNotFoundError] = ModelNotFoundError):
        self._not_found_error = not_found_error
        self._lock = threading.Lock()
        self._snapshot: Mapping[str, M] = MappingProxyType({})
    
    def add(self, model: M) -> None:
        """Insert a model, replacing any model with the same id."""
        with self._lock:
            entries = dict(self._snapshot)
            replaced = model.id in entries
            entries[model.id] = model
            self._snapshot = MappingProxyType(entries)
        
        if replaced:
            logger.debug(f"Replaced model '{model.id}'")
        else:
            logger.debug(f"Registered model '{model.id}'")
    
    def add_all(self, models: List[M]) -> None:
        """Insert several models as one snapshot swap."""
        with self._lock:
            entries = dict(self._snapshot)
            for model in models:
                entries[model.id] = model
            self._snapshot = MappingProxyType(entries)
        
        logger.debug(f"Registered {len(models)} models")
    
    def get(self, model_id: str) -> M:
        """Get a model by id.
        
        Raises:
            ModelNotFoundError: If no model is registered under the id
        """
        model = self._snapshot.get(model_id)
        if model is None:
            raise self._not_found_error(model_id)
        return model
    
    def snapshot(self) -> Mapping[str, M]:
        """Get the current read-only view of all models."""
        return self._snapshot
    
    def ids(self) -> List[str]:
        """Get registered ids in sorted order."""
        return sorted(self._snapshot)
    
    def __contains__(self, model_id: object) -> bool:
        return model_id in self._snapshot
    
    def __len__(self) -> int:
        return len(self._snapshot)
