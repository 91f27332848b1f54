"""Pytest configuration and fixtures for cache-models tests."""

import threading
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from cache_models.config.settings import get_settings
from cache_models.features.cache.entities.models import CachingModel, FlushingModel
from cache_models.features.cache.services.cache_provider import CacheProvider
from cache_models.features.cache.services.model_factory import PropertiesModelFactory


class StubCacheHandle:
    """Dictionary-backed cache handle for provider tests."""
    
    def __init__(self, name: str, properties: Optional[Dict[str, str]] = None):
        self._name = name
        self.properties = dict(properties or {})
        self.data: Dict[str, Any] = {}
        self.clear_count = 0
    
    @property
    def name(self) -> str:
        return self._name
    
    def get(self, key: str) -> Optional[Any]:
        return self.data.get(key)
    
    def put(self, key: str, value: Any) -> None:
        self.data[key] = value
    
    def invalidate(self, key: str) -> None:
        self.data.pop(key, None)
    
    def clear(self) -> None:
        self.data.clear()
        self.clear_count += 1


class RecordingResolver:
    """Resolver returning one stub handle per cache name and recording calls.
    
    Cache names listed in ``failing`` raise ``error`` instead.
    """
    
    def __init__(self, failing: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.failing = set(failing or [])
        self.error = error or ConnectionError("cache backend unreachable")
        self.calls: List[CachingModel] = []
        self.handles: Dict[str, StubCacheHandle] = {}
        self._lock = threading.Lock()
    
    def resolve(self, caching_model: CachingModel) -> StubCacheHandle:
        with self._lock:
            self.calls.append(caching_model)
            if caching_model.cache_name in self.failing:
                raise self.error
            handle = self.handles.get(caching_model.cache_name)
            if handle is None:
                handle = StubCacheHandle(caching_model.cache_name, dict(caching_model.properties))
                self.handles[caching_model.cache_name] = handle
            return handle


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate tests from the process environment and cached settings."""
    for name in ("CACHE_MODELS_BACKEND", "CACHE_MODELS_DEFAULT_TTL_SECONDS",
                 "CACHE_MODELS_CREATE_MISSING_CACHES", "LOG_LEVEL", "LOG_VERBOSITY", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_resolver():
    """Factory for recording resolvers with failing cache names."""
    return RecordingResolver


@pytest.fixture
def resolver():
    """Recording resolver."""
    return RecordingResolver()


@pytest.fixture
def redis_client():
    """Mock Redis client."""
    client = MagicMock()
    client.get.return_value = None
    client.delete.side_effect = lambda *keys: len(keys)
    return client


@pytest.fixture
def factory():
    """Default properties model factory."""
    return PropertiesModelFactory()


@pytest.fixture
def provider(resolver, factory):
    """Cache provider wired to the recording resolver."""
    return CacheProvider(resolver, factory=factory)


@pytest.fixture
def sample_caching_model():
    """Sample caching model for testing."""
    return CachingModel(id="userCache", properties={"cacheName": "users", "timeToLive": "60"})


@pytest.fixture
def sample_flushing_model():
    """Sample flushing model for testing."""
    return FlushingModel(id="userFlush", cache_names=("users", "profiles"))
