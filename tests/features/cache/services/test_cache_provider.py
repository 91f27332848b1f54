"""Tests for the cache provider."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from cache_models.core.exceptions import (
    CacheConfigurationError,
    CacheConnectionError,
    InvalidCachingModelError,
    InvalidFlushingModelError,
)
from cache_models.features.cache.entities.models import CachingModel, FlushingModel
from cache_models.features.cache.services.cache_provider import CacheProvider
from cache_models.features.cache.services.model_factory import PropertiesModelFactory

class TestRegistration:
    """Test caching and flushing model registration."""
    
    def test_add_caching_model_from_properties(self, provider):
        model = provider.add_caching_model("userCache", {"cacheName": "users"})
        
        assert provider.get_caching_model("userCache") is model
        assert provider.has_caching_model("userCache")
    
    def test_add_caching_model_instance(self, provider, sample_caching_model):
        provider.add_caching_model(sample_caching_model)
        
        assert provider.get_caching_model("userCache") is sample_caching_model
    
    def test_add_flushing_model_from_properties(self, provider):
        model = provider.add_flushing_model("flushUsers", {"cacheNames": "users,profiles"})
        
        assert provider.get_flushing_model("flushUsers") is model
        assert model.cache_names == ("users", "profiles")
    
    def test_add_flushing_model_instance(self, provider, sample_flushing_model):
        provider.add_flushing_model(sample_flushing_model)
        
        assert provider.has_flushing_model("userFlush")
    
    def test_malformed_caching_model_not_registered(self, provider):
        """Test registration fails fast and leaves no model behind."""
        with pytest.raises(CacheConfigurationError) as exc_info:
            provider.add_caching_model("userCache", {"timeToLive": "60"})
        
        assert exc_info.value.property_name == "cacheName"
        assert not provider.has_caching_model("userCache")
    
    def test_malformed_flushing_model_not_registered(self, provider):
        with pytest.raises(CacheConfigurationError):
            provider.add_flushing_model("flushUsers", {})
        
        assert not provider.has_flushing_model("flushUsers")
    
    def test_id_listing(self, provider):
        provider.add_caching_model("b", {"cacheName": "b"})
        provider.add_caching_model("a", {"cacheName": "a"})
        provider.add_flushing_model("f", {"cacheNames": "a"})
        
        assert provider.caching_model_ids() == ["a", "b"]
        assert provider.flushing_model_ids() == ["f"]
    
    def test_register_models(self, provider):
        provider.register_models(
            caching_models={"userCache": {"cacheName": "users"}},
            flushing_models={"flushUsers": {"cacheNames": "users"}},
        )
        
        assert provider.caching_model_ids() == ["userCache"]
        assert provider.flushing_model_ids() == ["flushUsers"]
    
    def test_register_models_is_all_or_nothing(self, provider):
        """Test one malformed definition leaves both registries untouched."""
        with pytest.raises(CacheConfigurationError):
            provider.register_models(
                caching_models={"good": {"cacheName": "g"}},
                flushing_models={"bad": {"cacheName": "oops"}},
            )
        
        assert provider.caching_model_ids() == []
        assert provider.flushing_model_ids() == []
    
    def test_default_factory(self, resolver):
        provider = CacheProvider(resolver)
        
        assert isinstance(provider.factory, PropertiesModelFactory)


class TestGetCache:
    """Test caching model resolution."""
    
    def test_unknown_id_raises_naming_id(self, provider):
        with pytest.raises(InvalidCachingModelError) as exc_info:
            provider.get_cache("missing")
        
        assert exc_info.value.model_id == "missing"
        assert "missing" in str(exc_info.value)
    
    def test_unknown_id_fails_repeatably(self, provider):
        """Test not-found is never cached across registration."""
        for _ in range(2):
            with pytest.raises(InvalidCachingModelError):
                provider.get_cache("userCache")
        
        provider.add_caching_model("userCache", {"cacheName": "users"})
        
        assert provider.get_cache("userCache").name == "users"
    
    def test_resolves_through_resolver(self, provider, resolver):
        model = provider.add_caching_model("userCache", {"cacheName": "users"})
        
        handle = provider.get_cache("userCache")
        
        assert handle is resolver.handles["users"]
        assert resolver.calls == [model]
        assert provider.get_cache("userCache") is handle
    
    def test_re_registration_replaces_configuration(self, provider):
        provider.add_caching_model("userCache", {"cacheName": "users"})
        first = provider.get_cache("userCache")
        
        provider.add_caching_model("userCache", {"cacheName": "members"})
        second = provider.get_cache("userCache")
        
        assert first.name == "users"
        assert second.name == "members"
    
    def test_resolver_error_propagates_unchanged(self, factory, make_resolver):
        error = CacheConnectionError("redis down")
        resolver = make_resolver(failing=["users"], error=error)
        provider = CacheProvider(resolver, factory=factory)
        provider.add_caching_model("userCache", {"cacheName": "users"})
        
        with pytest.raises(CacheConnectionError) as exc_info:
            provider.get_cache("userCache")
        
        assert exc_info.value is error
    
    def test_resolver_called_without_registry_lock(self, factory):
        """Test a blocking resolver does not stall registration."""
        entered = threading.Event()
        release = threading.Event()
        
        def slow_resolve(caching_model):
            entered.set()
            release.wait(timeout=5)
            return MagicMock()
        
        resolver = MagicMock()
        resolver.resolve.side_effect = slow_resolve
        provider = CacheProvider(resolver, factory=factory)
        provider.add_caching_model("slow", {"cacheName": "slow"})
        
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(provider.get_cache, "slow")
            assert entered.wait(timeout=5)
            
            provider.add_caching_model("other", {"cacheName": "other"})
            assert provider.has_caching_model("other")
            
            release.set()
            future.result(timeout=5)


class TestGetCaches:
    """Test flushing model resolution."""
    
    def test_unknown_id_raises_naming_id(self, provider):
        with pytest.raises(InvalidFlushingModelError) as exc_info:
            provider.get_caches("missing")
        
        assert exc_info.value.model_id == "missing"
    
    def test_preserves_declared_order(self, provider):
        provider.add_flushing_model("flushAll", {"cacheNames": "A,B,C"})
        
        handles = provider.get_caches("flushAll")
        
        assert isinstance(handles, tuple)
        assert [handle.name for handle in handles] == ["A", "B", "C"]
    
    def test_uses_registered_caching_model_for_name(self, provider, resolver):
        """Test a cache name matching a caching model id resolves through that model."""
        registered = provider.add_caching_model("users", {"cacheName": "users", "timeToLive": "60"})
        provider.add_flushing_model("flushUsers", {"cacheNames": "users,profiles"})
        
        provider.get_caches("flushUsers")
        
        assert resolver.calls[0] is registered
        assert resolver.calls[1] == CachingModel(id="profiles", properties={"cacheName": "profiles"})
    
    def test_matches_cache_name_not_model_id(self, provider):
        """Test a listed name resolves to the cache it names even when another model uses it as id."""
        provider.add_caching_model("A", {"cacheName": "X"})
        provider.add_caching_model("realA", {"cacheName": "A"})
        provider.add_flushing_model("flushA", {"cacheNames": "A"})
        
        assert [handle.name for handle in provider.get_caches("flushA")] == ["A"]
    
    def test_uses_model_targeting_cache_name(self, provider, resolver):
        """Test a listed name resolves through the model targeting it, whatever its id."""
        registered = provider.add_caching_model("users", {"cacheName": "userStore", "maxElements": "2"})
        provider.add_flushing_model("flushUsers", {"cacheNames": "userStore"})
        
        provider.get_caches("flushUsers")
        
        assert resolver.calls == [registered]
    
    def test_model_whose_id_is_cache_name_preferred(self, provider, resolver):
        """Test the model named like the cache wins when several target it."""
        provider.add_caching_model("a-users", {"cacheName": "users", "timeToLive": "1"})
        preferred = provider.add_caching_model("users", {"cacheName": "users", "timeToLive": "2"})
        provider.add_caching_model("z-users", {"cacheName": "users", "timeToLive": "3"})
        provider.add_flushing_model("flushUsers", {"cacheNames": "users"})
        
        provider.get_caches("flushUsers")
        
        assert resolver.calls == [preferred]
    
    def test_failure_midway_fails_whole_call(self, factory, make_resolver):
        """Test a failure on the second cache returns no partial result."""
        resolver = make_resolver(failing=["B"])
        provider = CacheProvider(resolver, factory=factory)
        provider.add_flushing_model(FlushingModel(id="flushAll", cache_names=("A", "B", "C")))
        
        with pytest.raises(ConnectionError):
            provider.get_caches("flushAll")
        
        assert [model.cache_name for model in resolver.calls] == ["A", "B"]


class TestFlush:
    """Test flushing every cache of a flushing model."""
    
    def test_flush_clears_each_cache(self, provider, resolver):
        provider.add_flushing_model("flushAll", {"cacheNames": "A,B"})
        for name in ("A", "B"):
            provider.add_caching_model(name, {"cacheName": name})
            provider.get_cache(name).put("key", "value")
        
        flushed = provider.flush("flushAll")
        
        assert flushed == 2
        assert resolver.handles["A"].get("key") is None
        assert resolver.handles["B"].clear_count == 1
    
    def test_flush_clears_nothing_when_resolution_fails(self, factory, make_resolver):
        """Test no cache is cleared when a later cache cannot be resolved."""
        resolver = make_resolver(failing=["B"])
        provider = CacheProvider(resolver, factory=factory)
        provider.add_flushing_model("flushAll", {"cacheNames": "A,B"})
        
        with pytest.raises(ConnectionError):
            provider.flush("flushAll")
        
        assert resolver.handles["A"].clear_count == 0


class TestConcurrency:
    """Test concurrent registration and lookup."""
    
    def test_concurrent_registration_then_lookup(self, provider):
        ids = [f"cache-{i}" for i in range(200)]
        
        def register(model_id):
            provider.add_caching_model(model_id, {"cacheName": model_id})
            provider.add_flushing_model(f"flush-{model_id}", {"cacheNames": model_id})
        
        with ThreadPoolExecutor(max_workers=16) as executor:
            list(executor.map(register, ids))
        
        with ThreadPoolExecutor(max_workers=16) as executor:
            handles = list(executor.map(provider.get_cache, ids))
            flushed = list(executor.map(lambda model_id: provider.get_caches(f"flush-{model_id}"), ids))
        
        assert [handle.name for handle in handles] == ids
        assert [caches[0].name for caches in flushed] == ids
    
    def test_lookups_during_re_registration_see_whole_models(self, provider):
        """Test readers only ever see one of the complete registered models."""
        valid = {"users-a", "users-b"}
        provider.add_caching_model("userCache", {"cacheName": "users-a"})
        stop = threading.Event()
        
        def writer():
            toggle = False
            while not stop.is_set():
                name = "users-b" if toggle else "users-a"
                provider.add_caching_model("userCache", {"cacheName": name})
                toggle = not toggle
        
        def reader():
            return {provider.get_caching_model("userCache").cache_name for _ in range(2000)}
        
        with ThreadPoolExecutor(max_workers=5) as executor:
            writer_future = executor.submit(writer)
            seen = set().union(*executor.map(lambda _: reader(), range(4)))
            stop.set()
            writer_future.result(timeout=5)
        
        assert seen <= valid
