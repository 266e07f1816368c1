from datetime import timedelta

import pytest
from pydantic import ValidationError

from smartcache.config import CacheOptions, Settings


def test_defaults():
    o = CacheOptions()
    assert o.max_cache_size == 10_000
    assert o.eviction_batch_size == 1_000
    assert o.default_ttl == timedelta(hours=24)
    assert o.low_priority_ttl == timedelta(hours=6)
    assert o.normal_priority_ttl == timedelta(hours=24)
    assert o.high_priority_ttl == timedelta(hours=72)
    assert o.popular_item_ttl == timedelta(hours=168)
    assert o.popularity_threshold == 10

@pytest.mark.parametrize("field", ["max_cache_size", "eviction_batch_size", "popularity_threshold"])
def test_non_positive_sizes_rejected(field):
    with pytest.raises(ValidationError):
        CacheOptions(**{field: 0})

def test_negative_ttl_rejected():
    with pytest.raises(ValidationError):
        CacheOptions(low_priority_ttl=timedelta(seconds=-1))

def test_presets():
    assert CacheOptions.preset("high-throughput").max_cache_size == 50_000
    lm = CacheOptions.preset("low_memory")
    assert (lm.max_cache_size, lm.eviction_batch_size) == (1_000, 100)
    assert lm.popular_item_ttl == timedelta(days=1)
    assert CacheOptions.preset(None) == CacheOptions()
    with pytest.raises(ValueError):
        CacheOptions.preset("huge")

def test_from_env_overrides_preset():
    o = CacheOptions.from_env({
        "SMARTCACHE_PRESET": "low_memory",
        "SMARTCACHE_MAX_CACHE_SIZE": "250",
        "SMARTCACHE_POPULAR_ITEM_TTL_SECONDS": "7200",
    })
    assert o.max_cache_size == 250
    assert o.eviction_batch_size == 100
    assert o.popular_item_ttl == timedelta(hours=2)

def test_from_env_validates_overrides():
    with pytest.raises(ValidationError):
        CacheOptions.from_env({"SMARTCACHE_EVICTION_BATCH_SIZE": "-5"})

def test_from_env_empty_is_default():
    assert CacheOptions.from_env({}) == CacheOptions()

def test_log_level_is_normalized():
    assert Settings(log_level=" debug ").log_level == "DEBUG"

def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")
