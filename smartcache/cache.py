# smartcache/cache.py
from __future__ import annotations
import logging
from datetime import timedelta
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from smartcache.config import CacheOptions, settings
from smartcache.eviction import EvictionEngine
from smartcache.keys import KeyHasher
from smartcache.patterns import AccessPatternTracker
from smartcache.stats import CacheStatistics
from smartcache.store import CacheEntry, Clock, EntryStore, Priority, utcnow
from smartcache.ttl import TtlPolicyResolver

K = TypeVar("K")
V = TypeVar("V")

log = logging.getLogger(__name__)


class SmartCache(Generic[K, V]):
    """
    In-process cache for expensive remote lookups.
    - Priority-based TTL, overridden by a long TTL for popular patterns
    - LFU/LRU hybrid eviction once max_cache_size is exceeded
    - Thread-safe: sharded entry/pattern maps, one lock for eviction sweeps
    A cached value of None is indistinguishable from a miss in try_get().
    """

    def __init__(
        self,
        key_serializer: Callable[[K], str],
        options: Optional[CacheOptions] = None,
        clock: Optional[Clock] = None,
    ):
        self.options = options or CacheOptions()
        self._clock = clock or utcnow
        self._hasher: KeyHasher[K] = KeyHasher(key_serializer)
        self._store: EntryStore[V] = EntryStore(clock=self._clock)
        self._patterns = AccessPatternTracker(self.options.popularity_threshold, clock=self._clock)
        self._ttl = TtlPolicyResolver(self.options, self._patterns)
        self._eviction = EvictionEngine(
            self._store,
            max_cache_size=self.options.max_cache_size,
            eviction_batch_size=self.options.eviction_batch_size,
            clock=self._clock,
        )
        log.debug("SmartCache initialized with max size: %d", self.options.max_cache_size)

    # ----------------------------- reads -----------------------------

    def try_get(self, key: K) -> Optional[V]:
        return self._store.try_get(self._hasher.hash(key))

    def __contains__(self, key: K) -> bool:
        return self._store.contains(self._hasher.hash(key))

    def __len__(self) -> int:
        return len(self._store)

    # ----------------------------- writes -----------------------------

    def set(self, key: K, value: V, priority: Priority = Priority.NORMAL, pattern_key: Optional[str] = None):
        storage_key = self._hasher.hash(key)
        ttl = self._ttl.resolve(pattern_key, priority)
        if pattern_key:
            self._patterns.record(pattern_key, priority)
        self._put(storage_key, value, ttl, priority)

    def set_with_ttl(self, key: K, value: V, ttl: timedelta):
        """Explicit TTL; skips priority/pattern resolution and scores as Normal."""
        self._put(self._hasher.hash(key), value, ttl, Priority.NORMAL)

    def _put(self, storage_key: str, value: V, ttl: timedelta, priority: Priority):
        entry = CacheEntry.create(storage_key, value, ttl, priority, self._clock())
        self._store.upsert(storage_key, entry)
        self._eviction.maybe_evict()

    def remove(self, key: K) -> bool:
        return self._store.remove(self._hasher.hash(key))

    def clear(self):
        self._store.clear()
        self._patterns.clear()
        self._store.reset_counters()
        self._eviction.evictions.reset()
        log.debug("SmartCache cleared")

    def close(self):
        self._store.clear()
        self._patterns.clear()

    def __enter__(self) -> "SmartCache[K, V]":
        return self

    def __exit__(self, *exc):
        self.close()

    # ----------------------------- cache-aside -----------------------------

    def get_or_set(
        self,
        key: K,
        factory: Callable[[], V],
        priority: Priority = Priority.NORMAL,
        pattern_key: Optional[str] = None,
    ) -> V:
        """
        Return the cached value, or call factory(), store and return its result.
        Factory errors propagate and nothing is stored. None results are not cached.
        """
        cached = self.try_get(key)
        if cached is not None:
            return cached
        value = factory()
        if value is not None:
            self.set(key, value, priority=priority, pattern_key=pattern_key)
        return value

    async def get_or_set_async(
        self,
        key: K,
        factory: Callable[[], Awaitable[V]],
        priority: Priority = Priority.NORMAL,
        pattern_key: Optional[str] = None,
    ) -> V:
        """Same as get_or_set() for coroutine loaders, e.g. an httpx-backed client."""
        cached = self.try_get(key)
        if cached is not None:
            return cached
        value = await factory()
        if value is not None:
            self.set(key, value, priority=priority, pattern_key=pattern_key)
        return value

    # ----------------------------- introspection -----------------------------

    def is_popular_pattern(self, pattern_key: str) -> bool:
        return self._patterns.is_popular(pattern_key)

    def peek_entry(self, key: K) -> Optional[CacheEntry[V]]:
        """Stored entry (even if expired) without touching counters or bookkeeping."""
        return self._store.peek(self._hasher.hash(key))

    def get_statistics(self) -> CacheStatistics:
        return CacheStatistics.build(
            hits=self._store.hits.value,
            misses=self._store.misses.value,
            current_size=len(self._store),
            max_size=self.options.max_cache_size,
            evictions=self._eviction.evictions.value,
            unique_patterns=self._patterns.count(),
            popular_entries=self._patterns.popular_count(),
        )


# process-wide cache for the HTTP surface; keys are serialized with repr()
# so tuples like ("search", "artist", 20) work out of the box
default_cache: SmartCache = SmartCache(repr, settings.cache)
