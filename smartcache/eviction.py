# smartcache/eviction.py
from __future__ import annotations
import logging
import threading
import time
from datetime import datetime
from typing import List

from smartcache.metrics import Counter, metrics
from smartcache.store import CacheEntry, Clock, EntryStore, Priority, utcnow

log = logging.getLogger(__name__)

PRIORITY_MULTIPLIER = {
    Priority.HIGH: 3.0,
    Priority.NORMAL: 1.5,
    Priority.LOW: 1.0,
}
OLD_ENTRY_HOURS = 72
OLD_ENTRY_PENALTY = 0.5


def _hours(delta) -> float:
    return delta.total_seconds() / 3600.0


def eviction_score(entry: CacheEntry, now: datetime) -> float:
    """
    LFU/LRU hybrid; lower score is evicted first.
    Frequency over recency, weighted by priority, halved past 72h of age.
    """
    age_hours = _hours(now - entry.created_at)
    recency_hours = _hours(now - entry.last_accessed)
    score = (entry.access_count * 10.0) / (recency_hours + 1.0)
    score *= PRIORITY_MULTIPLIER.get(entry.priority, 1.0)
    if age_hours > OLD_ENTRY_HOURS:
        score *= OLD_ENTRY_PENALTY
    return score


class EvictionEngine:
    def __init__(
        self,
        store: EntryStore,
        max_cache_size: int,
        eviction_batch_size: int,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.max_cache_size = max_cache_size
        self.eviction_batch_size = eviction_batch_size
        self.evictions = Counter()
        self._clock = clock
        self._lock = threading.Lock()

    def over_capacity(self) -> bool:
        return len(self.store) > self.max_cache_size

    def maybe_evict(self) -> int:
        """Sweep once if over capacity. Returns the number of entries removed."""
        if not self.over_capacity():
            return 0
        with self._lock:
            # a concurrent writer may have swept while we waited
            if not self.over_capacity():
                return 0
            return self.sweep()

    def select_victims(self, entries: List[CacheEntry]) -> List[CacheEntry]:
        now = self._clock()
        # equal scores: least recently touched, then earliest inserted, goes first
        ranked = sorted(entries, key=lambda e: (eviction_score(e, now), e.last_accessed, e.created_at, e.sequence))
        return ranked[: self.eviction_batch_size]

    def sweep(self) -> int:
        t0 = time.perf_counter()
        victims = self.select_victims(self.store.snapshot())
        removed = 0
        for entry in victims:
            # already removed or replaced by a concurrent writer: skip
            if self.store.discard(entry):
                removed += 1
        if removed:
            self.evictions.inc(removed)
        metrics.observe_ms("cache.eviction.sweep.ms", (time.perf_counter() - t0) * 1000)
        metrics.inc("cache.eviction.sweeps")
        log.debug("Evicted %d cache entries, current size: %d", removed, len(self.store))
        return removed
