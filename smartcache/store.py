# smartcache/store.py
from __future__ import annotations
import itertools
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from smartcache.metrics import Counter
from smartcache.shards import ShardedMap, DEFAULT_SHARDS

V = TypeVar("V")

Clock = Callable[[], datetime]

# process-wide insertion order; breaks ties between entries stamped at the same instant
_insertion_sequence = itertools.count()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Priority(str, Enum):
    """Caller hint that drives both the default TTL and eviction weighting."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass
class CacheEntry(Generic[V]):
    storage_key: str
    value: V
    created_at: datetime
    expires_at: datetime
    priority: Priority = Priority.NORMAL
    last_accessed: Optional[datetime] = None
    access_count: int = 0
    sequence: int = field(default_factory=lambda: next(_insertion_sequence))

    def __post_init__(self):
        if self.last_accessed is None:
            self.last_accessed = self.created_at

    @classmethod
    def create(cls, storage_key: str, value: V, ttl: timedelta, priority: Priority, now: datetime) -> "CacheEntry[V]":
        return cls(
            storage_key=storage_key,
            value=value,
            created_at=now,
            expires_at=now + ttl,
            priority=priority,
            last_accessed=now,
        )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class EntryStore(Generic[V]):
    """
    Storage key -> CacheEntry over a sharded map.
    Every try_get bumps exactly one of `hits` / `misses`.
    Hit bookkeeping (access_count, last_accessed) happens under the owning shard's
    lock, so concurrent readers of one entry never lose an increment.
    """
    def __init__(self, clock: Clock = utcnow, shards: int = DEFAULT_SHARDS):
        self._clock = clock
        self._map: ShardedMap[CacheEntry[V]] = ShardedMap(shards)
        self.hits = Counter()
        self.misses = Counter()

    def try_get(self, storage_key: str) -> Optional[V]:
        now = self._clock()
        with self._map.locked(storage_key) as shard:
            entry = shard.get(storage_key)
            if entry is not None:
                if not entry.is_expired(now):
                    entry.access_count += 1
                    entry.last_accessed = now
                    value = entry.value
                else:
                    del shard[storage_key]
                    entry = None
        if entry is None:
            self.misses.inc()
            return None
        self.hits.inc()
        return value

    def peek(self, storage_key: str) -> Optional[CacheEntry[V]]:
        """Entry as stored, expired or not. No counters, no bookkeeping."""
        return self._map.get(storage_key)

    def contains(self, storage_key: str) -> bool:
        entry = self._map.get(storage_key)
        return entry is not None and not entry.is_expired(self._clock())

    def upsert(self, storage_key: str, entry: CacheEntry[V]):
        self._map.put(storage_key, entry)

    def remove(self, storage_key: str) -> bool:
        return self._map.pop(storage_key) is not None

    def discard(self, entry: CacheEntry[V]) -> bool:
        """Remove `entry` only if it is still the object stored under its key."""
        return self._map.pop_if_same(entry.storage_key, entry)

    def snapshot(self) -> List[CacheEntry[V]]:
        return self._map.snapshot()

    def clear(self):
        self._map.clear()

    def reset_counters(self):
        self.hits.reset()
        self.misses.reset()

    def __len__(self) -> int:
        return len(self._map)
