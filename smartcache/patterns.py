# smartcache/patterns.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from smartcache.shards import ShardedMap, DEFAULT_SHARDS
from smartcache.store import Clock, Priority, utcnow


def normalize_pattern(pattern_key: Optional[str]) -> str:
    return (pattern_key or "").strip().lower()


@dataclass
class AccessPattern:
    pattern_key: str
    priority: Priority
    first_seen: datetime
    last_seen: datetime
    access_frequency: int = 1


class AccessPatternTracker:
    """
    Write-frequency per semantic pattern key (e.g. "artist-search:radiohead").
    Frequency counts set() calls, not reads: a pattern becomes popular because it
    keeps being fetched and stored again, not because it is read often.
    Entries never decay; only clear() drops them.
    """
    def __init__(self, popularity_threshold: int, clock: Clock = utcnow, shards: int = DEFAULT_SHARDS):
        self.popularity_threshold = popularity_threshold
        self._clock = clock
        self._map: ShardedMap[AccessPattern] = ShardedMap(shards)

    def record(self, pattern_key: str, priority: Priority) -> Optional[AccessPattern]:
        key = normalize_pattern(pattern_key)
        if not key:
            return None
        now = self._clock()
        with self._map.locked(key) as shard:
            pattern = shard.get(key)
            if pattern is None:
                pattern = AccessPattern(pattern_key=key, priority=priority, first_seen=now, last_seen=now)
                shard[key] = pattern
            else:
                pattern.access_frequency += 1
                pattern.last_seen = now
                pattern.priority = priority
            return pattern

    def get(self, pattern_key: str) -> Optional[AccessPattern]:
        key = normalize_pattern(pattern_key)
        return self._map.get(key) if key else None

    def is_popular(self, pattern_key: Optional[str]) -> bool:
        key = normalize_pattern(pattern_key)
        if not key:
            return False
        pattern = self._map.get(key)
        return pattern is not None and pattern.access_frequency >= self.popularity_threshold

    def count(self) -> int:
        return len(self._map)

    def popular_count(self, threshold: Optional[int] = None) -> int:
        threshold = self.popularity_threshold if threshold is None else threshold
        return sum(1 for p in self._map.snapshot() if p.access_frequency >= threshold)

    def clear(self):
        self._map.clear()
