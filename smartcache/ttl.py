# smartcache/ttl.py
from __future__ import annotations
from datetime import timedelta
from typing import Optional

from smartcache.config import CacheOptions
from smartcache.patterns import AccessPatternTracker
from smartcache.store import Priority


class TtlPolicyResolver:
    """
    TTL for a new entry. First match wins:
      1. pattern_key is popular -> popular_item_ttl (priority ignored)
      2. priority -> low/normal/high TTL, anything else -> default_ttl
    Call before recording the pattern for the same set(), so crossing the
    threshold only changes the TTL of later writes.
    """
    def __init__(self, options: CacheOptions, tracker: AccessPatternTracker):
        self.options = options
        self.tracker = tracker
        self._by_priority = {
            Priority.LOW: options.low_priority_ttl,
            Priority.NORMAL: options.normal_priority_ttl,
            Priority.HIGH: options.high_priority_ttl,
        }

    def resolve(self, pattern_key: Optional[str], priority: Priority) -> timedelta:
        if pattern_key and self.tracker.is_popular(pattern_key):
            return self.options.popular_item_ttl
        return self._by_priority.get(priority, self.options.default_ttl)
