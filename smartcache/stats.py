# smartcache/stats.py
from __future__ import annotations
from pydantic import BaseModel


class CacheStatistics(BaseModel):
    """Point-in-time view of cache performance."""
    total_queries: int = 0
    hits: int = 0
    misses: int = 0
    hit_rate: float = 0.0
    current_size: int = 0
    max_size: int = 0
    evictions: int = 0
    unique_patterns: int = 0
    popular_entries: int = 0

    @classmethod
    def build(
        cls,
        hits: int,
        misses: int,
        current_size: int,
        max_size: int,
        evictions: int,
        unique_patterns: int,
        popular_entries: int,
    ) -> "CacheStatistics":
        total = hits + misses
        return cls(
            total_queries=total,
            hits=hits,
            misses=misses,
            hit_rate=(hits / total) if total > 0 else 0.0,
            current_size=current_size,
            max_size=max_size,
            evictions=evictions,
            unique_patterns=unique_patterns,
            popular_entries=popular_entries,
        )
