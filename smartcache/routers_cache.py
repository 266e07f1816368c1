# smartcache/routers_cache.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from smartcache.cache import default_cache
from smartcache.stats import CacheStatistics

router = APIRouter(tags=["cache"])


@router.get("/stats", response_model=CacheStatistics)
def cache_stats():
    return default_cache.get_statistics()


@router.get("/patterns/{pattern_key}")
def cache_pattern(pattern_key: str) -> Dict[str, Any]:
    """
    Whether a pattern key has been written often enough to earn the popular TTL.
    Lookup is case-insensitive.
    """
    return {"pattern_key": pattern_key, "popular": default_cache.is_popular_pattern(pattern_key)}


@router.delete("", response_model=CacheStatistics)
def cache_clear():
    default_cache.clear()
    return default_cache.get_statistics()
