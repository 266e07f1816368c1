# smartcache/main.py
import logging

from fastapi import FastAPI
from smartcache.config import settings
from smartcache.__about__ import __version__
from smartcache.cache import default_cache
from smartcache.metrics import metrics
from smartcache.obs import RequestObservability
from smartcache.routers_cache import router as cache_router

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Smart Cache",
    version=__version__,
    description="In-process priority/popularity-aware cache for rate-limited remote lookups.",
)

app.add_middleware(RequestObservability)

# ---------------------- Health endpoint ----------------------
@app.get("/health")
def health():
    """
    Operational heartbeat; reports the active cache bounds.
    """
    return {
        "app": settings.app_name,
        "version": __version__,
        "max_cache_size": default_cache.options.max_cache_size,
        "eviction_batch_size": default_cache.options.eviction_batch_size,
        "status": "ok",
    }

# ---------------------- Metrics endpoint (JSON snapshot) ----------------------
@app.get("/_metrics")
def get_metrics():
    """
    Counters + p95 latencies (HTTP routes and eviction sweeps).
    """
    return metrics.snapshot()

# ---------------------- API routers ----------------------
app.include_router(cache_router, prefix="/cache")
