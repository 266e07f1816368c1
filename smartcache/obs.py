# smartcache/obs.py
from __future__ import annotations
import json
import logging
import time, uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from smartcache.metrics import metrics

log = logging.getLogger("smartcache.http")


class RequestObservability(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
            response.headers["x-request-id"] = req_id
            return response
        finally:
            ms = (time.perf_counter() - start) * 1000
            path = request.url.path
            method = request.method
            metrics.inc("http.requests.total")
            metrics.observe_ms(f"http.latency.{method}.{path}", ms)
            # one structured line per request
            log.info(json.dumps({"req_id": req_id, "method": method, "path": path, "ms": round(ms, 1)}))
