# smartcache/metrics.py
from __future__ import annotations
import time
import threading
from collections import defaultdict
from typing import Dict, List


class Counter:
    """Monotonic integer counter safe to bump from many threads."""
    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()
    def inc(self, n: int = 1) -> int:
        with self._lock:
            self._value += n
            return self._value
    def reset(self):
        with self._lock:
            self._value = 0
    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class _Histogram:
    # fixed buckets in ms (log-spaced)
    BUCKETS = [1, 5, 10, 25, 50, 100, 250, 500, 1000, 5000]
    def __init__(self):
        self.counts = [0]*(len(self.BUCKETS) + 1)  # last slot is overflow
        self.lock = threading.Lock()
        self._samples: List[float] = []  # short tail to approximate p95
    def observe_ms(self, ms: float):
        i = 0
        while i < len(self.BUCKETS) and ms > self.BUCKETS[i]:
            i += 1
        with self.lock:
            self.counts[i] += 1
            self._samples.append(ms)
            if len(self._samples) > 200:
                self._samples = self._samples[-200:]
    def p95_ms(self) -> float:
        with self.lock:
            if not self._samples:
                return 0.0
            arr = sorted(self._samples)
            idx = int(0.95 * (len(arr)-1))
            return arr[idx]
    def bucket_counts(self) -> Dict[str, int]:
        labels = [f"le_{b}" for b in self.BUCKETS] + [f"gt_{self.BUCKETS[-1]}"]
        with self.lock:
            return dict(zip(labels, self.counts))


class Metrics:
    def __init__(self):
        self.counters: Dict[str, int] = defaultdict(int)
        self.histos: Dict[str, _Histogram] = defaultdict(_Histogram)
        self.lock = threading.Lock()
        self.process_start_ns = time.time_ns()
    def inc(self, key: str, n: int = 1):
        with self.lock:
            self.counters[key] += n
    def observe_ms(self, key: str, ms: float):
        with self.lock:
            histo = self.histos[key]
        histo.observe_ms(ms)
    def snapshot(self) -> Dict:
        up_ms = (time.time_ns() - self.process_start_ns) / 1e6
        with self.lock:
            counters = dict(self.counters)
            histos = list(self.histos.items())
        out = {"uptime_ms": up_ms, "counters": counters, "latency_p95_ms": {}, "latency_buckets_ms": {}}
        for k, h in histos:
            out["latency_p95_ms"][k] = h.p95_ms()
            out["latency_buckets_ms"][k] = h.bucket_counts()
        return out

metrics = Metrics()
