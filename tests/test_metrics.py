from smartcache.metrics import Counter, Metrics, _Histogram


def test_histogram_buckets_include_overflow():
    h = _Histogram()
    for ms in (0.5, 3, 3, 700, 9000):
        h.observe_ms(ms)
    buckets = h.bucket_counts()
    assert buckets["le_1"] == 1
    assert buckets["le_5"] == 2
    assert buckets["le_1000"] == 1
    assert buckets["gt_5000"] == 1
    assert sum(buckets.values()) == 5

def test_snapshot_reports_p95_and_buckets():
    m = Metrics()
    m.inc("cache.eviction.sweeps")
    m.observe_ms("cache.eviction.sweep.ms", 12)
    snap = m.snapshot()
    assert snap["counters"] == {"cache.eviction.sweeps": 1}
    assert snap["latency_p95_ms"]["cache.eviction.sweep.ms"] == 12
    assert snap["latency_buckets_ms"]["cache.eviction.sweep.ms"]["le_25"] == 1

def test_counter_reset():
    c = Counter()
    c.inc()
    c.inc(4)
    assert c.value == 5
    c.reset()
    assert c.value == 0
