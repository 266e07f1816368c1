from smartcache.patterns import AccessPatternTracker
from smartcache.store import Priority


def test_record_creates_then_increments(clock):
    t = AccessPatternTracker(popularity_threshold=3, clock=clock)
    p = t.record("  Artist-Search:Radiohead ", Priority.LOW)
    assert p.pattern_key == "artist-search:radiohead"
    assert p.access_frequency == 1
    first = p.first_seen
    clock.advance(minutes=1)
    p = t.record("ARTIST-SEARCH:RADIOHEAD", Priority.HIGH)
    assert p.access_frequency == 2
    assert p.priority == Priority.HIGH
    assert p.first_seen == first and p.last_seen == clock()
    assert t.count() == 1

def test_popularity_threshold_and_case_insensitivity(clock):
    t = AccessPatternTracker(popularity_threshold=3, clock=clock)
    for _ in range(2):
        t.record("search:query", Priority.NORMAL)
    assert not t.is_popular("search:query")
    t.record("Search:Query", Priority.NORMAL)
    assert t.is_popular("search:query")
    assert t.is_popular("SEARCH:QUERY")
    assert not t.is_popular("other")
    assert not t.is_popular("")
    assert not t.is_popular(None)

def test_popular_count_and_clear(clock):
    t = AccessPatternTracker(popularity_threshold=2, clock=clock)
    t.record("a", Priority.LOW)
    t.record("a", Priority.LOW)
    t.record("b", Priority.LOW)
    assert t.popular_count() == 1
    assert t.popular_count(threshold=1) == 2
    t.clear()
    assert t.count() == 0 and not t.is_popular("a")

def test_blank_pattern_is_ignored(clock):
    t = AccessPatternTracker(popularity_threshold=1, clock=clock)
    assert t.record("   ", Priority.LOW) is None
    assert t.count() == 0
