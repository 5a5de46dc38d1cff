from datetime import datetime, timezone

from fakenews_detector.models import AnalysisResult, AnalysisSignals
from fakenews_detector.store import ResultCache

from .conftest import FakeClock


def make_result(text: str) -> AnalysisResult:
    return AnalysisResult(
        id=f"id-{text[:8]}",
        prediction="UNCERTAIN",
        confidence=50,
        overall_score=50,
        signals=AnalysisSignals.neutral(),
        flags=(),
        highlights=(),
        explanation="",
        original_text=text,
        timestamp=datetime.now(timezone.utc),
    )


class TestCacheKey:
    def test_case_and_whitespace_insensitive(self):
        assert ResultCache.cache_key("Breaking  News\n today") == ResultCache.cache_key("breaking news TODAY")

    def test_shared_prefix_does_not_collide(self):
        prefix = "x" * 200
        assert ResultCache.cache_key(prefix + " ending one") != ResultCache.cache_key(prefix + " ending two")

    def test_key_length(self):
        assert len(ResultCache.cache_key("anything")) == 32


class TestResultCache:
    def test_put_then_get(self, clock: FakeClock):
        cache = ResultCache(clock=clock)
        result = make_result("some text")
        cache.put("some text", result)
        assert cache.get("SOME   text") is result

    def test_expired_entry_is_dropped_on_get(self, clock: FakeClock):
        cache = ResultCache(ttl_seconds=3600, clock=clock)
        cache.put("t", make_result("t"))
        clock.advance(3600)
        assert cache.get("t") is not None
        clock.advance(1)
        assert cache.get("t") is None
        assert len(cache) == 0

    def test_full_cache_evicts_oldest_fifth(self, clock: FakeClock):
        cache = ResultCache(max_size=100, clock=clock)
        for i in range(100):
            cache.put(f"text {i}", make_result(f"text {i}"))
            clock.advance(1)
        cache.put("newcomer", make_result("newcomer"))

        assert len(cache) == 81
        assert all(cache.get(f"text {i}") is None for i in range(20))
        assert cache.get("text 20") is not None
        assert cache.get("newcomer") is not None

    def test_refreshing_existing_key_when_full_does_not_evict(self, clock: FakeClock):
        cache = ResultCache(max_size=5, clock=clock)
        for i in range(5):
            cache.put(f"t{i}", make_result(f"t{i}"))
            clock.advance(1)
        refreshed = make_result("t4")
        cache.put("t4", refreshed)
        assert len(cache) == 5
        assert all(cache.get(f"t{i}") is not None for i in range(4))
        assert cache.get("t4") is refreshed

    def test_cleanup_and_stats(self, clock: FakeClock):
        cache = ResultCache(max_size=10, ttl_seconds=60, clock=clock)
        cache.put("a", make_result("a"))
        clock.advance(30)
        cache.put("b", make_result("b"))
        clock.advance(31)

        stats = cache.stats()
        assert stats == {
            "totalEntries": 2,
            "validEntries": 1,
            "expiredEntries": 1,
            "maxSize": 10,
            "utilizationPercent": 20,
            "ttlMinutes": 1.0,
        }
        assert cache.cleanup_expired() == 1
        assert cache.clear() == 1
        assert len(cache) == 0
