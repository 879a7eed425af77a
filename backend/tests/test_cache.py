from datetime import timedelta

from dealfinder.services.cache import (
    SCORE_TAGS,
    SNAPSHOT_TAGS,
    TAG_ANALYTICS,
    TAG_DEAL_COMPARISON,
    TAG_PRICE_HISTORY,
    TAG_TOP_DEALS,
    ReadCache,
    cached,
    invalidate_after_fetch,
    invalidate_after_scoring,
)


def test_set_get_and_invalidate_by_tag():
    cache = ReadCache(stale_minutes=10)
    cache.set("a", 1, [TAG_TOP_DEALS])
    cache.set("b", 2, [TAG_ANALYTICS, TAG_DEAL_COMPARISON])
    cache.set("c", 3, [TAG_PRICE_HISTORY])

    assert cache.invalidate(TAG_DEAL_COMPARISON) == 1
    assert cache.get("a") == 1
    assert cache.get("b") is None
    assert len(cache) == 2


def test_stale_entries_are_misses():
    cache = ReadCache(stale_minutes=10)
    cache.set("k", "v", [TAG_TOP_DEALS])
    cache._entries["k"].stored_at -= timedelta(minutes=11)

    assert cache.get("k") is None
    assert len(cache) == 0


def test_cached_computes_once():
    cache = ReadCache(stale_minutes=10)
    calls = []

    def compute():
        calls.append(1)
        return ["result"]

    assert cached(cache, "k", [TAG_TOP_DEALS], compute) == ["result"]
    assert cached(cache, "k", [TAG_TOP_DEALS], compute) == ["result"]
    assert len(calls) == 1
    assert cached(None, "k", [TAG_TOP_DEALS], compute) == ["result"]
    assert len(calls) == 2


def test_fetch_and_scoring_invalidation_sets():
    cache = ReadCache(stale_minutes=10)
    for tag in set(SNAPSHOT_TAGS) | set(SCORE_TAGS):
        cache.set(tag, tag, [tag])

    invalidate_after_fetch(cache)
    assert [cache.get(t) for t in SNAPSHOT_TAGS] == [None] * len(SNAPSHOT_TAGS)
    assert cache.get(TAG_ANALYTICS) == TAG_ANALYTICS

    cache.set(TAG_PRICE_HISTORY, "h", [TAG_PRICE_HISTORY])
    invalidate_after_scoring(cache)
    assert cache.get(TAG_ANALYTICS) is None
    assert cache.get(TAG_PRICE_HISTORY) == "h"


def test_clear():
    cache = ReadCache(stale_minutes=10)
    cache.set("k", 1, [TAG_TOP_DEALS])
    cache.clear()
    assert len(cache) == 0


def test_result_computed_across_invalidation_is_not_stored():
    cache = ReadCache(stale_minutes=10)

    def compute():
        # a scoring pass commits and invalidates while this read is in flight
        invalidate_after_scoring(cache)
        return "overview-before-rescore"

    assert cached(cache, "analytics:overview", [TAG_ANALYTICS], compute) == "overview-before-rescore"
    assert cache.get("analytics:overview") is None

    assert cached(cache, "analytics:overview", [TAG_ANALYTICS], lambda: "fresh") == "fresh"
    assert cache.get("analytics:overview") == "fresh"


def test_invalidating_other_tags_does_not_reject_result():
    cache = ReadCache(stale_minutes=10)

    def compute():
        cache.invalidate(TAG_PRICE_HISTORY)
        return ["top"]

    cached(cache, "deals:top:10", [TAG_TOP_DEALS], compute)
    assert cache.get("deals:top:10") == ["top"]


def test_set_with_stale_generations_is_rejected():
    cache = ReadCache(stale_minutes=10)
    seen = cache.generations([TAG_TOP_DEALS])
    cache.invalidate(TAG_TOP_DEALS)

    assert cache.set("k", 1, [TAG_TOP_DEALS], seen) is False
    assert cache.get("k") is None
    assert cache.set("k", 1, [TAG_TOP_DEALS]) is True
