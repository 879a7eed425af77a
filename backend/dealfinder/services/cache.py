"""
Read-through cache for query results, keyed by query signature and tagged by the data it
reflects. Mutating passes invalidate by tag at the end of their work; entries are never
updated in place, so a reader sees either a whole cached result or a fresh computation.
"""
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable

from dealfinder.config import settings

logger = logging.getLogger(__name__)

TAG_DEAL_COMPARISON = "deal_comparison"
TAG_TOP_DEALS = "top_deals"
TAG_PRICE_HISTORY = "price_history"
TAG_SUMMARIES = "summaries"
TAG_ANALYTICS = "analytics"

# Views that can reflect snapshot rows (fetch pass) or score/summary rows (scoring pass).
SNAPSHOT_TAGS = (TAG_PRICE_HISTORY, TAG_DEAL_COMPARISON, TAG_TOP_DEALS, TAG_SUMMARIES)
SCORE_TAGS = (TAG_DEAL_COMPARISON, TAG_TOP_DEALS, TAG_SUMMARIES, TAG_ANALYTICS)


class _Entry:
    __slots__ = ("value", "tags", "stored_at")

    def __init__(self, value: Any, tags: frozenset[str], stored_at: datetime):
        self.value = value
        self.tags = tags
        self.stored_at = stored_at


class ReadCache:
    """Process-local, thread-safe. Entries older than stale_minutes count as misses."""

    def __init__(self, stale_minutes: int | None = None) -> None:
        minutes = settings.cache_stale_minutes if stale_minutes is None else stale_minutes
        self._ttl = timedelta(minutes=minutes)
        self._entries: dict[str, _Entry] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        now = datetime.now(timezone.utc)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now - entry.stored_at > self._ttl:
                del self._entries[key]
                return None
            return entry.value

    def generations(self, tags: Iterable[str]) -> dict[str, int]:
        """Current invalidation count per tag; pass to set() to reject values computed before an invalidation."""
        with self._lock:
            return {t: self._generations.get(t, 0) for t in tags}

    def set(self, key: str, value: Any, tags: Iterable[str], seen: dict[str, int] | None = None) -> bool:
        """Store value unless one of its tags was invalidated after `seen` was taken. Returns whether stored."""
        tags = frozenset(tags)
        with self._lock:
            if seen is not None and any(self._generations.get(t, 0) != seen.get(t, 0) for t in tags):
                return False
            self._entries[key] = _Entry(value, tags, datetime.now(timezone.utc))
        return True

    def invalidate(self, *tags: str) -> int:
        """Drop every entry carrying any of tags. Returns entries removed."""
        wanted = set(tags)
        with self._lock:
            for t in wanted:
                self._generations[t] = self._generations.get(t, 0) + 1
            stale = [k for k, e in self._entries.items() if e.tags & wanted]
            for k in stale:
                del self._entries[k]
        if stale:
            logger.debug("Cache invalidated %s entries for tags %s", len(stale), sorted(wanted))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def cached(cache: ReadCache | None, key: str, tags: Iterable[str], compute: Callable[[], Any]) -> Any:
    """
    Return cache[key] or compute, store and return it. A None cache always computes.
    A result is not stored if its tags were invalidated while it was being computed.
    """
    if cache is None:
        return compute()
    hit = cache.get(key)
    if hit is not None:
        logger.debug("Cache hit %s", key)
        return hit
    logger.debug("Cache miss %s", key)
    tags = tuple(tags)
    seen = cache.generations(tags)
    value = compute()
    if not cache.set(key, value, tags, seen):
        logger.debug("Cache skip %s: invalidated during compute", key)
    return value


def invalidate_after_fetch(cache: ReadCache | None) -> None:
    if cache is not None:
        cache.invalidate(*SNAPSHOT_TAGS)


def invalidate_after_scoring(cache: ReadCache | None) -> None:
    if cache is not None:
        cache.invalidate(*SCORE_TAGS)


# Shared instance for the API process and scheduler jobs.
read_cache = ReadCache()
