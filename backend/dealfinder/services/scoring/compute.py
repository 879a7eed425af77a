"""
Scoring pass: turn persisted snapshots into per-provider DealScore rows and one
MatchDealSummary per match.

Per-match writes are serialized by a process-local lock and applied with keyed upserts in
one transaction, so concurrent passes over the same match cannot lose updates.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy.orm import Session

from dealfinder.config import settings
from dealfinder.core.constants import CATEGORY_GENERAL
from dealfinder.db.upsert import upsert
from dealfinder.models.deal_score import DealScore
from dealfinder.models.match_deal_summary import MatchDealSummary
from dealfinder.services.cache import ReadCache, invalidate_after_scoring
from dealfinder.services.scoring.market import (
    compute_market_stats,
    distinct_match_ids,
    load_latest_snapshots,
    load_window_snapshots,
    window_start,
)
from dealfinder.services.scoring.score import (
    classify_trend,
    compute_deal_score,
    compute_savings_percentage,
    compute_trend_percentage,
    recommend,
)

logger = logging.getLogger(__name__)

# Matches with equal match_id % MATCH_LOCK_STRIPES share a lock.
MATCH_LOCK_STRIPES = 64
_match_locks: tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(MATCH_LOCK_STRIPES))


def _lock_for(match_id: int) -> threading.Lock:
    return _match_locks[match_id % MATCH_LOCK_STRIPES]


def _summary_values(
    match_id: int,
    category: str,
    deals: list[dict[str, Any]],
    now: datetime,
) -> dict[str, Any]:
    """Roll scored deals into summary columns. Best deal = highest score, first one on ties."""
    best = deals[0]
    for deal in deals[1:]:
        if deal["deal_score"] > best["deal_score"]:
            best = deal
    prices = [d["current_price"] for d in deals]
    return {
        "match_id": match_id,
        "category": category,
        "lowest_price": min(prices),
        "highest_price": max(prices),
        "average_price": best["market_average"],
        "best_provider_id": best["provider_id"],
        "best_deal_score": best["deal_score"],
        "num_providers": len(deals),
        "overall_trend": best["price_trend"],
        "best_time_to_buy": best["best_time_to_buy"],
        "last_computed_at": now,
    }


def compute_scores_for_match(
    db: Session,
    match_id: int,
    *,
    now: datetime | None = None,
    cache: ReadCache | None = None,
) -> int:
    """
    Score every provider's latest snapshot for match_id and upsert the match summary.
    Idempotent over unchanged snapshots (only last_computed_at moves). Returns the number
    of providers scored; 0 when the match has no snapshots.
    """
    now = now or datetime.now(timezone.utc)
    with _lock_for(match_id):
        latest = load_latest_snapshots(db, match_id)
        if not latest:
            return 0
        window = load_window_snapshots(db, match_id, window_start(now))
        stats = compute_market_stats(latest, window)

        deals: list[dict[str, Any]] = []
        try:
            for snapshot in latest:
                current_price = snapshot.total_price
                deal_score = compute_deal_score(current_price, stats.market_average)
                trend_pct = compute_trend_percentage(stats.history_by_provider.get(snapshot.provider_id, []))
                trend = classify_trend(trend_pct)
                best_time, recommendation = recommend(deal_score, trend)
                values = {
                    "match_id": match_id,
                    "provider_id": snapshot.provider_id,
                    "category": snapshot.category or CATEGORY_GENERAL,
                    "deal_score": deal_score,
                    "current_price": current_price,
                    "market_average": stats.market_average,
                    "savings_percentage": compute_savings_percentage(current_price, stats.market_average),
                    "price_trend": trend,
                    "trend_percentage": trend_pct,
                    "price_7d_low": stats.price_7d_low,
                    "price_7d_high": stats.price_7d_high,
                    "best_time_to_buy": best_time,
                    "recommendation": recommendation,
                    "booking_url": snapshot.booking_url,
                    "last_computed_at": now,
                }
                upsert(db, DealScore, values, ["match_id", "provider_id", "category"])
                deals.append(values)

            upsert(
                db,
                MatchDealSummary,
                _summary_values(match_id, CATEGORY_GENERAL, deals, now),
                ["match_id", "category"],
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

    invalidate_after_scoring(cache)
    logger.debug("Scored match %s: %s providers, market average %s", match_id, len(deals), stats.market_average)
    return len(deals)


def _score_one(session_factory: Callable[[], Session], match_id: int, now: datetime) -> int:
    db = session_factory()
    try:
        return compute_scores_for_match(db, match_id, now=now)
    finally:
        db.close()


def compute_all_scores(
    session_factory: Callable[[], Session],
    *,
    cache: ReadCache | None = None,
    max_workers: int | None = None,
    now: datetime | None = None,
) -> dict[str, int]:
    """
    Score every match that has snapshots. A failing match is logged and skipped; the rest
    of the batch still runs. Cache views over scores are invalidated once at the end.
    """
    now = now or datetime.now(timezone.utc)
    db = session_factory()
    try:
        match_ids = distinct_match_ids(db)
    finally:
        db.close()
    logger.info("Computing deal scores for %s matches", len(match_ids))

    scored = 0
    failed = 0
    workers = max(1, min(max_workers or settings.score_max_workers, len(match_ids) or 1))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="deal_scoring") as executor:
        futures = {executor.submit(_score_one, session_factory, mid, now): mid for mid in match_ids}
        for future in as_completed(futures):
            match_id = futures[future]
            try:
                if future.result() > 0:
                    scored += 1
            except Exception as e:
                failed += 1
                logger.warning("Scoring failed for match %s: %s", match_id, e, exc_info=True)

    invalidate_after_scoring(cache)
    logger.info(
        "Deal score computation complete: matches=%s, scored=%s, failed=%s",
        len(match_ids),
        scored,
        failed,
    )
    return {"matches": len(match_ids), "scored": scored, "failed": failed}
