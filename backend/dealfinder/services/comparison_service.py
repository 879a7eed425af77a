"""
Read side of the deal finder: per-match comparisons, top deals, price history, summaries.
Results are cached as response schemas and invalidated by the fetch and scoring passes.
"""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from dealfinder.core.constants import DEFAULT_HISTORY_DAYS, DEFAULT_LIST_LIMIT, MAX_HISTORY_DAYS, MAX_LIST_LIMIT
from dealfinder.core.errors import require_positive
from dealfinder.models.deal_score import DealScore
from dealfinder.models.match_deal_summary import MatchDealSummary
from dealfinder.models.price_snapshot import PriceSnapshot
from dealfinder.schemas import (
    DealComparison,
    DealScoreOut,
    MatchDealSummaryOut,
    PriceSnapshotOut,
    deal_score_out,
    snapshot_out,
    summary_out,
)
from dealfinder.services.cache import (
    TAG_DEAL_COMPARISON,
    TAG_PRICE_HISTORY,
    TAG_SUMMARIES,
    TAG_TOP_DEALS,
    ReadCache,
    cached,
)

logger = logging.getLogger(__name__)


def _aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def get_deals_for_match(db: Session, cache: ReadCache | None, match_id: int) -> DealComparison:
    """Summary plus every provider's deal for a match, cheapest first. Empty when never scored."""

    def compute() -> DealComparison:
        rows = (
            db.query(DealScore)
            .filter(DealScore.match_id == match_id)
            .order_by(DealScore.current_price.asc(), DealScore.provider_id.asc())
            .all()
        )
        summary = db.query(MatchDealSummary).filter(MatchDealSummary.match_id == match_id).first()
        deals = [deal_score_out(r) for r in rows]
        last_updated = max((_aware(d.last_computed_at) for d in deals), default=None)
        return DealComparison(
            match_id=match_id,
            summary=summary_out(summary) if summary is not None else None,
            deals=deals,
            last_updated=last_updated,
        )

    return cached(cache, f"deals:match:{match_id}", [TAG_DEAL_COMPARISON], compute)


def get_cheapest_deal(db: Session, cache: ReadCache | None, match_id: int) -> DealScoreOut | None:
    comparison = get_deals_for_match(db, cache, match_id)
    return comparison.deals[0] if comparison.deals else None


def get_top_deals(db: Session, cache: ReadCache | None = None, limit: int = DEFAULT_LIST_LIMIT) -> list[DealScoreOut]:
    """Best deals across all matches: score desc, then price asc."""
    require_positive("limit", limit, MAX_LIST_LIMIT)

    def compute() -> list[DealScoreOut]:
        rows = (
            db.query(DealScore)
            .order_by(DealScore.deal_score.desc(), DealScore.current_price.asc(), DealScore.id.asc())
            .limit(limit)
            .all()
        )
        return [deal_score_out(r) for r in rows]

    return cached(cache, f"deals:top:{limit}", [TAG_TOP_DEALS], compute)


def get_price_history(
    db: Session,
    cache: ReadCache | None,
    match_id: int,
    days: int = DEFAULT_HISTORY_DAYS,
    now: datetime | None = None,
) -> list[PriceSnapshotOut]:
    """Snapshots for a match fetched in the last `days` days, newest first."""
    require_positive("days", days, MAX_HISTORY_DAYS)
    since = (now or datetime.now(timezone.utc)) - timedelta(days=days)

    def compute() -> list[PriceSnapshotOut]:
        rows = (
            db.query(PriceSnapshot)
            .filter(PriceSnapshot.match_id == match_id, PriceSnapshot.fetched_at >= since)
            .order_by(PriceSnapshot.fetched_at.desc(), PriceSnapshot.id.desc())
            .all()
        )
        return [snapshot_out(r) for r in rows]

    return cached(cache, f"history:{match_id}:{days}", [TAG_PRICE_HISTORY], compute)


def get_all_summaries(db: Session, cache: ReadCache | None = None) -> list[MatchDealSummaryOut]:
    def compute() -> list[MatchDealSummaryOut]:
        rows = (
            db.query(MatchDealSummary)
            .order_by(MatchDealSummary.lowest_price.asc(), MatchDealSummary.match_id.asc())
            .all()
        )
        return [summary_out(r) for r in rows]

    return cached(cache, "summaries:all", [TAG_SUMMARIES], compute)
