"""Cached, read-only analytics over persisted deal scores and summaries."""
import logging

from sqlalchemy.orm import Session

from dealfinder.core.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT
from dealfinder.core.errors import require_positive
from dealfinder.models.deal_score import DealScore
from dealfinder.models.match_deal_summary import MatchDealSummary
from dealfinder.schemas import DealScoreOut, MarketOverview, MatchDealSummaryOut, TrendingMatch, deal_score_out, summary_out
from dealfinder.services.analytics.overview import build_market_overview
from dealfinder.services.analytics.trending import build_price_drops, build_trending
from dealfinder.services.cache import TAG_ANALYTICS, ReadCache, cached
from dealfinder.services.provider_service import list_active_providers

logger = logging.getLogger(__name__)


def _all_deals(db: Session) -> list[DealScoreOut]:
    rows = db.query(DealScore).order_by(DealScore.deal_score.desc(), DealScore.current_price.asc(), DealScore.id.asc()).all()
    return [deal_score_out(r) for r in rows]


def _all_summaries(db: Session) -> list[MatchDealSummaryOut]:
    rows = db.query(MatchDealSummary).order_by(MatchDealSummary.lowest_price.asc(), MatchDealSummary.match_id.asc()).all()
    return [summary_out(r) for r in rows]


def get_market_overview(db: Session, cache: ReadCache | None = None) -> MarketOverview:
    def compute() -> MarketOverview:
        logger.debug("Computing market overview")
        return build_market_overview(_all_deals(db), _all_summaries(db), len(list_active_providers(db)))

    return cached(cache, "analytics:overview", [TAG_ANALYTICS], compute)


def get_trending_matches(db: Session, cache: ReadCache | None = None, limit: int = DEFAULT_LIST_LIMIT) -> list[TrendingMatch]:
    require_positive("limit", limit, MAX_LIST_LIMIT)

    def compute() -> list[TrendingMatch]:
        logger.debug("Computing trending matches, limit=%s", limit)
        return build_trending(_all_summaries(db), _all_deals(db), limit)

    return cached(cache, f"analytics:trending:{limit}", [TAG_ANALYTICS], compute)


def get_biggest_price_drops(db: Session, cache: ReadCache | None = None, limit: int = DEFAULT_LIST_LIMIT) -> list[TrendingMatch]:
    require_positive("limit", limit, MAX_LIST_LIMIT)

    def compute() -> list[TrendingMatch]:
        logger.debug("Computing biggest price drops, limit=%s", limit)
        return build_price_drops(_all_summaries(db), _all_deals(db), limit)

    return cached(cache, f"analytics:price_drops:{limit}", [TAG_ANALYTICS], compute)
