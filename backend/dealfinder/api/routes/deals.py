"""
Deal finder read API plus the two manual admin triggers.

Services raise DealFinderError subclasses; the app-level handler maps them to HTTP.
"""
import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response
from sqlalchemy.orm import Session, sessionmaker

from dealfinder.api.deps import get_read_cache
from dealfinder.core.constants import (
    DEFAULT_FETCH_LOG_LIMIT,
    DEFAULT_HISTORY_DAYS,
    DEFAULT_LIST_LIMIT,
    FETCH_TYPE_MANUAL,
)
from dealfinder.db.session import get_db
from dealfinder.schemas import (
    DealComparison,
    DealScoreOut,
    FetchLogOut,
    MarketOverview,
    MatchDealSummaryOut,
    PriceSnapshotOut,
    ProviderOut,
    TrendingMatch,
)
from dealfinder.services import comparison_service, provider_service
from dealfinder.services.analytics import get_biggest_price_drops, get_market_overview, get_trending_matches
from dealfinder.services.cache import ReadCache
from dealfinder.services.fetch_log_service import list_fetch_logs
from dealfinder.services.ingestion import fetch_all_prices
from dealfinder.services.scoring import compute_all_scores

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Match comparisons ---


@router.get("/match/{match_id}", response_model=DealComparison)
def deals_for_match(
    match_id: int,
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
):
    return comparison_service.get_deals_for_match(db, cache, match_id)


@router.get("/match/{match_id}/cheapest", response_model=DealScoreOut)
def cheapest_deal(
    match_id: int,
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
):
    deal = comparison_service.get_cheapest_deal(db, cache, match_id)
    if deal is None:
        return Response(status_code=204)
    return deal


@router.get("/match/{match_id}/history", response_model=list[PriceSnapshotOut])
def price_history(
    match_id: int,
    days: int = Query(DEFAULT_HISTORY_DAYS),
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
):
    return comparison_service.get_price_history(db, cache, match_id, days)


@router.get("/top", response_model=list[DealScoreOut])
def top_deals(
    limit: int = Query(DEFAULT_LIST_LIMIT),
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
):
    return comparison_service.get_top_deals(db, cache, limit)


@router.get("/summaries", response_model=list[MatchDealSummaryOut])
def summaries(db: Session = Depends(get_db), cache: ReadCache = Depends(get_read_cache)):
    return comparison_service.get_all_summaries(db, cache)


# --- Providers ---


@router.get("/providers", response_model=list[ProviderOut])
def providers(db: Session = Depends(get_db)):
    return provider_service.list_active_providers(db)


@router.get("/providers/{provider_id}", response_model=ProviderOut)
def provider(provider_id: int, db: Session = Depends(get_db)):
    return provider_service.get_provider_by_id(db, provider_id)


# --- Analytics ---


@router.get("/analytics/overview", response_model=MarketOverview)
def market_overview(db: Session = Depends(get_db), cache: ReadCache = Depends(get_read_cache)):
    return get_market_overview(db, cache)


@router.get("/analytics/trending", response_model=list[TrendingMatch])
def trending(
    limit: int = Query(DEFAULT_LIST_LIMIT),
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
):
    return get_trending_matches(db, cache, limit)


@router.get("/analytics/price-drops", response_model=list[TrendingMatch])
def price_drops(
    limit: int = Query(DEFAULT_LIST_LIMIT),
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
):
    return get_biggest_price_drops(db, cache, limit)


# --- Fetch audit ---


@router.get("/fetch-logs", response_model=list[FetchLogOut])
def fetch_logs(
    status: str | None = Query(None),
    limit: int = Query(DEFAULT_FETCH_LOG_LIMIT),
    db: Session = Depends(get_db),
):
    return list_fetch_logs(db, status, limit)


# --- Admin triggers ---


def _session_factory(request_db: Session) -> sessionmaker:
    # Pass workers open their own sessions on the request session's engine.
    return sessionmaker(bind=request_db.get_bind(), autocommit=False, autoflush=False)


@router.post("/admin/fetch-prices")
def trigger_fetch(db: Session = Depends(get_db), cache: ReadCache = Depends(get_read_cache)) -> dict[str, Any]:
    """Run one fetch pass now (blocking). Provider failures are recorded, not raised."""
    total = fetch_all_prices(_session_factory(db), cache=cache, fetch_type=FETCH_TYPE_MANUAL)
    return {"status": "completed", "records_fetched": total}


@router.post("/admin/compute-scores", status_code=202)
def trigger_scoring(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    cache: ReadCache = Depends(get_read_cache),
) -> dict[str, Any]:
    """Queue a full scoring pass; returns immediately."""
    background_tasks.add_task(compute_all_scores, _session_factory(db), cache=cache)
    return {"status": "accepted"}
