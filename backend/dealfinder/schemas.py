"""Response shapes for the read API. Built from ORM rows; safe to cache after the session closes."""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProviderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    display_name: str
    website_url: str
    fee_percentage: Decimal
    trust_score: int
    has_buyer_protection: bool
    api_type: str
    is_active: bool
    priority: int


class PriceSnapshotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    match_id: int
    provider_id: int
    provider_name: str | None = None
    category: str
    base_price: Decimal
    fee_amount: Decimal
    total_price: Decimal
    currency: str
    availability_status: str
    booking_url: str | None = None
    source_type: str
    fetched_at: datetime


class DealScoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    match_id: int
    provider_id: int
    provider_name: str | None = None
    category: str
    deal_score: int
    current_price: Decimal
    market_average: Decimal
    savings_percentage: Decimal
    price_trend: str
    trend_percentage: Decimal
    price_7d_low: Decimal
    price_7d_high: Decimal
    best_time_to_buy: str
    recommendation: str
    booking_url: str | None = None
    last_computed_at: datetime


class MatchDealSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    match_id: int
    category: str
    lowest_price: Decimal
    highest_price: Decimal
    average_price: Decimal
    best_provider_id: int
    best_provider_name: str | None = None
    best_deal_score: int
    num_providers: int
    overall_trend: str
    best_time_to_buy: str
    last_computed_at: datetime


class DealComparison(BaseModel):
    match_id: int
    summary: MatchDealSummaryOut | None = None
    deals: list[DealScoreOut] = Field(default_factory=list)
    last_updated: datetime | None = None


class MarketOverview(BaseModel):
    total_matches: int = 0
    total_providers: int = 0
    total_deals: int = 0
    overall_lowest_price: Decimal = Decimal("0")
    overall_highest_price: Decimal = Decimal("0")
    average_price: Decimal = Decimal("0")
    average_deal_score: float = 0.0
    hot_deal_count: int = 0
    prices_down_count: int = 0
    prices_up_count: int = 0
    prices_stable_count: int = 0
    buy_now_percentage: float = 0.0


class TrendingMatch(BaseModel):
    rank: int = 0
    match_id: int
    popularity_score: int = 0
    best_deal_score: int
    lowest_price: Decimal
    average_price: Decimal
    price_spread: Decimal
    num_providers: int
    price_trend: str
    best_provider_name: str | None = None
    max_savings_percentage: Decimal
    best_time_to_buy: str
    trending_reason: str


class FetchLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    provider_id: int | None = None
    provider_name: str | None = None
    fetch_type: str
    status: str
    records_fetched: int
    error_message: str | None = None
    started_at: datetime
    completed_at: datetime | None = None
    duration_ms: int | None = None


def snapshot_out(row) -> PriceSnapshotOut:
    out = PriceSnapshotOut.model_validate(row)
    out.provider_name = row.provider.name if row.provider is not None else None
    return out


def deal_score_out(row) -> DealScoreOut:
    out = DealScoreOut.model_validate(row)
    out.provider_name = row.provider.name if row.provider is not None else None
    return out


def summary_out(row) -> MatchDealSummaryOut:
    out = MatchDealSummaryOut.model_validate(row)
    out.best_provider_name = row.best_provider.name if row.best_provider is not None else None
    return out
