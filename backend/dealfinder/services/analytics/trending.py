"""
Match rankings over the current summaries: popularity-ranked trending list and
savings-ranked price drops. Ties keep the input order (summaries by lowest price).
"""
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal

from dealfinder.core.constants import (
    BUY_NOW,
    COMPETITIVE_PROVIDER_COUNT,
    HOT_DEAL_SCORE,
    HOT_TRENDING_POPULARITY,
    POPULARITY_BUY_NOW_BONUS,
    POPULARITY_DEAL_WEIGHT,
    POPULARITY_MAX,
    POPULARITY_PER_PROVIDER,
    POPULARITY_PROVIDER_CAP,
    POPULARITY_SAVINGS_CAP,
    POPULARITY_TREND_BONUS,
    TREND_DOWN,
)
from dealfinder.core.money import ZERO
from dealfinder.schemas import DealScoreOut, MatchDealSummaryOut, TrendingMatch

REASON_HOT = "Hot deal with excellent savings and strong provider competition"
REASON_DOWN = "Prices trending down - good time to watch for deals"
REASON_HIGH_SCORE = "High deal score with competitive pricing from multiple providers"
REASON_COMPETITION = "Strong provider competition driving better prices"
REASON_ACTIVE = "Active market with multiple pricing options available"


def savings_by_match(deals: list[DealScoreOut]) -> dict[int, list[Decimal]]:
    out: dict[int, list[Decimal]] = defaultdict(list)
    for d in deals:
        if d.savings_percentage is not None:
            out[d.match_id].append(d.savings_percentage)
    return out


def popularity_score(summary: MatchDealSummaryOut, max_positive_savings: Decimal) -> int:
    """Sum of five capped integer factors, clamped to [0, 100]."""
    score = int(Decimal(summary.best_deal_score) * Decimal(str(POPULARITY_DEAL_WEIGHT)))
    score += min(POPULARITY_PROVIDER_CAP, summary.num_providers * POPULARITY_PER_PROVIDER)
    score += POPULARITY_TREND_BONUS.get(summary.overall_trend, 0)
    score += min(POPULARITY_SAVINGS_CAP, int(max(max_positive_savings, ZERO)))
    if summary.best_time_to_buy == BUY_NOW:
        score += POPULARITY_BUY_NOW_BONUS
    return max(0, min(POPULARITY_MAX, score))


def trending_reason(summary: MatchDealSummaryOut, popularity: int) -> str:
    if popularity >= HOT_TRENDING_POPULARITY:
        return REASON_HOT
    if summary.overall_trend == TREND_DOWN:
        return REASON_DOWN
    if summary.best_deal_score >= HOT_DEAL_SCORE:
        return REASON_HIGH_SCORE
    if summary.num_providers >= COMPETITIVE_PROVIDER_COUNT:
        return REASON_COMPETITION
    return REASON_ACTIVE


def _entry(summary: MatchDealSummaryOut, max_savings: Decimal, reason: str, popularity: int = 0) -> TrendingMatch:
    return TrendingMatch(
        match_id=summary.match_id,
        popularity_score=popularity,
        best_deal_score=summary.best_deal_score,
        lowest_price=summary.lowest_price,
        average_price=summary.average_price,
        price_spread=summary.highest_price - summary.lowest_price,
        num_providers=summary.num_providers,
        price_trend=summary.overall_trend,
        best_provider_name=summary.best_provider_name,
        max_savings_percentage=max_savings,
        best_time_to_buy=summary.best_time_to_buy,
        trending_reason=reason,
    )


def _ranked(entries: list[TrendingMatch], limit: int) -> list[TrendingMatch]:
    top = entries[:limit]
    for i, entry in enumerate(top, start=1):
        entry.rank = i
    return top


def build_trending(
    summaries: list[MatchDealSummaryOut],
    deals: list[DealScoreOut],
    limit: int,
) -> list[TrendingMatch]:
    savings = savings_by_match(deals)
    entries: list[TrendingMatch] = []
    for summary in summaries:
        match_savings = savings.get(summary.match_id, [])
        positive = [s for s in match_savings if s > ZERO]
        popularity = popularity_score(summary, max(positive) if positive else ZERO)
        entries.append(
            _entry(
                summary,
                max(match_savings) if match_savings else ZERO,
                trending_reason(summary, popularity),
                popularity,
            )
        )
    entries.sort(key=lambda e: e.popularity_score, reverse=True)
    return _ranked(entries, limit)


def build_price_drops(
    summaries: list[MatchDealSummaryOut],
    deals: list[DealScoreOut],
    limit: int,
) -> list[TrendingMatch]:
    savings = savings_by_match(deals)
    entries: list[TrendingMatch] = []
    for summary in summaries:
        positive = [s for s in savings.get(summary.match_id, []) if s > ZERO]
        if not positive:
            continue
        best = max(positive)
        pct = best.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        entries.append(_entry(summary, best, f"Save up to {pct}% vs market average"))
    entries.sort(key=lambda e: e.max_savings_percentage, reverse=True)
    return _ranked(entries, limit)
