"""Market-wide overview: one pass over every deal score and match summary."""
from decimal import ROUND_HALF_UP, Decimal

from dealfinder.core.constants import BUY_NOW, HOT_DEAL_SCORE, TREND_DOWN, TREND_STABLE, TREND_UP
from dealfinder.core.money import mean2
from dealfinder.schemas import DealScoreOut, MarketOverview, MatchDealSummaryOut


def _round1(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def build_market_overview(
    deals: list[DealScoreOut],
    summaries: list[MatchDealSummaryOut],
    active_provider_count: int,
) -> MarketOverview:
    """Zeroed overview (still carrying the provider count) when there are no deals."""
    if not deals:
        return MarketOverview(total_providers=active_provider_count)

    trend_counts = {TREND_DOWN: 0, TREND_UP: 0, TREND_STABLE: 0}
    buy_now = 0
    for s in summaries:
        if s.overall_trend in trend_counts:
            trend_counts[s.overall_trend] += 1
        if s.best_time_to_buy == BUY_NOW:
            buy_now += 1

    lows = [s.lowest_price for s in summaries]
    highs = [s.highest_price for s in summaries]
    score_mean = Decimal(sum(d.deal_score for d in deals)) / Decimal(len(deals))
    buy_now_pct = Decimal(buy_now) / Decimal(len(summaries)) * 100 if summaries else Decimal(0)

    return MarketOverview(
        total_matches=len(summaries),
        total_providers=active_provider_count,
        total_deals=len(deals),
        overall_lowest_price=min(lows) if lows else Decimal("0"),
        overall_highest_price=max(highs) if highs else Decimal("0"),
        average_price=mean2([d.current_price for d in deals]),
        average_deal_score=_round1(score_mean),
        hot_deal_count=sum(1 for d in deals if d.deal_score >= HOT_DEAL_SCORE),
        prices_down_count=trend_counts[TREND_DOWN],
        prices_up_count=trend_counts[TREND_UP],
        prices_stable_count=trend_counts[TREND_STABLE],
        buy_now_percentage=_round1(buy_now_pct),
    )
