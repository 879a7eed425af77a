"""
Pure deal-scoring formulas. No database access; every function is deterministic in its inputs.
"""
from decimal import Decimal

from dealfinder.core.constants import (
    BUY_NOW,
    BUY_WAIT,
    GOOD_DEAL_SCORE,
    GREAT_DEAL_SCORE,
    NEUTRAL_DEAL_SCORE,
    TREND_DOWN,
    TREND_STABLE,
    TREND_THRESHOLD_PCT,
    TREND_UP,
)
from dealfinder.core.money import HUNDRED, ZERO, round2, round_int, to_decimal

RECOMMEND_WAIT_DOWN = "Prices are trending down. Consider waiting for a better deal."
RECOMMEND_GREAT = "Great deal! This price is well below the market average."
RECOMMEND_GOOD = "Good price. Worth buying now."
RECOMMEND_RISING = "Prices are rising. Buy now before they go higher."
RECOMMEND_FAIR = "Fair price. Good time to purchase."


def compute_deal_score(current_price: Decimal, market_average: Decimal) -> int:
    """
    Linear 0–100 scale around the market average: 50 at the average, 100 at a price of
    zero, 0 at double the average. A non-positive average gives the neutral 50.
    """
    if market_average <= ZERO:
        return NEUTRAL_DEAL_SCORE
    ratio = to_decimal(current_price) / to_decimal(market_average)
    score = round_int(HUNDRED - ratio * Decimal(50))
    return max(0, min(100, score))


def compute_savings_percentage(current_price: Decimal, market_average: Decimal) -> Decimal:
    """Percent below the market average (negative when above). 0 without a usable average."""
    if market_average <= ZERO:
        return round2(ZERO)
    return round2((market_average - current_price) / market_average * HUNDRED)


def compute_trend_percentage(prices_newest_first: list[Decimal]) -> Decimal:
    """(newest − oldest) / oldest × 100 over one provider's window; 0 with < 2 points or oldest ≤ 0."""
    if len(prices_newest_first) < 2:
        return round2(ZERO)
    newest = prices_newest_first[0]
    oldest = prices_newest_first[-1]
    if oldest <= ZERO:
        return round2(ZERO)
    return round2((newest - oldest) / oldest * HUNDRED)


def classify_trend(trend_percentage: Decimal) -> str:
    if trend_percentage > TREND_THRESHOLD_PCT:
        return TREND_UP
    if trend_percentage < -TREND_THRESHOLD_PCT:
        return TREND_DOWN
    return TREND_STABLE


def recommend(deal_score: int, trend: str) -> tuple[str, str]:
    """(best_time_to_buy, recommendation). First matching rule wins."""
    if trend == TREND_DOWN:
        return BUY_WAIT, RECOMMEND_WAIT_DOWN
    if deal_score >= GREAT_DEAL_SCORE:
        return BUY_NOW, RECOMMEND_GREAT
    if deal_score >= GOOD_DEAL_SCORE:
        return BUY_NOW, RECOMMEND_GOOD
    if trend == TREND_UP:
        return BUY_NOW, RECOMMEND_RISING
    return BUY_NOW, RECOMMEND_FAIR
