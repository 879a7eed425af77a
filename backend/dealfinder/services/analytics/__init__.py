"""
Market analytics over scored data: overview totals, trending matches, biggest price drops.
Pure functions of persisted state; the only side effect is populating their cache entries.
"""
from dealfinder.services.analytics.queries import (
    get_biggest_price_drops,
    get_market_overview,
    get_trending_matches,
)

__all__ = ["get_biggest_price_drops", "get_market_overview", "get_trending_matches"]
