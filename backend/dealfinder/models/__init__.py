from dealfinder.models.deal_score import DealScore
from dealfinder.models.fetch_log import FetchLog
from dealfinder.models.match_deal_summary import MatchDealSummary
from dealfinder.models.price_snapshot import PriceSnapshot
from dealfinder.models.provider import Provider

__all__ = [
    "DealScore",
    "FetchLog",
    "MatchDealSummary",
    "PriceSnapshot",
    "Provider",
]
