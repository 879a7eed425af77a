"""
Deal scoring: market statistics per match, 0–100 deal score per provider, trend and
buy/wait recommendation, and the per-match summary rollup.
"""
from dealfinder.services.scoring.compute import compute_all_scores, compute_scores_for_match
from dealfinder.services.scoring.score import (
    classify_trend,
    compute_deal_score,
    compute_savings_percentage,
    compute_trend_percentage,
    recommend,
)

__all__ = [
    "classify_trend",
    "compute_all_scores",
    "compute_deal_score",
    "compute_savings_percentage",
    "compute_scores_for_match",
    "compute_trend_percentage",
    "recommend",
]
