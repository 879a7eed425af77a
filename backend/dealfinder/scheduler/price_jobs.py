"""
Periodic passes run by the API process's BackgroundScheduler:
fetch prices from every provider, then (on its own interval) rescore every match.

Jobs never raise: a failed pass is logged and the next tick retries.
"""
import logging

from dealfinder.core.constants import FETCH_TYPE_SCHEDULED
from dealfinder.db.session import SessionLocal
from dealfinder.services.cache import read_cache
from dealfinder.services.ingestion import fetch_all_prices
from dealfinder.services.scoring import compute_all_scores

logger = logging.getLogger(__name__)


def run_fetch_job() -> None:
    try:
        total = fetch_all_prices(SessionLocal, cache=read_cache, fetch_type=FETCH_TYPE_SCHEDULED)
        logger.info("Scheduled price fetch saved %s snapshots", total)
    except Exception as e:
        logger.exception("Scheduled price fetch failed: %s", e)


def run_score_job() -> None:
    try:
        result = compute_all_scores(SessionLocal, cache=read_cache)
        logger.info(
            "Scheduled scoring: %s matches, %s scored, %s failed",
            result["matches"], result["scored"], result["failed"],
        )
    except Exception as e:
        logger.exception("Scheduled scoring failed: %s", e)
