"""
Fetch pass. Providers are independent units: each runs in its own worker thread with its own
session, and a failing or slow provider only affects its own fetch log row and count.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Iterable

from sqlalchemy.orm import Session

from dealfinder.config import settings
from dealfinder.core.constants import (
    CATEGORY_GENERAL,
    FETCH_STATUS_FAILED,
    FETCH_STATUS_SUCCESS,
    FETCH_TYPE_MANUAL,
)
from dealfinder.core.money import HUNDRED, ZERO, round2, to_decimal
from dealfinder.models.fetch_log import FetchLog
from dealfinder.models.price_snapshot import PriceSnapshot
from dealfinder.models.provider import Provider
from dealfinder.services.cache import ReadCache, invalidate_after_fetch
from dealfinder.services.provider_service import get_provider_by_name
from dealfinder.services.providers.base import TicketProvider
from dealfinder.services.providers.types import RawPriceObservation, match_id_for_event

logger = logging.getLogger(__name__)

MAX_ERROR_MESSAGE_LEN = 2000


def compute_fee(base_price: Decimal, fee_percentage: Decimal) -> Decimal:
    """Buyer fee = base × pct / 100, 2 dp half-up."""
    return round2(base_price * to_decimal(fee_percentage) / HUNDRED)


def build_snapshots(
    provider: Provider,
    observations: Iterable[RawPriceObservation],
    fetched_at: datetime,
    match_id_modulus: int,
) -> list[PriceSnapshot]:
    """
    Normalize observations into unsaved PriceSnapshot rows. Observations with a
    non-positive base price are dropped; one that fails to convert is skipped with a warning.
    """
    snapshots: list[PriceSnapshot] = []
    for obs in observations:
        try:
            base_price = round2(to_decimal(obs.base_price))
            if base_price <= ZERO:
                continue
            fee_amount = compute_fee(base_price, provider.fee_percentage)
            snapshots.append(
                PriceSnapshot(
                    match_id=match_id_for_event(obs.event_id, match_id_modulus),
                    provider_id=provider.id,
                    category=CATEGORY_GENERAL,
                    base_price=base_price,
                    fee_amount=fee_amount,
                    total_price=base_price + fee_amount,
                    currency=obs.currency,
                    availability_status=obs.availability_status,
                    booking_url=obs.booking_url,
                    source_type=obs.source_type,
                    fetched_at=fetched_at,
                )
            )
        except Exception as e:
            logger.warning("%s: skip observation %r: %s", provider.name, obs, e)
            continue
    return snapshots


def _log_fetch(
    db: Session,
    provider: Provider | None,
    provider_name: str,
    fetch_type: str,
    status: str,
    records_fetched: int,
    error_message: str | None,
    started_at: datetime,
) -> None:
    completed_at = datetime.now(timezone.utc)
    db.add(
        FetchLog(
            provider_id=provider.id if provider is not None else None,
            provider_name=provider_name,
            fetch_type=fetch_type,
            status=status,
            records_fetched=records_fetched,
            error_message=error_message[:MAX_ERROR_MESSAGE_LEN] if error_message else None,
            started_at=started_at,
            completed_at=completed_at,
            duration_ms=int((completed_at - started_at).total_seconds() * 1000),
        )
    )
    db.commit()


def fetch_from_provider(
    session_factory: Callable[[], Session],
    client: TicketProvider,
    keywords: list[str],
    fetch_type: str = FETCH_TYPE_MANUAL,
    match_id_modulus: int | None = None,
) -> int:
    """
    Run every keyword against one client and append its snapshots in one commit.
    Never raises for client failures: they become a FAILED fetch log row and 0 records.
    """
    modulus = match_id_modulus or settings.match_id_modulus
    name = client.provider_name
    started_at = datetime.now(timezone.utc)
    db = session_factory()
    try:
        provider = get_provider_by_name(db, name)
        if provider is None:
            logger.warning("Provider %s not found in database; skipping fetch", name)
            _log_fetch(db, None, name, fetch_type, FETCH_STATUS_FAILED, 0,
                       f"Provider not found: {name}", started_at)
            return 0
        if not provider.is_active:
            logger.info("Provider %s inactive; skipping fetch", name)
            return 0

        try:
            logger.info("Fetching prices from %s", name)
            snapshots: list[PriceSnapshot] = []
            for keyword in keywords:
                observations = client.fetch_prices(keyword)
                snapshots.extend(
                    build_snapshots(provider, observations, datetime.now(timezone.utc), modulus)
                )
            if snapshots:
                db.add_all(snapshots)
                db.commit()
        except Exception as e:
            db.rollback()
            logger.warning("Error fetching from %s: %s", name, e, exc_info=True)
            _log_fetch(db, provider, name, fetch_type, FETCH_STATUS_FAILED, 0,
                       str(e) or type(e).__name__, started_at)
            return 0

        _log_fetch(db, provider, name, fetch_type, FETCH_STATUS_SUCCESS, len(snapshots), None, started_at)
        logger.info("%s: saved %s price snapshots", name, len(snapshots))
        return len(snapshots)
    finally:
        db.close()


def fetch_all_prices(
    session_factory: Callable[[], Session],
    clients: list[TicketProvider] | None = None,
    *,
    keywords: list[str] | None = None,
    cache: ReadCache | None = None,
    fetch_type: str = FETCH_TYPE_MANUAL,
    max_workers: int | None = None,
) -> int:
    """
    One fetch pass across all provider clients (fan-out/fan-in). Returns the number of
    snapshots saved by providers that succeeded. Cache views over snapshots are
    invalidated once every provider has finished.
    """
    if clients is None:
        from dealfinder.services.providers.registry import all_providers

        clients = all_providers()
    keywords = keywords if keywords is not None else settings.keyword_list()
    workers = max(1, min(max_workers or settings.fetch_max_workers, len(clients) or 1))
    logger.info("Starting price fetch from %s providers (%s workers)", len(clients), workers)

    total = 0
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="price_fetch") as executor:
        futures = {
            executor.submit(fetch_from_provider, session_factory, client, keywords, fetch_type): client
            for client in clients
        }
        for future in as_completed(futures):
            client = futures[future]
            try:
                total += future.result()
            except Exception as e:
                # fetch log itself could not be written; the provider still counts as failed
                logger.exception("Fetch task for %s failed: %s", client.provider_name, e)

    invalidate_after_fetch(cache)
    logger.info("Price fetch complete. Total snapshots saved: %s", total)
    return total
