"""
Market statistics for one match: latest price per provider, market average, and the
trailing-window low/high and per-provider trend points.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from dealfinder.core.constants import TREND_WINDOW_DAYS
from dealfinder.core.money import ZERO, mean2, round2
from dealfinder.models.price_snapshot import PriceSnapshot


@dataclass
class MarketStats:
    market_average: Decimal
    price_7d_low: Decimal
    price_7d_high: Decimal
    # provider_id -> total prices in the window, newest first
    history_by_provider: dict[int, list[Decimal]] = field(default_factory=dict)


def distinct_match_ids(db: Session) -> list[int]:
    """Every match id that has at least one snapshot, ascending."""
    rows = db.execute(select(PriceSnapshot.match_id).distinct().order_by(PriceSnapshot.match_id)).all()
    return [r[0] for r in rows]


def load_latest_snapshots(db: Session, match_id: int) -> list[PriceSnapshot]:
    """
    Latest snapshot per provider for a match, ordered by provider id.
    Equal fetched_at timestamps resolve to the most recently inserted row (highest id).
    """
    ranked = (
        select(
            PriceSnapshot.id.label("snapshot_id"),
            func.row_number()
            .over(
                partition_by=PriceSnapshot.provider_id,
                order_by=(PriceSnapshot.fetched_at.desc(), PriceSnapshot.id.desc()),
            )
            .label("rn"),
        )
        .where(PriceSnapshot.match_id == match_id)
        .subquery()
    )
    return (
        db.query(PriceSnapshot)
        .join(ranked, ranked.c.snapshot_id == PriceSnapshot.id)
        .filter(ranked.c.rn == 1)
        .order_by(PriceSnapshot.provider_id.asc())
        .all()
    )


def load_window_snapshots(db: Session, match_id: int, since: datetime) -> list[PriceSnapshot]:
    """Snapshots for a match fetched at or after since, newest first."""
    return (
        db.query(PriceSnapshot)
        .filter(PriceSnapshot.match_id == match_id, PriceSnapshot.fetched_at >= since)
        .order_by(PriceSnapshot.fetched_at.desc(), PriceSnapshot.id.desc())
        .all()
    )


def window_start(now: datetime, days: int = TREND_WINDOW_DAYS) -> datetime:
    return now - timedelta(days=days)


def compute_market_stats(latest: list[PriceSnapshot], window: list[PriceSnapshot]) -> MarketStats:
    """window must be ordered newest first (as load_window_snapshots returns it)."""
    average = mean2([s.total_price for s in latest])
    window_prices = [s.total_price for s in window]
    low = round2(min(window_prices)) if window_prices else round2(ZERO)
    high = round2(max(window_prices)) if window_prices else round2(ZERO)
    history: dict[int, list[Decimal]] = defaultdict(list)
    for s in window:
        history[s.provider_id].append(s.total_price)
    return MarketStats(
        market_average=average,
        price_7d_low=low,
        price_7d_high=high,
        history_by_provider=dict(history),
    )
