"""Builders shared by the test modules."""
from datetime import datetime
from decimal import Decimal

from dealfinder.core.constants import CATEGORY_GENERAL, SOURCE_REAL_API
from dealfinder.models import PriceSnapshot, Provider
from dealfinder.services.providers.types import RawPriceObservation


def add_snapshot(db, provider: Provider, match_id: int, total: str, fetched_at: datetime) -> PriceSnapshot:
    """Persist one fee-free snapshot (base == total) and commit."""
    price = Decimal(total)
    row = PriceSnapshot(
        match_id=match_id,
        provider_id=provider.id,
        category=CATEGORY_GENERAL,
        base_price=price,
        fee_amount=Decimal("0"),
        total_price=price,
        currency="USD",
        availability_status="AVAILABLE",
        booking_url=f"https://example.com/{provider.name}/{match_id}",
        source_type=SOURCE_REAL_API,
        fetched_at=fetched_at,
    )
    db.add(row)
    db.commit()
    return row


class FakeClient:
    """Provider client returning canned quotes per keyword, or raising."""

    def __init__(self, provider_name: str, quotes: dict[str, list[tuple[str, str]]] | None = None, error: Exception | None = None):
        self.provider_name = provider_name
        self.quotes = quotes or {}
        self.error = error
        self.calls: list[str] = []

    def fetch_prices(self, keyword: str) -> list[RawPriceObservation]:
        self.calls.append(keyword)
        if self.error is not None:
            raise self.error
        return [
            RawPriceObservation(event_id=event_id, base_price=Decimal(price), booking_url=f"https://example.com/{event_id}")
            for event_id, price in self.quotes.get(keyword, [])
        ]
