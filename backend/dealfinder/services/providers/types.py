"""Normalized observation shape for all ticket providers. Same shape regardless of Ticketmaster/SeatGeek/etc."""
import hashlib
from decimal import Decimal

from dealfinder.core.constants import AVAILABILITY_AVAILABLE, DEFAULT_CURRENCY, SOURCE_REAL_API


def stable_hash(value: str) -> int:
    """31-bit hash of a string that is identical across processes (unlike hash())."""
    digest = hashlib.sha256((value or "").encode()).digest()
    return int.from_bytes(digest[:4], "big") & 0x7FFFFFFF


def match_id_for_event(event_id: str, modulus: int) -> int:
    """
    Map a provider's event id into the internal match id range [0, modulus).
    Best-effort correlation only: distinct events can collide, and the same fixture listed
    under different ids by two providers lands on two match ids.
    """
    return stable_hash(str(event_id)) % modulus


class RawPriceObservation:
    """One price quote returned by a provider client, before fee normalization."""

    __slots__ = (
        "event_id",
        "event_name",
        "base_price",
        "currency",
        "booking_url",
        "source_type",
        "availability_status",
    )

    def __init__(
        self,
        *,
        event_id: str,
        base_price: Decimal,
        booking_url: str | None = None,
        event_name: str = "",
        currency: str | None = None,
        source_type: str = SOURCE_REAL_API,
        availability_status: str = AVAILABILITY_AVAILABLE,
    ):
        self.event_id = event_id
        self.event_name = event_name
        self.base_price = base_price
        self.currency = (currency or DEFAULT_CURRENCY).upper()[:3]
        self.booking_url = booking_url
        self.source_type = source_type
        self.availability_status = availability_status

    def __repr__(self) -> str:
        return f"RawPriceObservation(event_id={self.event_id!r}, base_price={self.base_price})"
