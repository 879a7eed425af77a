"""
Simulated marketplace for providers without a public API (StubHub, Viagogo, ...).

Quotes are pseudo-random but deterministic per (provider, fixture, day), so repeated
fetches within a day agree and prices drift day to day like a real market.
"""
import random
from datetime import date
from decimal import Decimal
from typing import Callable

from dealfinder.core.constants import SOURCE_SIMULATED
from dealfinder.core.money import round2
from dealfinder.services.providers.types import RawPriceObservation, stable_hash

NUM_FIXTURES = 18
EVENT_ID_PREFIX = "fifa-world-cup-2026-match-"


def _price_band(fixture: int) -> tuple[float, float]:
    """Group stage is cheapest, knockouts and the final most expensive."""
    if fixture <= 12:
        return 80.0, 250.0
    if fixture <= 16:
        return 150.0, 450.0
    return 250.0, 800.0


class SimulatedProvider:
    """Answers only the primary keyword so one fetch pass quotes each fixture once."""

    def __init__(
        self,
        provider_name: str,
        website_url: str,
        primary_keyword: str,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.provider_name = provider_name
        self._website_url = website_url.rstrip("/")
        self._primary_keyword = primary_keyword
        self._today = today

    def fetch_prices(self, keyword: str) -> list[RawPriceObservation]:
        if keyword != self._primary_keyword:
            return []
        day = self._today().isoformat()
        results: list[RawPriceObservation] = []
        for fixture in range(1, NUM_FIXTURES + 1):
            rng = random.Random(stable_hash(f"{self.provider_name}|{fixture}|{day}"))
            # Not every marketplace lists every fixture
            if rng.random() < 0.25:
                continue
            low, high = _price_band(fixture)
            event_id = f"{EVENT_ID_PREFIX}{fixture}"
            results.append(
                RawPriceObservation(
                    event_id=event_id,
                    event_name=f"FIFA World Cup 2026 Match {fixture}",
                    base_price=round2(Decimal(str(low + rng.random() * (high - low)))),
                    booking_url=f"{self._website_url}/event/{event_id}",
                    source_type=SOURCE_SIMULATED,
                )
            )
        return results
