"""Ticketmaster provider. Uses the Discovery API events search; one observation per price range."""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from dealfinder.core.errors import ProviderConfigError
from dealfinder.core.money import ZERO, to_decimal
from dealfinder.services.providers._http import get_json
from dealfinder.services.providers.types import RawPriceObservation

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
CLASSIFICATION = "Soccer"


def _parse_response(data: dict[str, Any]) -> list[RawPriceObservation]:
    """Parse events.json into observations. Malformed events are skipped, not fatal."""
    embedded = data.get("_embedded")
    if not isinstance(embedded, dict):
        return []
    events = embedded.get("events") or []
    if not isinstance(events, list):
        return []
    results: list[RawPriceObservation] = []
    for event in events:
        try:
            if not isinstance(event, dict):
                continue
            price_ranges = event.get("priceRanges") or []
            if not isinstance(price_ranges, list):
                continue
            event_id = str(event.get("id") or "").strip()
            if not event_id:
                continue
            for price_range in price_ranges:
                min_price = to_decimal(price_range.get("min") or 0)
                if min_price <= ZERO:
                    continue
                results.append(
                    RawPriceObservation(
                        event_id=event_id,
                        event_name=(event.get("name") or "").strip(),
                        base_price=min_price,
                        currency=price_range.get("currency"),
                        booking_url=(event.get("url") or "").strip() or None,
                    )
                )
        except (AttributeError, TypeError, InvalidOperation) as e:
            logger.warning("Ticketmaster skip malformed event: %s", e)
            continue
    return results


class TicketmasterProvider:
    provider_name = "Ticketmaster"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def fetch_prices(self, keyword: str) -> list[RawPriceObservation]:
        if not self._api_key:
            raise ProviderConfigError(self.provider_name, "TICKETMASTER_API_KEY not configured")
        data = get_json(
            self.provider_name,
            f"{self._base_url}/events.json",
            {
                "keyword": keyword,
                "classificationName": CLASSIFICATION,
                "size": PAGE_SIZE,
                "apikey": self._api_key,
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        results = _parse_response(data)
        logger.info("Ticketmaster: %s observations for keyword %r", len(results), keyword)
        return results
