"""SeatGeek provider. One observation per event from stats.lowest_price."""
import logging
from decimal import InvalidOperation
from typing import Any

import httpx

from dealfinder.core.errors import ProviderConfigError
from dealfinder.core.money import ZERO, to_decimal
from dealfinder.services.providers._http import get_json
from dealfinder.services.providers.types import RawPriceObservation

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


def _parse_response(data: dict[str, Any]) -> list[RawPriceObservation]:
    events = data.get("events")
    if not isinstance(events, list):
        return []
    results: list[RawPriceObservation] = []
    for event in events:
        try:
            if not isinstance(event, dict):
                continue
            stats = event.get("stats")
            if not isinstance(stats, dict):
                continue
            lowest = to_decimal(stats.get("lowest_price") or 0)
            if lowest <= ZERO:
                continue
            event_id = event.get("id")
            if event_id is None:
                continue
            results.append(
                RawPriceObservation(
                    event_id=str(event_id),
                    event_name=(event.get("title") or "").strip(),
                    base_price=lowest,
                    booking_url=(event.get("url") or "").strip() or None,
                )
            )
        except (AttributeError, TypeError, InvalidOperation) as e:
            logger.warning("SeatGeek skip malformed event: %s", e)
            continue
    return results


class SeatGeekProvider:
    provider_name = "SeatGeek"

    def __init__(
        self,
        base_url: str,
        client_id: str,
        *,
        timeout: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._timeout = timeout
        self._transport = transport

    def fetch_prices(self, keyword: str) -> list[RawPriceObservation]:
        if not self._client_id:
            raise ProviderConfigError(self.provider_name, "SEATGEEK_CLIENT_ID not configured")
        data = get_json(
            self.provider_name,
            f"{self._base_url}/events",
            {"q": keyword, "per_page": PAGE_SIZE, "client_id": self._client_id},
            timeout=self._timeout,
            transport=self._transport,
        )
        results = _parse_response(data)
        logger.info("SeatGeek: %s observations for keyword %r", len(results), keyword)
        return results
