"""Provider clients against canned HTTP responses (httpx.MockTransport)."""
from datetime import date
from decimal import Decimal

import httpx
import pytest

from dealfinder.core.constants import SOURCE_SIMULATED
from dealfinder.core.errors import ProviderConfigError, ProviderFetchError
from dealfinder.services.providers.seatgeek_provider import SeatGeekProvider
from dealfinder.services.providers.simulated_provider import NUM_FIXTURES, SimulatedProvider
from dealfinder.services.providers.ticketmaster_provider import TicketmasterProvider
from dealfinder.services.providers.types import match_id_for_event, stable_hash

TICKETMASTER_BODY = {
    "_embedded": {
        "events": [
            {
                "id": "G5v0Z9",
                "name": "FIFA World Cup 2026: Match 1",
                "url": "https://www.ticketmaster.com/event/G5v0Z9",
                "priceRanges": [
                    {"type": "standard", "currency": "usd", "min": 120.5, "max": 900},
                    {"type": "standard", "currency": "USD", "min": 0},
                ],
            },
            {"id": "no-prices", "name": "No price ranges"},
            {"name": "Missing id", "priceRanges": [{"min": 10}]},
            "not-an-event",
        ]
    }
}

SEATGEEK_BODY = {
    "events": [
        {"id": 6011, "title": "World Cup Match 4", "url": "https://seatgeek.com/e/6011", "stats": {"lowest_price": 88}},
        {"id": 6012, "title": "Sold out", "stats": {"lowest_price": None}},
        {"id": 6013, "title": "No stats"},
    ]
}


def _transport(body=None, status=200, seen=None, text=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def test_ticketmaster_parses_price_ranges():
    seen = []
    client = TicketmasterProvider("https://tm.test/discovery/v2/", "key-1", transport=_transport(TICKETMASTER_BODY, seen=seen))

    results = client.fetch_prices("FIFA World Cup 2026")

    assert len(results) == 1
    obs = results[0]
    assert obs.event_id == "G5v0Z9"
    assert obs.base_price == Decimal("120.5")
    assert obs.currency == "USD"
    assert obs.booking_url == "https://www.ticketmaster.com/event/G5v0Z9"
    params = seen[0].url.params
    assert seen[0].url.path == "/discovery/v2/events.json"
    assert params["keyword"] == "FIFA World Cup 2026"
    assert params["classificationName"] == "Soccer"
    assert params["apikey"] == "key-1"


def test_ticketmaster_no_embedded_means_no_results():
    client = TicketmasterProvider("https://tm.test", "key-1", transport=_transport({"page": {"totalElements": 0}}))
    assert client.fetch_prices("anything") == []


def test_ticketmaster_requires_api_key():
    with pytest.raises(ProviderConfigError):
        TicketmasterProvider("https://tm.test", "").fetch_prices("anything")


def test_http_error_status_becomes_provider_error():
    client = TicketmasterProvider("https://tm.test", "key-1", transport=_transport({}, status=503))
    with pytest.raises(ProviderFetchError, match="HTTP 503"):
        client.fetch_prices("anything")


def test_invalid_json_becomes_provider_error():
    client = SeatGeekProvider("https://sg.test", "cid", transport=_transport(text="<html>oops</html>"))
    with pytest.raises(ProviderFetchError, match="invalid JSON"):
        client.fetch_prices("anything")


def test_non_object_json_becomes_provider_error():
    client = SeatGeekProvider("https://sg.test", "cid", transport=_transport([1, 2, 3]))
    with pytest.raises(ProviderFetchError):
        client.fetch_prices("anything")


def test_seatgeek_parses_lowest_price():
    seen = []
    client = SeatGeekProvider("https://sg.test/2", "cid", transport=_transport(SEATGEEK_BODY, seen=seen))

    results = client.fetch_prices("World Cup")

    assert [(r.event_id, r.base_price) for r in results] == [("6011", Decimal("88"))]
    assert seen[0].url.params["q"] == "World Cup"
    assert seen[0].url.params["client_id"] == "cid"


def test_seatgeek_requires_client_id():
    with pytest.raises(ProviderConfigError):
        SeatGeekProvider("https://sg.test", "").fetch_prices("x")


def test_simulated_provider_is_deterministic_per_day():
    def make(day):
        return SimulatedProvider("StubHub", "https://www.stubhub.com", "FIFA World Cup 2026", today=lambda: day)

    first = make(date(2026, 6, 1)).fetch_prices("FIFA World Cup 2026")
    again = make(date(2026, 6, 1)).fetch_prices("FIFA World Cup 2026")

    assert [(o.event_id, o.base_price) for o in first] == [(o.event_id, o.base_price) for o in again]
    assert 0 < len(first) <= NUM_FIXTURES
    for obs in first:
        assert obs.source_type == SOURCE_SIMULATED
        assert Decimal("80") <= obs.base_price <= Decimal("800")
        assert obs.booking_url.startswith("https://www.stubhub.com/event/")


def test_simulated_provider_answers_primary_keyword_only():
    client = SimulatedProvider("Viagogo", "https://www.viagogo.com", "FIFA World Cup 2026")
    assert client.fetch_prices("World Cup Soccer 2026") == []


def test_match_id_mapping_is_stable_and_bounded():
    assert stable_hash("evt-1") == stable_hash("evt-1")
    assert match_id_for_event("evt-1", 1000) == match_id_for_event("evt-1", 1000)
    assert all(0 <= match_id_for_event(f"evt-{i}", 1000) < 1000 for i in range(50))


def test_registry_holds_real_and_simulated_clients():
    from dealfinder.services.providers import get_provider, list_providers

    names = list_providers()
    assert {"Ticketmaster", "SeatGeek", "StubHub", "Viagogo"} <= set(names)
    assert get_provider("StubHub").provider_name == "StubHub"
    with pytest.raises(KeyError):
        get_provider("NoSuchMarketplace")
