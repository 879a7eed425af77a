"""HTTP surface via TestClient with the database dependency bound to in-memory SQLite."""
from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from dealfinder.api.routes import deals as deals_routes
from dealfinder.config import settings
from dealfinder.core.constants import FETCH_TYPE_MANUAL
from dealfinder.db.session import get_db
from dealfinder.main import app
from dealfinder.services.cache import ReadCache
from tests.helpers import add_snapshot


@pytest.fixture
def client(session_factory, providers, monkeypatch):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    monkeypatch.setattr(settings, "score_max_workers", 1)
    app.dependency_overrides[get_db] = override_get_db
    previous_cache = app.state.read_cache
    app.state.read_cache = ReadCache(stale_minutes=10)
    # No context manager: lifespan (scheduler) does not run.
    yield TestClient(app)
    app.state.read_cache = previous_cache
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def priced_match(db, providers, now):
    fetched = now - timedelta(hours=1)
    add_snapshot(db, providers["Ticketmaster"], 1, "100", fetched)
    add_snapshot(db, providers["SeatGeek"], 1, "140", fetched)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_providers(client):
    r = client.get("/api/deals/providers")
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Ticketmaster", "SeatGeek", "StubHub", "Viagogo"]


def test_unknown_provider_is_404(client):
    assert client.get("/api/deals/providers/999").status_code == 404


def test_cheapest_without_data_is_no_content(client):
    assert client.get("/api/deals/match/1/cheapest").status_code == 204


def test_comparison_without_data_is_empty(client):
    r = client.get("/api/deals/match/1")
    assert r.status_code == 200
    assert r.json()["deals"] == []
    assert r.json()["summary"] is None


def test_invalid_limit_and_status_are_400(client):
    assert client.get("/api/deals/top", params={"limit": 0}).status_code == 400
    assert client.get("/api/deals/analytics/trending", params={"limit": -5}).status_code == 400
    assert client.get("/api/deals/fetch-logs", params={"status": "BOGUS"}).status_code == 400
    assert client.get("/api/deals/match/1/history", params={"days": 0}).status_code == 400


def test_overview_empty_market(client):
    r = client.get("/api/deals/analytics/overview")
    assert r.status_code == 200
    body = r.json()
    assert body["total_providers"] == 4
    assert body["total_deals"] == 0


def test_compute_scores_then_read(client, priced_match):
    r = client.post("/api/deals/admin/compute-scores")
    assert r.status_code == 202
    assert r.json() == {"status": "accepted"}

    # TestClient runs background tasks before returning
    cheapest = client.get("/api/deals/match/1/cheapest")
    assert cheapest.status_code == 200
    assert cheapest.json()["provider_name"] == "Ticketmaster"
    assert Decimal(cheapest.json()["current_price"]) == Decimal("100")

    summaries = client.get("/api/deals/summaries").json()
    assert [s["match_id"] for s in summaries] == [1]
    assert summaries[0]["best_provider_name"] == "Ticketmaster"

    drops = client.get("/api/deals/analytics/price-drops").json()
    assert drops[0]["rank"] == 1
    assert drops[0]["trending_reason"] == "Save up to 17% vs market average"


def test_fetch_prices_reports_count(client, monkeypatch):
    calls = []

    def fake_fetch_all_prices(session_factory, **kwargs):
        calls.append(kwargs)
        return 7

    monkeypatch.setattr(deals_routes, "fetch_all_prices", fake_fetch_all_prices)

    r = client.post("/api/deals/admin/fetch-prices")

    assert r.status_code == 200
    assert r.json() == {"status": "completed", "records_fetched": 7}
    assert calls[0]["fetch_type"] == FETCH_TYPE_MANUAL
