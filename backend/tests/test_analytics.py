"""Market overview, trending matches and biggest price drops over scored data."""
from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest

from dealfinder.core.constants import BUY_NOW, BUY_WAIT, TREND_DOWN, TREND_STABLE, TREND_UP
from dealfinder.core.errors import InvalidInputError
from dealfinder.services.analytics import get_biggest_price_drops, get_market_overview, get_trending_matches
from dealfinder.services.analytics.trending import REASON_ACTIVE, REASON_COMPETITION, popularity_score
from dealfinder.services.cache import ReadCache
from dealfinder.services.scoring import compute_scores_for_match
from tests.helpers import add_snapshot


@pytest.fixture
def scored_market(db, providers, now):
    """Match 1: four providers at 100/120/150/200. Match 2: one provider at 80."""
    fetched = now - timedelta(hours=1)
    for name, total in zip(("Ticketmaster", "SeatGeek", "StubHub", "Viagogo"), ("100", "120", "150", "200")):
        add_snapshot(db, providers[name], 1, total, fetched)
    add_snapshot(db, providers["SeatGeek"], 2, "80", fetched)
    compute_scores_for_match(db, 1, now=now)
    compute_scores_for_match(db, 2, now=now)
    db.expire_all()


def test_overview_empty_market_is_zeroed(db, providers):
    overview = get_market_overview(db)

    assert overview.total_providers == 4
    assert overview.total_matches == 0
    assert overview.total_deals == 0
    assert overview.average_price == Decimal("0")
    assert overview.average_deal_score == 0.0
    assert overview.buy_now_percentage == 0.0


def test_overview_totals(db, scored_market):
    overview = get_market_overview(db)

    assert overview.total_matches == 2
    assert overview.total_deals == 5
    assert overview.overall_lowest_price == Decimal("80")
    assert overview.overall_highest_price == Decimal("200")
    # (100 + 120 + 150 + 200 + 80) / 5
    assert overview.average_price == Decimal("130.00")
    # (65 + 58 + 47 + 30 + 50) / 5
    assert overview.average_deal_score == 50.0
    assert overview.hot_deal_count == 0
    assert overview.prices_stable_count == 2
    assert overview.prices_down_count == 0
    assert overview.buy_now_percentage == 100.0


def test_trending_ranked_by_popularity(db, scored_market):
    trending = get_trending_matches(db, limit=10)

    assert [t.match_id for t in trending] == [1, 2]
    assert [t.rank for t in trending] == [1, 2]
    # 22 (0.35 x 65) + 16 (4 providers) + 8 (stable) + 20 (29.82% savings, capped) + 10 (buy now)
    assert trending[0].popularity_score == 76
    assert trending[0].trending_reason == REASON_COMPETITION
    assert trending[0].price_spread == Decimal("100")
    assert trending[0].max_savings_percentage == Decimal("29.82")
    # 17 + 4 + 8 + 0 + 10
    assert trending[1].popularity_score == 39
    assert trending[1].trending_reason == REASON_ACTIVE
    assert all(0 <= t.popularity_score <= 100 for t in trending)


def test_trending_respects_limit(db, scored_market):
    trending = get_trending_matches(db, limit=1)
    assert len(trending) == 1
    assert trending[0].rank == 1


def test_price_drops_only_positive_savings(db, scored_market):
    drops = get_biggest_price_drops(db, limit=10)

    assert [d.match_id for d in drops] == [1]
    assert drops[0].rank == 1
    assert drops[0].max_savings_percentage == Decimal("29.82")
    assert drops[0].trending_reason == "Save up to 30% vs market average"


@pytest.mark.parametrize("limit", [0, -1, 501])
def test_limits_validated_before_work(db, limit):
    with pytest.raises(InvalidInputError):
        get_trending_matches(db, limit=limit)
    with pytest.raises(InvalidInputError):
        get_biggest_price_drops(db, limit=limit)


@pytest.mark.parametrize(
    "score,providers_count,trend,buy,savings,expected",
    [
        (100, 10, TREND_DOWN, BUY_NOW, Decimal("55"), 100),
        (0, 0, TREND_UP, BUY_WAIT, Decimal("-10"), 0),
        (70, 2, TREND_STABLE, BUY_WAIT, Decimal("5.9"), 24 + 8 + 8 + 5),
    ],
)
def test_popularity_factors_capped(score, providers_count, trend, buy, savings, expected):
    summary = SimpleNamespace(
        best_deal_score=score,
        num_providers=providers_count,
        overall_trend=trend,
        best_time_to_buy=buy,
    )
    assert popularity_score(summary, savings) == expected


def test_analytics_cached_until_scoring(db, scored_market, providers, now):
    cache = ReadCache(stale_minutes=10)
    first = get_market_overview(db, cache)
    add_snapshot(db, providers["Viagogo"], 2, "60", now - timedelta(minutes=5))

    assert get_market_overview(db, cache) is first

    compute_scores_for_match(db, 2, now=now, cache=cache)
    db.expire_all()
    assert get_market_overview(db, cache).total_deals == 6


@pytest.fixture
def several_drops(db, providers, now):
    """Max savings 50% (match 10), 10% (11), 25% (12), none (13); lowest-price order is 11, 10, 13, 12."""
    fetched = now - timedelta(hours=1)
    quotes = {10: ("100", "300"), 11: ("90", "110"), 12: ("150", "250"), 13: ("120",)}
    for match_id, totals in quotes.items():
        for name, total in zip(("Ticketmaster", "SeatGeek"), totals):
            add_snapshot(db, providers[name], match_id, total, fetched)
        compute_scores_for_match(db, match_id, now=now)
    db.expire_all()


def test_price_drops_sorted_by_max_savings(db, several_drops):
    drops = get_biggest_price_drops(db, limit=10)

    assert [d.match_id for d in drops] == [10, 12, 11]
    assert [d.rank for d in drops] == [1, 2, 3]
    assert [d.max_savings_percentage for d in drops] == [Decimal("50.00"), Decimal("25.00"), Decimal("10.00")]
    assert drops[0].trending_reason == "Save up to 50% vs market average"


def test_price_drops_limit_cuts_tail(db, several_drops):
    drops = get_biggest_price_drops(db, limit=2)

    assert [d.match_id for d in drops] == [10, 12]
    assert [d.rank for d in drops] == [1, 2]
