"""
Seed list of ticket marketplaces. Names must match the registered client provider_name.
Fee percentages are the typical buyer fee added on top of the listed price.
"""
from decimal import Decimal

PROVIDERS: list[dict] = [
    {
        "name": "Ticketmaster",
        "display_name": "Ticketmaster",
        "website_url": "https://www.ticketmaster.com",
        "fee_percentage": Decimal("15.00"),
        "trust_score": 95,
        "has_buyer_protection": True,
        "api_type": "REAL_API",
        "priority": 1,
    },
    {
        "name": "SeatGeek",
        "display_name": "SeatGeek",
        "website_url": "https://seatgeek.com",
        "fee_percentage": Decimal("12.00"),
        "trust_score": 90,
        "has_buyer_protection": True,
        "api_type": "REAL_API",
        "priority": 2,
    },
    {
        "name": "StubHub",
        "display_name": "StubHub",
        "website_url": "https://www.stubhub.com",
        "fee_percentage": Decimal("20.00"),
        "trust_score": 85,
        "has_buyer_protection": True,
        "api_type": "SIMULATED",
        "priority": 3,
    },
    {
        "name": "Viagogo",
        "display_name": "viagogo",
        "website_url": "https://www.viagogo.com",
        "fee_percentage": Decimal("25.00"),
        "trust_score": 70,
        "has_buyer_protection": False,
        "api_type": "SIMULATED",
        "priority": 4,
    },
]

_WEBSITES = {p["name"]: p["website_url"] for p in PROVIDERS}


def website_for(name: str) -> str:
    return _WEBSITES.get(name, f"https://www.{name.lower()}.com")
