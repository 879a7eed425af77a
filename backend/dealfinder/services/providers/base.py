"""Protocol for ticket price providers. All clients return the same normalized shape."""
from typing import Protocol

from dealfinder.services.providers.types import RawPriceObservation


class TicketProvider(Protocol):
    """Interface for Ticketmaster, SeatGeek, simulated marketplaces. Same contract; only fetch differs."""

    @property
    def provider_name(self) -> str:
        """Must equal Provider.name of the reference row (e.g. 'Ticketmaster')."""
        ...

    def fetch_prices(self, keyword: str) -> list[RawPriceObservation]:
        """
        Search the provider for keyword and return one observation per quoted price.
        Returns [] when nothing matches; raises ProviderFetchError on transport or parse
        failure instead of returning partial results.
        """
        ...
