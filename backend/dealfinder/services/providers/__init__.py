"""
Ticket price providers: Ticketmaster, SeatGeek, simulated marketplaces.
Each provider fetches data in its own way but returns the same normalized observation
shape so ingestion stays provider-agnostic.
"""
from dealfinder.services.providers.base import TicketProvider
from dealfinder.services.providers.registry import all_providers, get_provider, list_providers
from dealfinder.services.providers.types import RawPriceObservation, match_id_for_event

__all__ = [
    "RawPriceObservation",
    "TicketProvider",
    "all_providers",
    "get_provider",
    "list_providers",
    "match_id_for_event",
]
