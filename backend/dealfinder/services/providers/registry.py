"""Registry of ticket price providers. Add new clients here."""
import logging

from dealfinder.config import settings
from dealfinder.data.providers import website_for
from dealfinder.services.providers.base import TicketProvider

logger = logging.getLogger(__name__)

_providers: dict[str, TicketProvider] = {}


def register(name: str, provider: TicketProvider) -> None:
    """Register a provider client under its provider name (e.g. 'Ticketmaster')."""
    _providers[name] = provider
    logger.info("Registered ticket provider: %s", name)


def get_provider(name: str) -> TicketProvider:
    """Get provider by name. Raises KeyError if unknown."""
    if name not in _providers:
        raise KeyError(f"Unknown provider: {name}. Available: {list(_providers.keys())}")
    return _providers[name]


def list_providers() -> list[str]:
    """List registered provider names."""
    return list(_providers.keys())


def all_providers() -> list[TicketProvider]:
    return list(_providers.values())


def _init_registry() -> None:
    from dealfinder.services.providers.seatgeek_provider import SeatGeekProvider
    from dealfinder.services.providers.simulated_provider import SimulatedProvider
    from dealfinder.services.providers.ticketmaster_provider import TicketmasterProvider

    timeout = settings.provider_timeout_seconds
    register(
        "Ticketmaster",
        TicketmasterProvider(settings.ticketmaster_base_url, settings.ticketmaster_api_key, timeout=timeout),
    )
    register(
        "SeatGeek",
        SeatGeekProvider(settings.seatgeek_base_url, settings.seatgeek_client_id, timeout=timeout),
    )
    keywords = settings.keyword_list()
    primary = keywords[0] if keywords else ""
    for name in settings.simulated_provider_list():
        register(name, SimulatedProvider(name, website_for(name), primary))


# Register built-in providers on first import
_init_registry()
