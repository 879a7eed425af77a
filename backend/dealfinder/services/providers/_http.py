"""Shared GET helper for HTTP provider clients."""
import logging
from typing import Any

import httpx

from dealfinder.core.errors import ProviderFetchError

logger = logging.getLogger(__name__)


def get_json(
    provider_name: str,
    url: str,
    params: dict[str, Any],
    *,
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """GET url and decode a JSON object. Any transport, status or decode failure becomes one ProviderFetchError."""
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            resp = client.get(url, params=params)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as e:
        raise ProviderFetchError(provider_name, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise ProviderFetchError(provider_name, f"request failed: {e}") from e
    except ValueError as e:
        raise ProviderFetchError(provider_name, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProviderFetchError(provider_name, f"unexpected response type {type(data).__name__}")
    return data
