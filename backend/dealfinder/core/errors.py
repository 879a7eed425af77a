"""
Centralized error taxonomy and HTTP mapping.
Routes stay thin: services raise these, the app maps them with error_to_http.
"""
from __future__ import annotations

from fastapi import HTTPException

STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_SERVICE_UNAVAILABLE = 503
STATUS_INTERNAL_ERROR = 500


class DealFinderError(Exception):
    """Base for all errors raised by the deal finder."""


class InvalidInputError(DealFinderError, ValueError):
    """Caller passed a bad limit, window, or status. Rejected before any computation."""


class NotFoundError(DealFinderError, LookupError):
    """Reference data (e.g. a provider id) does not exist."""


class ProviderFetchError(DealFinderError):
    """One provider client failed (transport or parse). Isolated to that provider."""

    def __init__(self, provider_name: str, message: str):
        super().__init__(f"{provider_name}: {message}")
        self.provider_name = provider_name


class ProviderConfigError(ProviderFetchError):
    """Provider client is missing credentials or its reference row."""


# List of (exception type, status_code). First match wins.
ERROR_RULES: list[tuple[type[Exception], int]] = [
    (InvalidInputError, STATUS_BAD_REQUEST),
    (NotFoundError, STATUS_NOT_FOUND),
    (ProviderFetchError, STATUS_SERVICE_UNAVAILABLE),
]


def error_to_http(exc: Exception) -> HTTPException:
    """
    Map a service exception into an HTTPException.
    Uses ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    for exc_type, status_code in ERROR_RULES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))


def require_positive(name: str, value: int, maximum: int | None = None) -> int:
    """Validate a limit/window argument; raise InvalidInputError when out of range."""
    if value is None or value < 1:
        raise InvalidInputError(f"{name} must be a positive integer, got {value}")
    if maximum is not None and value > maximum:
        raise InvalidInputError(f"{name} must be at most {maximum}, got {value}")
    return value
