"""Shared FastAPI dependencies."""
from fastapi import Request

from dealfinder.services.cache import ReadCache


def get_read_cache(request: Request) -> ReadCache:
    return request.app.state.read_cache
