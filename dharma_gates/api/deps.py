"""Shared FastAPI dependencies."""
from __future__ import annotations

from typing import AsyncIterator

from dharma_gates.core.config import get_settings
from dharma_gates.geocoding.client import GeocodeClient


async def get_geocode_client() -> AsyncIterator[GeocodeClient]:
    """Provide a geocoder for the duration of one request."""

    client = GeocodeClient.from_settings(get_settings())
    try:
        yield client
    finally:
        await client.aclose()


__all__ = ["get_geocode_client"]
