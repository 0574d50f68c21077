"""Geocoding client and its result/error types."""
from __future__ import annotations

from dharma_gates.geocoding.client import GeocodeClient
from dharma_gates.geocoding.errors import GeocodeError, GeocodeNotFound, GeocodeServiceUnavailable
from dharma_gates.geocoding.models import GeocodeResult

__all__ = [
    "GeocodeClient",
    "GeocodeError",
    "GeocodeNotFound",
    "GeocodeResult",
    "GeocodeServiceUnavailable",
]
