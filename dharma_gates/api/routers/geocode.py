"""Geocoding proxy endpoint."""
from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from dharma_gates.api.deps import get_geocode_client
from dharma_gates.geocoding import GeocodeClient, GeocodeNotFound, GeocodeServiceUnavailable

LOGGER = structlog.get_logger(__name__)

router = APIRouter(tags=["geocode"])


@router.get("/geocode")
async def geocode(
    address: str | None = Query(default=None, description="Free-text address to resolve"),
    lat: float | None = Query(default=None, ge=-90.0, le=90.0),
    lon: float | None = Query(default=None, ge=-180.0, le=180.0),
    geocoder: GeocodeClient = Depends(get_geocode_client),
) -> dict[str, Any]:
    """Resolve an address, or coordinates when no address is given."""

    query = (address or "").strip()
    if not query and (lat is None or lon is None):
        raise HTTPException(
            status_code=400, detail="Either address or lat/lon coordinates are required"
        )

    try:
        if query:
            result = await geocoder.forward(query)
        else:
            result = await geocoder.reverse(lat, lon)  # type: ignore[arg-type]
    except GeocodeNotFound as exc:
        detail = "Address not found" if query else "Coordinates not found"
        raise HTTPException(status_code=404, detail=detail) from exc
    except GeocodeServiceUnavailable as exc:
        LOGGER.warning("geocode.unavailable", error=str(exc))
        raise HTTPException(
            status_code=503, detail="Geocoding service temporarily unavailable"
        ) from exc

    return result.as_dict()
