"""Forward and reverse lookups against a Nominatim-compatible geocoder."""
from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from dharma_gates.core.settings import AppSettings
from dharma_gates.geocoding.errors import GeocodeNotFound, GeocodeServiceUnavailable
from dharma_gates.geocoding.models import GeocodeResult, NominatimPlace
from dharma_gates.utils.http import AsyncHttpClient

LOGGER = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "DharmaGates/1.0"
DEFAULT_LANGUAGE = "en"


class GeocodeClient:
    """Resolve addresses and coordinates into :class:`GeocodeResult` values.

    Every request carries the same ``User-Agent`` and ``Accept-Language`` so
    the service returns English, consistently keyed address breakdowns.
    Results are not cached and failed requests are not retried.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        language: str = DEFAULT_LANGUAGE,
        timeout: float = 10.0,
        client: AsyncHttpClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = {"User-Agent": user_agent, "Accept-Language": language}
        self.client = client or AsyncHttpClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: AppSettings, client: AsyncHttpClient | None = None) -> "GeocodeClient":
        """Build a client from application settings."""

        return cls(
            base_url=settings.geocoder_base_url,
            user_agent=settings.geocoder_user_agent,
            language=settings.geocoder_language,
            timeout=settings.geocoder_timeout_seconds,
            client=client,
        )

    async def __aenter__(self) -> "GeocodeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            return await self.client.get_json(url, params=params, headers=self.headers)
        except httpx.HTTPStatusError as exc:
            LOGGER.warning("geocode.http_error", path=path, status_code=exc.response.status_code)
            raise GeocodeServiceUnavailable(
                f"Geocoding service returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            # redirect loops and undecodable bodies are request errors too
            LOGGER.warning("geocode.request_error", path=path, error=str(exc))
            raise GeocodeServiceUnavailable("Geocoding service unreachable") from exc
        except ValueError as exc:
            LOGGER.warning("geocode.invalid_json", path=path)
            raise GeocodeServiceUnavailable("Geocoding service returned an unreadable payload") from exc

    @staticmethod
    def _parse_place(item: Any) -> NominatimPlace:
        try:
            return NominatimPlace.model_validate(item)
        except ValidationError as exc:
            LOGGER.warning("geocode.malformed_place", errors=exc.error_count())
            raise GeocodeServiceUnavailable("Geocoding service returned a malformed place") from exc

    async def forward(self, address: str) -> GeocodeResult:
        """Return the best match for a free-text address."""

        query = address.strip()
        if not query:
            raise ValueError("Address cannot be empty")

        payload = await self._request(
            "/search",
            {"q": query, "format": "json", "addressdetails": 1, "limit": 1},
        )
        if not isinstance(payload, list):
            raise GeocodeServiceUnavailable("Geocoding service returned an unexpected payload")
        if not payload:
            LOGGER.info("geocode.not_found", mode="forward", query=query)
            raise GeocodeNotFound(f"Address not found: {query}")

        place = self._parse_place(payload[0])
        if place.lat is None or place.lon is None:
            raise GeocodeServiceUnavailable("Geocoding service returned a place without coordinates")
        result = place.to_result(latitude=place.lat, longitude=place.lon)
        LOGGER.info("geocode.forward", query=query, country=result.country, state=result.state)
        return result

    async def reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        """Return the address containing the given coordinates."""

        if not -90.0 <= latitude <= 90.0:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180.0 <= longitude <= 180.0:
            raise ValueError("Longitude must be between -180 and 180")

        payload = await self._request(
            "/reverse",
            {"lat": latitude, "lon": longitude, "format": "json", "addressdetails": 1},
        )
        if not isinstance(payload, dict):
            raise GeocodeServiceUnavailable("Geocoding service returned an unexpected payload")

        place = self._parse_place(payload)
        if place.error or not place.display_name:
            LOGGER.info("geocode.not_found", mode="reverse", latitude=latitude, longitude=longitude)
            raise GeocodeNotFound(f"Coordinates not found: {latitude}, {longitude}")

        # stored coordinates stay exactly as the submitter entered them
        result = place.to_result(latitude=latitude, longitude=longitude)
        LOGGER.info("geocode.reverse", latitude=latitude, longitude=longitude, country=result.country)
        return result


__all__ = ["GeocodeClient"]
