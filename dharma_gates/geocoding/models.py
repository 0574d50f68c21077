"""Geocoder response schemas and the normalised result type."""
from __future__ import annotations

from dataclasses import asdict, dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class GeocodeResult:
    """Normalised match; ``country`` and ``state`` are ``""`` when unknown, never ``None``."""

    latitude: float
    longitude: float
    display_name: str
    country: str
    state: str

    def as_dict(self) -> dict[str, float | str]:
        """Return the result as a serialisable dictionary."""

        return asdict(self)


class NominatimAddress(BaseModel):
    """The ``address`` breakdown Nominatim returns when ``addressdetails=1``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    country: str | None = None
    state: str | None = None
    province: str | None = None
    region: str | None = None
    iso3166_2_lvl4: str | None = Field(default=None, alias="ISO3166-2-lvl4")

    def subdivision(self) -> str:
        """First non-empty of state, province, region and ISO subdivision code."""

        for candidate in (self.state, self.province, self.region, self.iso3166_2_lvl4):
            if candidate:
                return candidate
        return ""


class NominatimPlace(BaseModel):
    """A single place from ``/search`` or ``/reverse``."""

    model_config = ConfigDict(extra="ignore")

    lat: float | None = None
    lon: float | None = None
    display_name: str = ""
    address: NominatimAddress = Field(default_factory=NominatimAddress)
    error: str | None = None

    def to_result(self, *, latitude: float, longitude: float) -> GeocodeResult:
        return GeocodeResult(
            latitude=latitude,
            longitude=longitude,
            display_name=self.display_name,
            country=self.address.country or "",
            state=self.address.subdivision(),
        )


__all__ = ["GeocodeResult", "NominatimAddress", "NominatimPlace"]
