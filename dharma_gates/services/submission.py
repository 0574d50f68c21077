"""Center write workflows: visitor suggestions and moderator edits.

Both geocode a free-text address into the composite form the grouping code
reads, so a center lands in the right country and state section.
"""
from __future__ import annotations

import uuid
from typing import Annotated, List, Protocol

import structlog
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from sqlalchemy.orm import Session

from dharma_gates.db import repository
from dharma_gates.db.models import Center
from dharma_gates.geocoding.models import GeocodeResult
from dharma_gates.parsing.composite import encode_composite, is_composite

LOGGER = structlog.get_logger(__name__)


class Geocoder(Protocol):
    async def forward(self, address: str) -> GeocodeResult: ...

    async def reverse(self, latitude: float, longitude: float) -> GeocodeResult: ...


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _as_list(value: str | List[str] | None) -> List[str] | None:
    """Accept comma-separated strings as lists, dropping blank items."""

    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else value
    cleaned = [str(item).strip() for item in items if str(item).strip()]
    return cleaned or None


class CenterSubmission(BaseModel):
    """Fields a visitor provides when suggesting a center."""

    name: str = Field(min_length=1)
    center_type: str = Field(min_length=1)
    vehicle: str = Field(min_length=1)
    description: str = Field(min_length=1)
    address: str | None = None
    latitude: Annotated[float, Field(ge=-90.0, le=90.0)] | None = None
    longitude: Annotated[float, Field(ge=-180.0, le=180.0)] | None = None
    website: Annotated[str, Field(pattern=r"^https?://.+")] | None = None
    email: EmailStr | None = None
    phone: str | None = None
    setting: str | None = None
    price_model: str | None = None
    price_details: str | None = None
    beginner_friendly: bool | None = None
    gender_policy: str | None = None
    ordination_possible: bool | None = None
    traditions: List[str] | None = None
    languages_spoken: List[str] | None = None
    practices: List[str] | None = None
    teachers: List[str] | None = None

    @field_validator("name", "center_type", "vehicle", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("address", "website", "email", "phone", mode="before")
    @classmethod
    def _empty_as_none(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("traditions", "languages_spoken", "practices", "teachers", mode="before")
    @classmethod
    def _split_list(cls, value: str | List[str] | None) -> List[str] | None:
        return _as_list(value)

    @model_validator(mode="after")
    def _location_present(self) -> "CenterSubmission":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        if self.latitude is None and not self.address:
            raise ValueError("either coordinates or an address is required")
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class CenterUpdate(BaseModel):
    """Partial edit of a listed center; only the fields sent are changed."""

    name: str | None = None
    center_type: str | None = None
    vehicle: str | None = None
    description: str | None = None
    address: str | None = None
    latitude: Annotated[float, Field(ge=-90.0, le=90.0)] | None = None
    longitude: Annotated[float, Field(ge=-180.0, le=180.0)] | None = None
    website: Annotated[str, Field(pattern=r"^https?://.+")] | None = None
    email: EmailStr | None = None
    phone: str | None = None
    setting: str | None = None
    price_model: str | None = None
    price_details: str | None = None
    beginner_friendly: bool | None = None
    gender_policy: str | None = None
    ordination_possible: bool | None = None
    traditions: List[str] | None = None
    languages_spoken: List[str] | None = None
    practices: List[str] | None = None
    teachers: List[str] | None = None

    @field_validator("name", "center_type", "vehicle", "description")
    @classmethod
    def _required_not_blank(cls, value: str | None) -> str:
        if value is None or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("address", "website", "email", "phone", mode="before")
    @classmethod
    def _empty_as_none(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("traditions", "languages_spoken", "practices", "teachers", mode="before")
    @classmethod
    def _split_list(cls, value: str | List[str] | None) -> List[str] | None:
        return _as_list(value)

    @model_validator(mode="after")
    def _coordinates_paired(self) -> "CenterUpdate":
        sent = self.model_fields_set
        if ("latitude" in sent) != ("longitude" in sent):
            raise ValueError("latitude and longitude must be updated together")
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self


async def geocode_submission(geocoder: Geocoder, submission: CenterSubmission) -> GeocodeResult:
    """Reverse geocode submitted coordinates, or forward geocode the address."""

    if submission.has_coordinates:
        return await geocoder.reverse(submission.latitude, submission.longitude)  # type: ignore[arg-type]
    return await geocoder.forward(submission.address or "")


async def suggest_center(session: Session, geocoder: Geocoder, submission: CenterSubmission) -> Center:
    """Store a submission as a pending center with a composite address.

    Geocoding errors propagate so the caller can tell "try again" apart from
    "check your input"; nothing is stored in that case.
    """

    result = await geocode_submission(geocoder, submission)
    fields = submission.model_dump()
    fields["address"] = encode_composite(result.display_name, result.country, result.state)
    if not submission.has_coordinates:
        fields["latitude"] = result.latitude
        fields["longitude"] = result.longitude

    center = repository.submit_center(session, fields)
    LOGGER.info(
        "centers.submitted",
        center_id=str(center.id),
        country=result.country,
        state=result.state,
    )
    return center


async def edit_center(
    session: Session,
    geocoder: Geocoder,
    center_id: uuid.UUID,
    changes: CenterUpdate,
) -> Center | None:
    """Apply a moderator's edit. Returns ``None`` when the center does not exist.

    A changed free-text address is forward geocoded and stored in composite
    form; its coordinates replace the stored ones unless the edit sets them.
    Addresses already in composite form are stored as given.
    """

    center = repository.get_center(session, center_id)
    if center is None:
        return None

    fields = changes.model_dump(exclude_unset=True)
    address = fields.get("address")
    if address and address != center.address and not is_composite(address):
        result = await geocoder.forward(address)
        fields["address"] = encode_composite(result.display_name, result.country, result.state)
        if "latitude" not in fields:
            fields["latitude"] = result.latitude
            fields["longitude"] = result.longitude

    updated = repository.update_center(session, center_id, fields)
    LOGGER.info("admin.center.updated", center_id=str(center_id), fields=sorted(fields))
    return updated


__all__ = ["CenterSubmission", "CenterUpdate", "Geocoder", "edit_center", "geocode_submission", "suggest_center"]
