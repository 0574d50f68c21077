"""Public directory endpoints."""
from __future__ import annotations

import uuid
from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy.orm import Session

from dharma_gates.api.deps import get_geocode_client
from dharma_gates.core.config import get_settings
from dharma_gates.db import repository
from dharma_gates.db.session import get_session
from dharma_gates.directory.facets import build_filter_options
from dharma_gates.directory.filters import CenterFilters, filter_centers
from dharma_gates.directory.grouping import group_by_location
from dharma_gates.geocoding import GeocodeClient, GeocodeNotFound, GeocodeServiceUnavailable
from dharma_gates.services.submission import CenterSubmission, suggest_center

LOGGER = structlog.get_logger(__name__)

router = APIRouter(tags=["centers"])


class FeedbackPayload(BaseModel):
    """Payload accepted when a visitor reports on a listed center."""

    feedback_type: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    feedback_content: str = Field(min_length=1)
    user_name: str | None = None
    user_email: EmailStr | None = None

    @field_validator("user_name", "user_email", mode="before")
    @classmethod
    def _empty_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def get_filters(
    q: str | None = Query(default=None, description="Search name or address"),
    vehicle: str | None = Query(default=None),
    center_type: str | None = Query(default=None),
    location: str | None = Query(default=None),
    setting: str | None = Query(default=None),
    price_model: str | None = Query(default=None),
    gender_policy: str | None = Query(default=None),
    beginner_friendly: bool | None = Query(default=None),
    ordination_possible: bool | None = Query(default=None),
) -> CenterFilters:
    return CenterFilters(
        search=q,
        vehicle=vehicle,
        center_type=center_type,
        location=location,
        setting=setting,
        price_model=price_model,
        gender_policy=gender_policy,
        beginner_friendly=beginner_friendly,
        ordination_possible=ordination_possible,
    )


def _published_centers(db: Session) -> list[dict[str, Any]]:
    return [repository.serialize_center(center) for center in repository.list_centers(db)]


@router.get("/centers")
def list_centers(
    filters: CenterFilters = Depends(get_filters),
    db: Session = Depends(get_session),
) -> list[dict[str, Any]]:
    """List published centers matching the filters."""

    return [dict(center) for center in filter_centers(_published_centers(db), filters)]


@router.get("/centers/grouped")
def list_centers_grouped(
    filters: CenterFilters = Depends(get_filters),
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    """List published centers sectioned by country and state."""

    centers = filter_centers(_published_centers(db), filters)
    grouped = group_by_location(centers, pinned_country=get_settings().pinned_country)
    return grouped.as_dict()


@router.get("/centers/facets")
def list_facets(db: Session = Depends(get_session)) -> dict[str, list[str]]:
    """Return the filter options available for the published centers."""

    return build_filter_options(_published_centers(db)).as_dict()


@router.post("/centers", status_code=status.HTTP_201_CREATED)
async def create_center(
    payload: CenterSubmission,
    db: Session = Depends(get_session),
    geocoder: GeocodeClient = Depends(get_geocode_client),
) -> dict[str, Any]:
    """Geocode a suggested center and queue it for review."""

    try:
        center = await suggest_center(db, geocoder, payload)
    except GeocodeNotFound as exc:
        detail = (
            "Could not find address for these coordinates"
            if payload.has_coordinates
            else "Address not found"
        )
        raise HTTPException(status_code=404, detail=detail) from exc
    except GeocodeServiceUnavailable as exc:
        LOGGER.warning("centers.submit.geocode_unavailable", error=str(exc))
        raise HTTPException(
            status_code=503, detail="Geocoding service temporarily unavailable"
        ) from exc

    db.commit()
    db.refresh(center)
    return repository.serialize_center(center)


@router.post("/centers/{center_id}/feedback", status_code=status.HTTP_201_CREATED)
def create_feedback(
    center_id: uuid.UUID,
    payload: FeedbackPayload,
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    """Record feedback about a published center."""

    center = repository.get_center(db, center_id)
    if center is None or center.pending:
        raise HTTPException(status_code=404, detail="Center not found.")

    feedback = repository.submit_feedback(db, center_id, payload.model_dump())
    db.commit()
    db.refresh(feedback)
    LOGGER.info("centers.feedback.submitted", center_id=str(center_id), feedback_id=str(feedback.id))
    return repository.serialize_feedback(feedback)
