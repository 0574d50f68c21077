"""Moderation endpoints for submissions and feedback."""
from __future__ import annotations

import uuid
from typing import Any, Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from dharma_gates.api.deps import get_geocode_client
from dharma_gates.db import repository
from dharma_gates.db.session import get_session
from dharma_gates.geocoding import GeocodeClient, GeocodeNotFound, GeocodeServiceUnavailable
from dharma_gates.services.submission import CenterUpdate, edit_center

LOGGER = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class FeedbackNotesPayload(BaseModel):
    """Schema for updating moderator notes."""

    admin_notes: str


class StarPayload(BaseModel):
    starred: bool


@router.get("/summary")
def summary(db: Session = Depends(get_session)) -> dict[str, int]:
    """Return total and pending center counts."""

    return repository.count_centers(db)


@router.get("/centers/pending")
def pending_centers(db: Session = Depends(get_session)) -> list[dict[str, Any]]:
    """List submissions awaiting review, oldest first."""

    return [repository.serialize_center(center) for center in repository.list_pending_centers(db)]


@router.post("/centers/{center_id}/approve")
def approve_center(center_id: uuid.UUID, db: Session = Depends(get_session)) -> dict[str, Any]:
    """Publish a pending submission."""

    center = repository.approve_center(db, center_id)
    if center is None:
        raise HTTPException(status_code=404, detail="Center not found.")
    db.commit()
    db.refresh(center)
    LOGGER.info("admin.center.approved", center_id=str(center_id))
    return repository.serialize_center(center)


@router.put("/centers/{center_id}")
async def update_center(
    center_id: uuid.UUID,
    payload: CenterUpdate,
    db: Session = Depends(get_session),
    geocoder: GeocodeClient = Depends(get_geocode_client),
) -> dict[str, Any]:
    """Edit a center; a changed address is geocoded again."""

    try:
        center = await edit_center(db, geocoder, center_id, payload)
    except GeocodeNotFound as exc:
        raise HTTPException(status_code=404, detail="Address not found") from exc
    except GeocodeServiceUnavailable as exc:
        LOGGER.warning("admin.center.geocode_unavailable", center_id=str(center_id), error=str(exc))
        raise HTTPException(
            status_code=503, detail="Geocoding service temporarily unavailable"
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if center is None:
        raise HTTPException(status_code=404, detail="Center not found.")
    db.commit()
    db.refresh(center)
    return repository.serialize_center(center)


@router.delete("/centers/{center_id}", status_code=status.HTTP_204_NO_CONTENT)
def reject_center(center_id: uuid.UUID, db: Session = Depends(get_session)) -> Response:
    """Reject (delete) a center."""

    if not repository.reject_center(db, center_id):
        raise HTTPException(status_code=404, detail="Center not found.")
    db.commit()
    LOGGER.info("admin.center.rejected", center_id=str(center_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/feedback")
def list_feedback(
    status_filter: Literal["pending", "cleared"] | None = Query(default=None, alias="status"),
    db: Session = Depends(get_session),
) -> list[dict[str, Any]]:
    """List feedback, newest first, optionally by moderation status."""

    return [
        repository.serialize_feedback(feedback)
        for feedback in repository.list_feedback(db, status=status_filter)
    ]


@router.put("/feedback/{feedback_id}/notes")
def update_feedback_notes(
    feedback_id: uuid.UUID,
    payload: FeedbackNotesPayload,
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    """Save moderator notes on a feedback item."""

    feedback = repository.update_feedback_notes(db, feedback_id, payload.admin_notes)
    if feedback is None:
        raise HTTPException(status_code=404, detail="Feedback not found.")
    db.commit()
    db.refresh(feedback)
    return repository.serialize_feedback(feedback)


@router.post("/feedback/{feedback_id}/clear")
def clear_feedback(feedback_id: uuid.UUID, db: Session = Depends(get_session)) -> dict[str, Any]:
    """Mark a feedback item as handled."""

    feedback = repository.clear_feedback(db, feedback_id)
    if feedback is None:
        raise HTTPException(status_code=404, detail="Feedback not found.")
    db.commit()
    db.refresh(feedback)
    LOGGER.info("admin.feedback.cleared", feedback_id=str(feedback_id))
    return repository.serialize_feedback(feedback)


@router.get("/site-feedback")
def list_site_feedback(
    starred: bool | None = Query(default=None),
    db: Session = Depends(get_session),
) -> list[dict[str, Any]]:
    """List general site feedback, newest first."""

    return [
        repository.serialize_site_feedback(feedback)
        for feedback in repository.list_site_feedback(db, starred=starred)
    ]


@router.put("/site-feedback/{feedback_id}/starred")
def star_site_feedback(
    feedback_id: uuid.UUID,
    payload: StarPayload,
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    """Star or unstar a site feedback item."""

    feedback = repository.set_site_feedback_starred(db, feedback_id, payload.starred)
    if feedback is None:
        raise HTTPException(status_code=404, detail="Feedback not found.")
    db.commit()
    db.refresh(feedback)
    return repository.serialize_site_feedback(feedback)
