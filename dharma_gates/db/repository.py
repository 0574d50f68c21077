"""Select/insert/update/delete helpers for centers and their feedback."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from dharma_gates.db.models import FEEDBACK_CLEARED, Center, CenterFeedback, SiteFeedback
from dharma_gates.utils.text import clean_whitespace

_CENTER_FIELDS = (
    "name",
    "center_type",
    "vehicle",
    "address",
    "latitude",
    "longitude",
    "description",
    "website",
    "email",
    "phone",
    "setting",
    "price_model",
    "price_details",
    "beginner_friendly",
    "gender_policy",
    "ordination_possible",
    "traditions",
    "languages_spoken",
    "practices",
    "teachers",
)

_FEEDBACK_FIELDS = (
    "user_name",
    "user_email",
    "feedback_type",
    "subject",
    "feedback_content",
)


def serialize_center(center: Center) -> dict[str, Any]:
    payload: dict[str, Any] = {"id": center.id}
    payload.update({field: getattr(center, field) for field in _CENTER_FIELDS})
    payload["pending"] = center.pending
    payload["created_at"] = center.created_at
    return payload


def serialize_feedback(feedback: CenterFeedback) -> dict[str, Any]:
    payload: dict[str, Any] = {"id": feedback.id, "center_id": feedback.center_id}
    payload.update({field: getattr(feedback, field) for field in _FEEDBACK_FIELDS})
    payload.update(
        {
            "admin_status": feedback.admin_status,
            "admin_notes": feedback.admin_notes,
            "created_at": feedback.created_at,
            "reviewed_at": feedback.reviewed_at,
        }
    )
    return payload


def list_centers(session: Session, *, include_pending: bool = False) -> list[Center]:
    """Return every center in one call; pending submissions only on request."""

    stmt = select(Center).order_by(Center.name)
    if not include_pending:
        stmt = stmt.where(Center.pending.is_(False))
    return list(session.execute(stmt).scalars().all())


def list_pending_centers(session: Session) -> list[Center]:
    stmt = select(Center).where(Center.pending.is_(True)).order_by(Center.created_at)
    return list(session.execute(stmt).scalars().all())


def count_centers(session: Session) -> dict[str, int]:
    """Return total and pending center counts for the moderation dashboard."""

    total = session.execute(select(func.count()).select_from(Center)).scalar_one()
    pending = session.execute(
        select(func.count()).select_from(Center).where(Center.pending.is_(True))
    ).scalar_one()
    return {"total": int(total), "pending": int(pending)}


def get_center(session: Session, center_id: uuid.UUID) -> Center | None:
    return session.get(Center, center_id)


def submit_center(session: Session, fields: Mapping[str, Any]) -> Center:
    """Insert a center awaiting moderation."""

    values = {field: fields.get(field) for field in _CENTER_FIELDS}
    if (values["latitude"] is None) != (values["longitude"] is None):
        raise ValueError("Latitude and longitude must be provided together")
    values["name"] = clean_whitespace(str(values["name"] or ""))
    center = Center(**values, pending=True)
    session.add(center)
    session.flush()
    return center


def update_center(session: Session, center_id: uuid.UUID, fields: Mapping[str, Any]) -> Center | None:
    """Overwrite the given fields of a center. Returns ``None`` when it does not exist."""

    center = session.get(Center, center_id)
    if center is None:
        return None
    changes = {field: value for field, value in fields.items() if field in _CENTER_FIELDS}
    latitude = changes.get("latitude", center.latitude)
    longitude = changes.get("longitude", center.longitude)
    if (latitude is None) != (longitude is None):
        raise ValueError("Latitude and longitude must be provided together")
    if "name" in changes:
        changes["name"] = clean_whitespace(str(changes["name"] or ""))
    for field, value in changes.items():
        setattr(center, field, value)
    session.add(center)
    session.flush()
    return center


def approve_center(
session: Session, center_id: uuid.UUID) -> Center | None:
    """Publish a pending center. Returns ``None`` when it does not exist."""

    center = session.get(Center, center_id)
    if center is None:
        return None
    center.pending = False
    session.add(center)
    session.flush()
    return center


def reject_center(session: Session, center_id: uuid.UUID) -> bool:
    """Delete a center; rejected submissions are not kept."""

    center = session.get(Center, center_id)
    if center is None:
        return False
    session.delete(center)
    session.flush()
    return True


def submit_feedback(session: Session, center_id: uuid.UUID, fields: Mapping[str, Any]) -> CenterFeedback:
    feedback = CenterFeedback(center_id=center_id, **{field: fields.get(field) for field in _FEEDBACK_FIELDS})
    session.add(feedback)
    session.flush()
    return feedback


def list_feedback(session: Session, *, status: str | None = None) -> list[CenterFeedback]:
    stmt = select(CenterFeedback).order_by(CenterFeedback.created_at.desc())
    if status is not None:
        stmt = stmt.where(CenterFeedback.admin_status == status)
    return list(session.execute(stmt).scalars().all())


def update_feedback_notes(session: Session, feedback_id: uuid.UUID, notes: str) -> CenterFeedback | None:
    feedback = session.get(CenterFeedback, feedback_id)
    if feedback is None:
        return None
    feedback.admin_notes = notes.strip() or None
    session.add(feedback)
    session.flush()
    return feedback


def clear_feedback(session: Session, feedback_id: uuid.UUID) -> CenterFeedback | None:
    """Mark feedback as handled and stamp the review time."""

    feedback = session.get(CenterFeedback, feedback_id)
    if feedback is None:
        return None
    feedback.admin_status = FEEDBACK_CLEARED
    feedback.reviewed_at = datetime.now(timezone.utc)
    session.add(feedback)
    session.flush()
    return feedback


def serialize_site_feedback(feedback: SiteFeedback) -> dict[str, Any]:
    return {
        "id": feedback.id,
        "name": feedback.name,
        "email": feedback.email,
        "feedback": feedback.feedback,
        "starred": feedback.starred,
        "created_at": feedback.created_at,
    }


def submit_site_feedback(session: Session, fields: Mapping[str, Any]) -> SiteFeedback:
    feedback = SiteFeedback(
        name=fields.get("name"),
        email=fields.get("email"),
        feedback=str(fields.get("feedback") or "").strip(),
    )
    session.add(feedback)
    session.flush()
    return feedback


def list_site_feedback(session: Session, *, starred: bool | None = None) -> list[SiteFeedback]:
    stmt = select(SiteFeedback).order_by(SiteFeedback.created_at.desc())
    if starred is not None:
        stmt = stmt.where(SiteFeedback.starred.is_(starred))
    return list(session.execute(stmt).scalars().all())


def set_site_feedback_starred(session: Session, feedback_id: uuid.UUID, starred: bool) -> SiteFeedback | None:
    feedback = session.get(SiteFeedback, feedback_id)
    if feedback is None:
        return None
    feedback.starred = starred
    session.add(feedback)
    session.flush()
    return feedback


__all__ = [
    "approve_center",
    "clear_feedback",
    "count_centers",
    "get_center",
    "list_centers",
    "list_feedback",
    "list_pending_centers",
    "list_site_feedback",
    "reject_center",
    "serialize_center",
    "serialize_feedback",
    "serialize_site_feedback",
    "set_site_feedback_starred",
    "submit_center",
    "submit_feedback",
    "submit_site_feedback",
    "update_center",
    "update_feedback_notes",
]
