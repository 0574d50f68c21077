"""General feedback about the directory."""
from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy.orm import Session

from dharma_gates.db import repository
from dharma_gates.db.session import get_session

LOGGER = structlog.get_logger(__name__)

router = APIRouter(tags=["feedback"])


class SiteFeedbackPayload(BaseModel):
    """Feedback form fields; only the message is required."""

    feedback: str = Field(min_length=1)
    name: str | None = None
    email: EmailStr | None = None

    @field_validator("feedback")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("name", "email", mode="before")
    @classmethod
    def _empty_as_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value


@router.post("/feedback", status_code=status.HTTP_201_CREATED)
def submit_feedback(payload: SiteFeedbackPayload, db: Session = Depends(get_session)) -> dict[str, Any]:
    """Record general feedback about the site."""

    feedback = repository.submit_site_feedback(db, payload.model_dump())
    db.commit()
    db.refresh(feedback)
    LOGGER.info("feedback.submitted", feedback_id=str(feedback.id))
    return repository.serialize_site_feedback(feedback)
