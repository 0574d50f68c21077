"""Health check endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from dharma_gates.db.session import get_session

router = APIRouter(tags=["health"], include_in_schema=False)


@router.get("/healthz")
def healthz() -> dict[str, str]:
    """Liveness probe to confirm the API process is running."""

    return {"status": "ok"}


@router.get("/readyz")
def readyz(db: Session = Depends(get_session)) -> dict[str, str]:
    """Readiness probe confirming the database answers."""

    db.execute(text("SELECT 1"))
    return {"status": "ready"}
