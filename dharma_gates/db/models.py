"""Database models for the center directory."""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    JSON,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import CHAR, TypeDecorator

FEEDBACK_PENDING = "pending"
FEEDBACK_CLEARED = "cleared"


class GUID(TypeDecorator[uuid.UUID]):
    """Platform-independent GUID type."""

    impl = CHAR(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PGUUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return value
        return str(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class Center(Base):
    """A place of Buddhist practice listed in the directory."""

    __tablename__ = "centers"
    __table_args__ = (
        CheckConstraint(
            "(latitude IS NULL AND longitude IS NULL) OR (latitude IS NOT NULL AND longitude IS NOT NULL)",
            name="ck_centers_coordinates_paired",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    center_type: Mapped[str] = mapped_column(String(100), nullable=False)
    vehicle: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(100), nullable=True)
    setting: Mapped[str | None] = mapped_column(String(100), nullable=True)
    price_model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    price_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    beginner_friendly: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    gender_policy: Mapped[str | None] = mapped_column(String(100), nullable=True)
    ordination_possible: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    traditions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    languages_spoken: Mapped[list | None] = mapped_column(JSON, nullable=True)
    practices: Mapped[list | None] = mapped_column(JSON, nullable=True)
    teachers: Mapped[list | None] = mapped_column(JSON, nullable=True)
    pending: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    feedback: Mapped[list["CenterFeedback"]] = relationship(
        back_populates="center", cascade="all, delete-orphan"
    )


class CenterFeedback(Base):
    """A visitor's correction or comment about a listed center."""

    __tablename__ = "center_feedback"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    center_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("centers.id", ondelete="CASCADE"), nullable=False
    )
    user_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    feedback_type: Mapped[str] = mapped_column(String(100), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    feedback_content: Mapped[str] = mapped_column(Text, nullable=False)
    admin_status: Mapped[str] = mapped_column(String(20), default=FEEDBACK_PENDING, nullable=False)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    center: Mapped[Center] = relationship(back_populates="feedback")


class SiteFeedback(Base):
    """General feedback about the directory itself, not tied to a center."""

    __tablename__ = "site_feedback"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    feedback: Mapped[str] = mapped_column(Text, nullable=False)
    starred: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
