"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mentalbase.db.base import Base, utcnow
from mentalbase.db.enums import RelationshipStatus

if TYPE_CHECKING:
    from mentalbase.db.models import User


class MentorClientRelationship(Base):
    """
    Pairwise mentor ↔ client link.

    One row per (mentor, client) pair. Terminated rows are kept for history
    and are never reactivated.
    """

    __tablename__ = "mentor_client_relationships"
    __table_args__ = (
        UniqueConstraint("mentor_id", "client_id", name="uq_relationship_pair"),
        Index("idx_relationships_mentor_status", "mentor_id", "status"),
        Index("idx_relationships_client_status", "client_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    mentor_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), default=RelationshipStatus.PENDING.value, nullable=False
    )
    invited_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    invited_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    accepted_at: Mapped[datetime | None] = mapped_column(nullable=True)
    terminated_at: Mapped[datetime | None] = mapped_column(nullable=True)
    termination_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    mentor: Mapped["User"] = relationship(foreign_keys=[mentor_id])
    client: Mapped["User"] = relationship(foreign_keys=[client_id])
    permission: Mapped["ClientDataAccessPermission | None"] = relationship(
        back_populates="mentor_relationship",
        uselist=False,
    )


class ClientDataAccessPermission(Base):
    """
    Per-relationship data sharing switches, owned by the client.

    Exists once the relationship has reached ``active``. ``is_active=False``
    denies every category while keeping the individual flags intact.
    """

    __tablename__ = "client_data_access_permissions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    relationship_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("mentor_client_relationships.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    allow_goals: Mapped[bool] = mapped_column(Boolean, nullable=False)
    allow_tasks: Mapped[bool] = mapped_column(Boolean, nullable=False)
    allow_logs: Mapped[bool] = mapped_column(Boolean, nullable=False)
    allow_reflections: Mapped[bool] = mapped_column(Boolean, nullable=False)
    allow_ai_reports: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    mentor_relationship: Mapped["MentorClientRelationship"] = relationship(
        back_populates="permission"
    )
