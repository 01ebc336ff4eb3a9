"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mentalbase.db.base import Base, utcnow


class ClientDataViewLog(Base):
    """
    Audit trail of mentor access to client data.

    One row per access gate outcome: every denial and every successful
    category read. Clients can list who looked at what.

    Security:
    - Stores ids, categories and counts only, never record content
    - relationship_id/client_id are null when no relationship could be resolved
    - No foreign keys so audit rows outlive the records they describe
    """

    __tablename__ = "client_data_view_logs"
    __table_args__ = (
        Index("idx_view_logs_client_created", "client_id", "created_at"),
        Index("idx_view_logs_mentor_created", "mentor_id", "created_at"),
        Index("idx_view_logs_relationship", "relationship_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    relationship_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    mentor_id: Mapped[uuid.UUID] = mapped_column(nullable=False)  # actor
    client_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    data_type: Mapped[str] = mapped_column(String(20), nullable=False)  # DataCategory
    outcome: Mapped[str] = mapped_column(String(10), nullable=False)  # AccessOutcome
    reason: Mapped[str | None] = mapped_column(String(50), nullable=True)
    action: Mapped[str] = mapped_column(String(10), default="view", nullable=False)
    record_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
