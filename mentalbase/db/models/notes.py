"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mentalbase.db.base import Base, utcnow
from mentalbase.db.enums import NoteType


class MentorNote(Base):
    """
    Mentor-authored note about a client.

    Not gated by ClientDataAccessPermission. The mentor always sees their
    own notes; the client sees a note only when is_shared_with_client.
    """

    __tablename__ = "mentor_notes"
    __table_args__ = (
        Index("idx_mentor_notes_mentor_client", "mentor_id", "client_id", "created_at"),
        Index("idx_mentor_notes_client_shared", "client_id", "is_shared_with_client"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    mentor_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    note_type: Mapped[str] = mapped_column(
        String(20), default=NoteType.GENERAL.value, nullable=False
    )
    is_shared_with_client: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    tags: Mapped[list] = mapped_column(default=list, nullable=False)
    linked_data_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    linked_data_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )
