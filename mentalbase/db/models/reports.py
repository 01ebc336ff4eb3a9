"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mentalbase.db.base import Base, utcnow
from mentalbase.db.enums import ReportPeriod


class ClientProgressReport(Base):
    """
    Mentor-written progress report for one client over a date range.

    The count columns are filled from client data at creation time, and
    only for categories the client shares; a withheld category stays NULL.
    Sharing with the client is one-way: once shared_at is set it stays set.
    """

    __tablename__ = "client_progress_reports"
    __table_args__ = (
        Index("idx_progress_reports_mentor_client", "mentor_id", "client_id", "created_at"),
        Index("idx_progress_reports_client_shared", "client_id", "is_shared_with_client"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    mentor_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    report_period: Mapped[str] = mapped_column(
        String(20), default=ReportPeriod.WEEKLY.value, nullable=False
    )
    start_date: Mapped[date] = mapped_column(nullable=False)
    end_date: Mapped[date] = mapped_column(nullable=False)

    overall_progress: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed_goals: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed_tasks: Mapped[int | None] = mapped_column(Integer, nullable=True)
    log_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reflection_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    mentor_comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    mentor_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    areas_of_improvement: Mapped[list] = mapped_column(default=list, nullable=False)
    strengths: Mapped[list] = mapped_column(default=list, nullable=False)
    next_steps: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[date | None] = mapped_column(nullable=True)

    is_shared_with_client: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    shared_at: Mapped[datetime | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )
