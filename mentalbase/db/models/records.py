"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mentalbase.db.base import Base, utcnow
from mentalbase.db.enums import (
    ActionPlanStatus,
    GoalStatus,
    LogType,
    TaskPriority,
    TaskStatus,
)


class Goal(Base):
    """Client goal. Tasks point at it weakly through ``Task.goal_id``."""

    __tablename__ = "goals"
    __table_args__ = (
        Index("idx_goals_user_status", "user_id", "status"),
        Index("idx_goals_user_created", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    deadline: Mapped[datetime | None] = mapped_column(nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=GoalStatus.ACTIVE.value, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )


class Task(Base):
    """
    Client task.

    ``goal_id`` is a weak reference (no foreign key): deleting a goal leaves
    the id behind and readers resolve it to "no goal".
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index("idx_tasks_user_due", "user_id", "due_date"),
        Index("idx_tasks_user_status", "user_id", "status"),
        Index("idx_tasks_user_completed", "user_id", "completed_at"),
        Index("idx_tasks_goal", "goal_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    goal_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(10), default=TaskPriority.MEDIUM.value, nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), default=TaskStatus.PENDING.value, nullable=False
    )
    due_date: Mapped[datetime | None] = mapped_column(nullable=True)
    scheduled_time: Mapped[str | None] = mapped_column(String(5), nullable=True)  # HH:MM
    estimated_minutes: Mapped[int | None] = mapped_column(nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )


class Log(Base):
    """Free-form daily log entry."""

    __tablename__ = "logs"
    __table_args__ = (Index("idx_logs_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    task_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    emotion: Mapped[str | None] = mapped_column(String(20), nullable=True)
    state: Mapped[str | None] = mapped_column(String(20), nullable=True)
    log_type: Mapped[str] = mapped_column(
        String(20), default=LogType.DAILY.value, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )


class Reflection(Base):
    """Periodic (daily/weekly/monthly) reflection."""

    __tablename__ = "reflections"
    __table_args__ = (Index("idx_reflections_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    period: Mapped[str] = mapped_column(String(10), nullable=False)
    start_date: Mapped[datetime] = mapped_column(nullable=False)
    end_date: Mapped[datetime] = mapped_column(nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    achievements: Mapped[str | None] = mapped_column(Text, nullable=True)
    challenges: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )


class ActionPlan(Base):
    """Improvement plan derived from a check/reflection cycle."""

    __tablename__ = "action_plans"
    __table_args__ = (
        Index("idx_action_plans_user_created", "user_id", "created_at"),
        Index("idx_action_plans_user_status", "user_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    report_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    action_items: Mapped[list] = mapped_column(default=list, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=ActionPlanStatus.PLANNED.value, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )


class AIAnalysisReport(Base):
    """
    Stored AI analysis output. Generation happens elsewhere; this service
    only stores and serves reports.

    insights: ordered list of strings
    recommendations: ordered list of {"priority": int, "text": str}
    """

    __tablename__ = "ai_analysis_reports"
    __table_args__ = (Index("idx_ai_reports_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    analysis_type: Mapped[str] = mapped_column(String(30), default="weekly", nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    insights: Mapped[list] = mapped_column(default=list, nullable=False)
    recommendations: Mapped[list] = mapped_column(default=list, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
