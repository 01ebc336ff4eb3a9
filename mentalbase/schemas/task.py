"""Pydantic schemas for tasks."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from mentalbase.core.constants import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from mentalbase.db.enums import TaskPriority, TaskStatus

SCHEDULED_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class TaskCreate(BaseModel):
    """Request to create a task."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    goal_id: UUID | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    scheduled_time: str | None = Field(None, pattern=SCHEDULED_TIME_PATTERN)
    estimated_minutes: int | None = Field(None, ge=1, le=24 * 60)


class TaskRead(BaseModel):
    id: UUID
    user_id: UUID
    goal_id: UUID | None
    title: str
    description: str | None
    priority: TaskPriority
    status: TaskStatus
    due_date: datetime | None
    scheduled_time: str | None
    estimated_minutes: int | None = None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskWithGoal(TaskRead):
    """Task plus its parent goal title (absent when unlinked or deleted)."""
    goal_name: str | None = None
