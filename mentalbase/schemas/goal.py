"""Pydantic schemas for goals."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from mentalbase.core.constants import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from mentalbase.db.enums import GoalStatus


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    deadline: datetime | None = None


class GoalUpdate(BaseModel):
    """Partial update."""
    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    deadline: datetime | None = None
    status: GoalStatus | None = None


class GoalRead(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    description: str | None
    deadline: datetime | None
    status: GoalStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GoalWithProgress(GoalRead):
    completed_tasks: int
    total_tasks: int
    progress_percentage: int
