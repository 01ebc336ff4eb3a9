"""Pydantic schemas for logs, reflections, action plans and AI reports."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from mentalbase.core.constants import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from mentalbase.db.enums import (
    ActionPlanStatus,
    Emotion,
    LogType,
    MentalState,
    ReflectionPeriod,
)


# =============================================================================
# Logs
# =============================================================================

class LogCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    emotion: Emotion | None = None
    state: MentalState | None = None
    log_type: LogType = LogType.DAILY
    task_id: UUID | None = None


class LogRead(BaseModel):
    id: UUID
    user_id: UUID
    task_id: UUID | None
    content: str
    emotion: Emotion | None
    state: MentalState | None
    log_type: LogType
    created_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Reflections
# =============================================================================

class ReflectionCreate(BaseModel):
    period: ReflectionPeriod
    start_date: datetime
    end_date: datetime
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    achievements: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    challenges: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ReflectionRead(BaseModel):
    id: UUID
    user_id: UUID
    period: ReflectionPeriod
    start_date: datetime
    end_date: datetime
    content: str
    achievements: str | None
    challenges: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Action plans
# =============================================================================

class ActionPlanCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    action_items: list[str] = Field(..., min_length=1)
    report_id: UUID | None = None


class ActionPlanStatusUpdate(BaseModel):
    status: ActionPlanStatus


class ActionPlanRead(BaseModel):
    id: UUID
    user_id: UUID
    report_id: UUID | None
    title: str
    description: str
    action_items: list[str]
    status: ActionPlanStatus
    created_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# AI analysis reports
# =============================================================================

class Recommendation(BaseModel):
    priority: int = Field(..., ge=1)
    text: str


class AIReportRead(BaseModel):
    id: UUID
    user_id: UUID
    analysis_type: str
    summary: str | None = None
    insights: list[str]
    recommendations: list[Recommendation]
    confidence: float = Field(..., ge=0, le=1)
    confidence_percentage: int
    created_at: datetime
