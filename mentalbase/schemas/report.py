"""Pydantic schemas for mentor progress reports."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from mentalbase.core.constants import CONTENT_MAX_LENGTH
from mentalbase.db.enums import ReportPeriod

RATING_MIN = 1
RATING_MAX = 5


class ProgressReportCreate(BaseModel):
    """Mentor drafts a report. Counts are filled in from the client's data."""
    client_id: UUID
    report_period: ReportPeriod = ReportPeriod.WEEKLY
    start_date: date
    end_date: date
    mentor_comments: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    mentor_rating: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    areas_of_improvement: list[str] = Field(default_factory=list, max_length=20)
    strengths: list[str] = Field(default_factory=list, max_length=20)
    next_steps: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    follow_up_date: date | None = None
    is_shared_with_client: bool = False

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProgressReportUpdate(BaseModel):
    """Partial update of the mentor-authored fields."""
    mentor_comments: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    mentor_rating: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    areas_of_improvement: list[str] | None = Field(None, max_length=20)
    strengths: list[str] | None = Field(None, max_length=20)
    next_steps: str | None = Field(None, max_length=CONTENT_MAX_LENGTH)
    follow_up_date: date | None = None
    overall_progress: int | None = Field(None, ge=0, le=100)


class ProgressReportRead(BaseModel):
    id: UUID
    mentor_id: UUID
    client_id: UUID
    report_period: ReportPeriod
    start_date: date
    end_date: date
    overall_progress: int | None
    completed_goals: int | None
    completed_tasks: int | None
    log_count: int | None
    reflection_count: int | None
    mentor_comments: str | None
    mentor_rating: int | None
    areas_of_improvement: list[str]
    strengths: list[str]
    next_steps: str | None
    follow_up_date: date | None
    is_shared_with_client: bool
    shared_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MentorProgressReportItem(ProgressReportRead):
    """Report as listed for the mentor (with client summary)."""
    client_name: str
    client_email: str
