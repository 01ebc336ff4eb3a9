"""Pydantic schemas for client dashboard aggregates."""

from datetime import datetime

from pydantic import BaseModel, Field

from mentalbase.db.enums import StatsPeriod
from mentalbase.schemas.activity import ActivityRead
from mentalbase.schemas.task import TaskWithGoal


class CompassSummary(BaseModel):
    """Four independent progress axes, each 0-100."""
    plan_progress: int = Field(..., ge=0, le=100)
    do_progress: int = Field(..., ge=0, le=100)
    check_progress: int = Field(..., ge=0, le=100)
    action_progress: int = Field(..., ge=0, le=100)


class ProgressStats(BaseModel):
    """Activity within one period. ``end`` is exclusive."""
    period: StatsPeriod
    start: datetime
    end: datetime
    achievement_rate: int = Field(..., ge=0, le=100)
    completed_tasks: int
    total_tasks: int
    log_days: int
    active_goals: int


class DashboardResponse(BaseModel):
    compass_summary: CompassSummary
    today_tasks: list[TaskWithGoal]
    recent_activities: list[ActivityRead]
