"""Client dashboard aggregates: compass, period stats, recent activity, today's tasks."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mentalbase.core.deps import get_current_session, get_db
from mentalbase.db.enums import StatsPeriod
from mentalbase.schemas.activity import ActivityRead
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.dashboard import CompassSummary, DashboardResponse, ProgressStats
from mentalbase.schemas.task import TaskWithGoal
from mentalbase.services import (
    activity_feed_service,
    dashboard_service,
    progress_service,
    task_service,
)
from mentalbase.services.activity_feed_service import InvalidFeedLimitError
from mentalbase.services.mentor_view_service import CategoryFetchTimeoutError
from mentalbase.services.progress_service import InvalidPeriodError

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    timeout_seconds: float | None = Query(None, gt=0),
    session: UserSession = Depends(get_current_session),
):
    """Compass summary, today's tasks and recent activity in one response."""
    try:
        return dashboard_service.get_dashboard(session.user_id, timeout_seconds=timeout_seconds)
    except CategoryFetchTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e))


@router.get("/compass/progress", response_model=CompassSummary)
def get_compass_progress(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return progress_service.get_compass_summary(db, session.user_id)


@router.get("/progress/stats", response_model=ProgressStats)
def get_progress_stats(
    period: StatsPeriod = StatsPeriod.THIS_WEEK,
    start_date: date | None = None,
    end_date: date | None = None,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Achievement rate, log days and active goals for a period."""
    try:
        return progress_service.get_progress_stats(
            db, session.user_id, period, start_date=start_date, end_date=end_date
        )
    except InvalidPeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/activities/recent", response_model=list[ActivityRead])
def get_recent_activities(
    limit: int | None = Query(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Merged activity feed, newest first."""
    try:
        return activity_feed_service.build_feed(db, session.user_id, limit)
    except InvalidFeedLimitError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/tasks/today", response_model=list[TaskWithGoal])
def get_today_tasks(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Tasks due today ordered by priority, scheduled time, then creation."""
    return task_service.list_today_tasks(db, session.user_id)
