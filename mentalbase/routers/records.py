"""Logs, reflections, action plans and AI report endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from mentalbase.core.deps import get_current_session, get_db, require_csrf_header
from mentalbase.db.enums import ActionPlanStatus, LogType, ReflectionPeriod
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.record import (
    ActionPlanCreate,
    ActionPlanRead,
    ActionPlanStatusUpdate,
    AIReportRead,
    LogCreate,
    LogRead,
    ReflectionCreate,
    ReflectionRead,
)
from mentalbase.services import record_service
from mentalbase.services.record_service import RecordNotFoundError

router = APIRouter(tags=["records"])


# =============================================================================
# Logs
# =============================================================================


@router.get("/logs", response_model=list[LogRead])
def list_logs(
    log_type: LogType | None = None,
    limit: int | None = Query(None, ge=1, le=500),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.list_logs(db, session.user_id, log_type=log_type, limit=limit)


@router.post(
    "/logs",
    response_model=LogRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_log(
    data: LogCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.create_log(db, session.user_id, data)


# =============================================================================
# Reflections
# =============================================================================


@router.get("/reflections", response_model=list[ReflectionRead])
def list_reflections(
    period: ReflectionPeriod | None = None,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.list_reflections(db, session.user_id, period=period)


@router.post(
    "/reflections",
    response_model=ReflectionRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_reflection(
    data: ReflectionCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.create_reflection(db, session.user_id, data)


# =============================================================================
# Action plans
# =============================================================================


@router.get("/action-plans", response_model=list[ActionPlanRead])
def list_action_plans(
    status_filter: ActionPlanStatus | None = None,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.list_action_plans(db, session.user_id, status=status_filter)


@router.post(
    "/action-plans",
    response_model=ActionPlanRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_action_plan(
    data: ActionPlanCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.create_action_plan(db, session.user_id, data)


@router.patch(
    "/action-plans/{plan_id}/status",
    response_model=ActionPlanRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_action_plan_status(
    plan_id: UUID,
    data: ActionPlanStatusUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    try:
        return record_service.update_action_plan_status(db, session.user_id, plan_id, data.status)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Action plan not found")


# =============================================================================
# AI reports (read-only)
# =============================================================================


@router.get("/ai-reports", response_model=list[AIReportRead])
def list_ai_reports(
    limit: int | None = Query(None, ge=1, le=100),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return record_service.list_reports(db, session.user_id, limit=limit)


@router.get("/ai-reports/latest", response_model=AIReportRead | None)
def get_latest_ai_report(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Most recent report, or null when none has been generated yet."""
    return record_service.get_latest_report(db, session.user_id)
