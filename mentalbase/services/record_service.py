"""Client journal records: logs, reflections, action plans and AI reports.

These are plain per-user repositories. AI reports are stored by the analysis
pipeline elsewhere; this module only reads them.
"""

from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.db.enums import ActionPlanStatus, LogType, ReflectionPeriod
from mentalbase.db.models import ActionPlan, AIAnalysisReport, Log, Reflection
from mentalbase.schemas.record import (
    ActionPlanCreate,
    AIReportRead,
    LogCreate,
    Recommendation,
    ReflectionCreate,
)


class RecordNotFoundError(Exception):
    """Record missing or owned by another user."""

    pass


# =============================================================================
# Logs
# =============================================================================


def list_logs(
    db: Session,
    user_id: UUID,
    log_type: LogType | None = None,
    limit: int | None = None,
) -> list[Log]:
    query = select(Log).where(Log.user_id == user_id)
    if log_type:
        query = query.where(Log.log_type == log_type.value)
    query = query.order_by(Log.created_at.desc())
    if limit:
        query = query.limit(limit)
    return list(db.execute(query).scalars().all())


def create_log(db: Session, user_id: UUID, data: LogCreate) -> Log:
    log = Log(
        user_id=user_id,
        task_id=data.task_id,
        content=data.content,
        emotion=data.emotion.value if data.emotion else None,
        state=data.state.value if data.state else None,
        log_type=data.log_type.value,
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


# =============================================================================
# Reflections
# =============================================================================


def list_reflections(
    db: Session,
    user_id: UUID,
    period: ReflectionPeriod | None = None,
) -> list[Reflection]:
    query = select(Reflection).where(Reflection.user_id == user_id)
    if period:
        query = query.where(Reflection.period == period.value)
    return list(db.execute(query.order_by(Reflection.created_at.desc())).scalars().all())


def create_reflection(db: Session, user_id: UUID, data: ReflectionCreate) -> Reflection:
    reflection = Reflection(
        user_id=user_id,
        period=data.period.value,
        start_date=data.start_date,
        end_date=data.end_date,
        content=data.content,
        achievements=data.achievements,
        challenges=data.challenges,
    )
    db.add(reflection)
    db.commit()
    db.refresh(reflection)
    return reflection


# =============================================================================
# Action plans
# =============================================================================


def list_action_plans(
    db: Session,
    user_id: UUID,
    status: ActionPlanStatus | None = None,
) -> list[ActionPlan]:
    query = select(ActionPlan).where(ActionPlan.user_id == user_id)
    if status:
        query = query.where(ActionPlan.status == status.value)
    return list(db.execute(query.order_by(ActionPlan.created_at.desc())).scalars().all())


def create_action_plan(db: Session, user_id: UUID, data: ActionPlanCreate) -> ActionPlan:
    plan = ActionPlan(
        user_id=user_id,
        report_id=data.report_id,
        title=data.title.strip(),
        description=data.description,
        action_items=list(data.action_items),
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def update_action_plan_status(
    db: Session,
    user_id: UUID,
    plan_id: UUID,
    status: ActionPlanStatus,
) -> ActionPlan:
    plan = db.execute(
        select(ActionPlan).where(ActionPlan.id == plan_id, ActionPlan.user_id == user_id)
    ).scalar_one_or_none()
    if not plan:
        raise RecordNotFoundError("Action plan not found")
    plan.status = status.value
    db.commit()
    db.refresh(plan)
    return plan


# =============================================================================
# AI analysis reports
# =============================================================================


def confidence_percentage(confidence: float) -> int:
    """0.0-1.0 confidence as a half-up rounded integer percentage."""
    value = (Decimal(str(confidence)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(value)


def to_report_read(report: AIAnalysisReport) -> AIReportRead:
    recommendations = sorted(
        (Recommendation.model_validate(r) for r in report.recommendations or []),
        key=lambda r: r.priority,
    )
    return AIReportRead(
        id=report.id,
        user_id=report.user_id,
        analysis_type=report.analysis_type,
        summary=report.summary,
        insights=list(report.insights or []),
        recommendations=recommendations,
        confidence=report.confidence,
        confidence_percentage=confidence_percentage(report.confidence),
        created_at=report.created_at,
    )


def list_reports(db: Session, user_id: UUID, limit: int | None = None) -> list[AIReportRead]:
    query = (
        select(AIAnalysisReport)
        .where(AIAnalysisReport.user_id == user_id)
        .order_by(AIAnalysisReport.created_at.desc())
    )
    if limit:
        query = query.limit(limit)
    return [to_report_read(r) for r in db.execute(query).scalars().all()]


def get_latest_report(db: Session, user_id: UUID) -> AIReportRead | None:
    reports = list_reports(db, user_id, limit=1)
    return reports[0] if reports else None
