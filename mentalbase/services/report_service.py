"""Mentor progress reports about clients.

A report's counts come from client data and are read through the access
gate: a category the client does not share is left empty (None) and the
denial is audited like any other. The mentor-written parts (comments,
rating, strengths) are not client data. Sharing with the client is one-way.
"""

import logging
from typing import Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.core import data_access
from mentalbase.core.structured_logging import build_log_context
from mentalbase.db.base import utcnow
from mentalbase.db.enums import (
    DataCategory,
    GoalStatus,
    RelationshipStatus,
    StatsPeriod,
    TaskStatus,
)
from mentalbase.db.models import ClientProgressReport, Goal, Log, Reflection, Task, User
from mentalbase.schemas.report import ProgressReportCreate, ProgressReportUpdate
from mentalbase.services import progress_service, relationship_service

logger = logging.getLogger(__name__)


class ProgressReportError(Exception):
    """Base exception for progress report errors."""

    pass


class ProgressReportNotFoundError(ProgressReportError):
    """Report not found."""

    pass


class ProgressReportAccessError(ProgressReportError):
    """Report belongs to another mentor, or the relationship is not active."""

    pass


class ProgressReportAlreadySharedError(ProgressReportError):
    """Report has already been shared with the client."""

    pass


def _clean_items(items: list[str]) -> list[str]:
    seen: list[str] = []
    for item in items:
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
    return seen


def _gated_count(
    context: data_access.GateContext,
    category: DataCategory,
    counter: Callable[[], int],
) -> int | None:
    decision = data_access.decide(context, category)
    if not decision.allowed:
        return None
    count = counter()
    data_access.record_read(context, category, count)
    return count


# =============================================================================
# Queries
# =============================================================================


def list_mentor_reports(
    db: Session, mentor_id: UUID, client_id: UUID | None = None
) -> list[tuple[ClientProgressReport, User]]:
    """
    Mentor's reports with their client, newest first.

    Raises:
        RelationshipNotActiveError: client_id given without an active relationship
    """
    query = (
        select(ClientProgressReport, User)
        .join(User, User.id == ClientProgressReport.client_id)
        .where(ClientProgressReport.mentor_id == mentor_id)
    )
    if client_id is not None:
        relationship_service.require_active_relationship(db, mentor_id, client_id)
        query = query.where(ClientProgressReport.client_id == client_id)
    rows = db.execute(query.order_by(ClientProgressReport.created_at.desc())).all()
    return [(row[0], row[1]) for row in rows]


def list_shared_reports(db: Session, client_id: UUID) -> list[ClientProgressReport]:
    """Reports mentors have shared with this client, newest first."""
    return list(
        db.execute(
            select(ClientProgressReport)
            .where(
                ClientProgressReport.client_id == client_id,
                ClientProgressReport.is_shared_with_client.is_(True),
            )
            .order_by(ClientProgressReport.created_at.desc())
        )
        .scalars()
        .all()
    )


def get_report(db: Session, mentor_id: UUID, report_id: UUID) -> ClientProgressReport:
    report = db.get(ClientProgressReport, report_id)
    if report is None:
        raise ProgressReportNotFoundError("Report not found")
    if report.mentor_id != mentor_id:
        raise ProgressReportAccessError("Report belongs to another mentor")
    return report


# =============================================================================
# Mutations
# =============================================================================


def create_report(db: Session, mentor_id: UUID, data: ProgressReportCreate) -> ClientProgressReport:
    """
    Draft a report, counting the client's activity in the date range.

    Raises:
        NoActiveRelationshipError: no active relationship with the client
    """
    context = data_access.load_context_for_pair(db, mentor_id, data.client_id)
    if context.relationship_status != RelationshipStatus.ACTIVE.value:
        raise data_access.NoActiveRelationshipError()

    client_id = data.client_id
    start, end = progress_service.period_window(
        StatsPeriod.CUSTOM, start_date=data.start_date, end_date=data.end_date
    )

    completed_goals = _gated_count(
        context,
        DataCategory.GOALS,
        lambda: progress_service.count_between(
            db,
            Goal,
            Goal.updated_at,
            start,
            end,
            Goal.user_id == client_id,
            Goal.status == GoalStatus.COMPLETED.value,
        ),
    )
    completed_tasks = _gated_count(
        context,
        DataCategory.TASKS,
        lambda: progress_service.count_between(
            db,
            Task,
            Task.completed_at,
            start,
            end,
            Task.user_id == client_id,
            Task.status == TaskStatus.COMPLETED.value,
        ),
    )
    overall_progress = None
    if completed_tasks is not None:
        created_tasks = progress_service.count_between(
            db, Task, Task.created_at, start, end, Task.user_id == client_id
        )
        overall_progress = progress_service.percentage(completed_tasks, created_tasks)
    log_count = _gated_count(
        context,
        DataCategory.LOGS,
        lambda: progress_service.count_between(
            db, Log, Log.created_at, start, end, Log.user_id == client_id
        ),
    )
    reflection_count = _gated_count(
        context,
        DataCategory.REFLECTIONS,
        lambda: progress_service.count_between(
            db, Reflection, Reflection.created_at, start, end, Reflection.user_id == client_id
        ),
    )

    report = ClientProgressReport(
        mentor_id=mentor_id,
        client_id=client_id,
        report_period=data.report_period.value,
        start_date=data.start_date,
        end_date=data.end_date,
        overall_progress=overall_progress,
        completed_goals=completed_goals,
        completed_tasks=completed_tasks,
        log_count=log_count,
        reflection_count=reflection_count,
        mentor_comments=data.mentor_comments,
        mentor_rating=data.mentor_rating,
        areas_of_improvement=_clean_items(data.areas_of_improvement),
        strengths=_clean_items(data.strengths),
        next_steps=data.next_steps,
        follow_up_date=data.follow_up_date,
        is_shared_with_client=data.is_shared_with_client,
        shared_at=utcnow() if data.is_shared_with_client else None,
    )
    db.add(report)
    db.commit()
    db.refresh(report)

    logger.info(
        "Progress report created",
        extra=build_log_context(
            mentor_id=str(mentor_id), client_id=str(client_id), report_id=str(report.id)
        ),
    )
    return report


def update_report(
    db: Session, mentor_id: UUID, report_id: UUID, data: ProgressReportUpdate
) -> ClientProgressReport:
    """Partial update of the mentor-written fields. Counts are left alone."""
    report = get_report(db, mentor_id, report_id)

    updates = data.model_dump(exclude_unset=True)
    for field in (
        "mentor_comments",
        "mentor_rating",
        "next_steps",
        "follow_up_date",
        "overall_progress",
    ):
        if field in updates:
            setattr(report, field, updates[field])
    if updates.get("areas_of_improvement") is not None:
        report.areas_of_improvement = _clean_items(updates["areas_of_improvement"])
    if updates.get("strengths") is not None:
        report.strengths = _clean_items(updates["strengths"])

    db.commit()
    db.refresh(report)
    return report


def share_report(db: Session, mentor_id: UUID, report_id: UUID) -> ClientProgressReport:
    """
    Make a report visible to its client. There is no unshare.

    Raises:
        ProgressReportNotFoundError: no such report
        ProgressReportAccessError: another mentor's report, or relationship not active
        ProgressReportAlreadySharedError: already shared
    """
    report = get_report(db, mentor_id, report_id)
    if report.is_shared_with_client:
        raise ProgressReportAlreadySharedError("Report is already shared with the client")
    if relationship_service.get_active_relationship(db, mentor_id, report.client_id) is None:
        raise ProgressReportAccessError("No active relationship with this client")

    report.is_shared_with_client = True
    report.shared_at = utcnow()
    db.commit()
    db.refresh(report)

    logger.info(
        "Progress report shared",
        extra=build_log_context(
            mentor_id=str(mentor_id), client_id=str(report.client_id), report_id=str(report.id)
        ),
    )
    return report
