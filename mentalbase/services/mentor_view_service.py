"""Mentor-facing reads of client data, always through the access gate.

Single-category reads raise on denial. The composite client view decides
every category up front, then fetches only the allowed ones concurrently
(one session per worker thread) under a caller deadline. Denied categories
are never fetched; on timeout nothing is returned.
"""

import logging
from dataclasses import asdict
from functools import partial
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.orm import Session, sessionmaker

from mentalbase.core import data_access
from mentalbase.core.async_utils import gather_in_threads, run_async
from mentalbase.core.config import settings
from mentalbase.core.deps import get_session_factory
from mentalbase.core.structured_logging import build_log_context
from mentalbase.db.enums import DataCategory, RelationshipStatus
from mentalbase.db.models import MentorClientRelationship, User
from mentalbase.schemas.mentor_view import (
    CategoryFlags,
    CategoryResult,
    ClientDetailResponse,
    ClientInfo,
)
from mentalbase.schemas.note import MentorNoteRead
from mentalbase.schemas.record import LogRead, ReflectionRead
from mentalbase.services import goal_service, note_service, record_service, task_service

logger = logging.getLogger(__name__)


class CategoryFetchTimeoutError(Exception):
    """Caller deadline elapsed before every category fetch finished."""

    pass


# =============================================================================
# Category fetchers
# =============================================================================


def _goals(db: Session, client_id: UUID) -> list[dict[str, Any]]:
    return [g.model_dump(mode="json") for g in goal_service.list_goals_with_progress(db, client_id)]


def _tasks(db: Session, client_id: UUID) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json") for t in task_service.list_tasks_with_goal(db, client_id)]


def _logs(db: Session, client_id: UUID) -> list[dict[str, Any]]:
    return [
        LogRead.model_validate(log).model_dump(mode="json")
        for log in record_service.list_logs(db, client_id)
    ]


def _reflections(db: Session, client_id: UUID) -> list[dict[str, Any]]:
    return [
        ReflectionRead.model_validate(r).model_dump(mode="json")
        for r in record_service.list_reflections(db, client_id)
    ]


def _ai_reports(db: Session, client_id: UUID) -> list[dict[str, Any]]:
    return [r.model_dump(mode="json") for r in record_service.list_reports(db, client_id)]


CATEGORY_FETCHERS: dict[DataCategory, Callable[[Session, UUID], list[dict[str, Any]]]] = {
    DataCategory.GOALS: _goals,
    DataCategory.TASKS: _tasks,
    DataCategory.LOGS: _logs,
    DataCategory.REFLECTIONS: _reflections,
    DataCategory.AI_REPORTS: _ai_reports,
}


def fetch_category(db: Session, category: DataCategory, client_id: UUID) -> list[dict[str, Any]]:
    """Raw category read. Callers must have passed the gate first."""
    return CATEGORY_FETCHERS[category](db, client_id)


def _fetch_in_own_session(
    factory: sessionmaker, category: DataCategory, client_id: UUID
) -> list[dict[str, Any]]:
    with factory() as session:
        return fetch_category(session, category, client_id)


# =============================================================================
# Gated reads
# =============================================================================


def get_category_data(
    db: Session,
    mentor_id: UUID,
    client_id: UUID,
    category: DataCategory,
) -> list[dict[str, Any]]:
    """
    One gated category for one client.

    Raises:
        NoActiveRelationshipError: no active relationship with the client
        PermissionDeniedError: category not shared, sharing paused, or no record
    """
    context = data_access.load_context_for_pair(db, mentor_id, client_id)
    data_access.require_access(context, category)
    records = fetch_category(db, category, client_id)
    data_access.record_read(context, category, len(records))
    return records


def resolve_timeout(timeout_seconds: float | None) -> float:
    """Caller deadline, defaulted and clamped by configuration."""
    if timeout_seconds is None:
        return settings.CATEGORY_FETCH_TIMEOUT_SECONDS
    return min(timeout_seconds, settings.CATEGORY_FETCH_MAX_TIMEOUT_SECONDS)


def fetch_allowed_categories(
    categories: list[DataCategory],
    client_id: UUID,
    timeout_seconds: float,
    session_factory: sessionmaker | None = None,
) -> dict[DataCategory, list[dict[str, Any]]]:
    """
    Fetch categories concurrently. All-or-nothing under the deadline.

    Raises:
        CategoryFetchTimeoutError: deadline elapsed
    """
    if not categories:
        return {}
    factory = session_factory or get_session_factory()
    calls = {
        category.value: partial(_fetch_in_own_session, factory, category, client_id)
        for category in categories
    }
    try:
        fetched = run_async(
            gather_in_threads(calls, max_concurrency=settings.CATEGORY_FETCH_CONCURRENCY),
            timeout=timeout_seconds,
        )
    except TimeoutError:
        raise CategoryFetchTimeoutError(
            f"Client data fetch exceeded {timeout_seconds:g}s"
        ) from None
    return {DataCategory(key): records for key, records in fetched.items()}


def get_client_detail(
    db: Session,
    mentor_id: UUID,
    client_id: UUID,
    timeout_seconds: float | None = None,
    session_factory: sessionmaker | None = None,
) -> ClientDetailResponse:
    """
    Composite client view for the mentor.

    Raises:
        NoActiveRelationshipError: no active relationship with the client
        CategoryFetchTimeoutError: deadline elapsed
    """
    context = data_access.load_context_for_pair(db, mentor_id, client_id)
    decisions = {category: data_access.decide(context, category) for category in DataCategory}
    if context.relationship_status != RelationshipStatus.ACTIVE.value:
        raise data_access.NoActiveRelationshipError()

    allowed = [category for category, decision in decisions.items() if decision.allowed]
    deadline = resolve_timeout(timeout_seconds)
    fetched = fetch_allowed_categories(allowed, client_id, deadline, session_factory)

    progress: dict[DataCategory, CategoryResult] = {}
    for category, decision in decisions.items():
        if decision.allowed:
            records = fetched[category]
            data_access.record_read(context, category, len(records))
            progress[category] = CategoryResult(allowed=True, records=records)
        else:
            progress[category] = CategoryResult(allowed=False, reason=decision.reason.value)

    logger.info(
        "Mentor client view: %d/%d categories shared",
        len(allowed),
        len(decisions),
        extra=build_log_context(
            mentor_id=str(mentor_id),
            client_id=str(client_id),
            relationship_id=str(context.relationship_id),
        ),
    )

    client = db.get(User, client_id)
    relationship = db.get(MentorClientRelationship, context.relationship_id)
    flags = context.flags
    notes = note_service.list_mentor_notes(db, mentor_id, client_id)
    return ClientDetailResponse(
        client_info=ClientInfo(
            id=client.id,
            name=client.name,
            email=client.email,
            registered_at=client.created_at,
            relationship_id=relationship.id,
            relationship_start_date=relationship.accepted_at,
        ),
        permissions=CategoryFlags(**asdict(flags)) if flags else CategoryFlags(),
        progress_data=progress,
        mentor_notes=[MentorNoteRead.model_validate(n) for n in notes],
    )
