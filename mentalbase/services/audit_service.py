"""Data view audit service - records every mentor access gate outcome.

Clients are told that "mentor views are audited"; this module is what makes
that true.

Security guidelines:
- Store ids, categories, outcomes and counts only, never record content
- Writes go through their own session so an audit failure can never roll
  back or block the caller's read
- A failed write is logged and dropped; the access decision stands
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mentalbase.core.config import settings
from mentalbase.core.structured_logging import build_log_context
from mentalbase.db.enums import AccessOutcome, DataCategory, ViewAction
from mentalbase.db.models import ClientDataViewLog
from mentalbase.db.session import SessionLocal

logger = logging.getLogger(__name__)


def get_audit_session_factory() -> sessionmaker:
    """Session factory used for audit writes (patched in tests)."""
    return SessionLocal


def record_access(
    *,
    mentor_id: UUID,
    client_id: UUID | None,
    relationship_id: UUID | None,
    category: DataCategory,
    outcome: AccessOutcome,
    reason: str | None = None,
    record_count: int | None = None,
    action: ViewAction = ViewAction.VIEW,
) -> bool:
    """
    Write one audit row for a gate outcome.

    Best-effort: returns False (after logging) when the write fails.
    """
    entry = ClientDataViewLog(
        relationship_id=relationship_id,
        mentor_id=mentor_id,
        client_id=client_id,
        data_type=category.value,
        outcome=outcome.value,
        reason=reason,
        action=action.value,
        record_count=record_count,
    )
    try:
        factory = get_audit_session_factory()
        with factory() as audit_db:
            audit_db.add(entry)
            audit_db.commit()
    except SQLAlchemyError:
        logger.exception(
            "Failed to write data view audit entry",
            extra=build_log_context(
                mentor_id=str(mentor_id),
                client_id=str(client_id) if client_id else None,
                relationship_id=str(relationship_id) if relationship_id else None,
                category=category.value,
            ),
        )
        return False
    return True


def list_client_view_logs(
    db: Session,
    client_id: UUID,
    limit: int | None = None,
) -> list[ClientDataViewLog]:
    """Everything mentors did (or tried) with this client's data, newest first."""
    query = (
        select(ClientDataViewLog)
        .where(ClientDataViewLog.client_id == client_id)
        .order_by(ClientDataViewLog.created_at.desc())
        .limit(limit or settings.VIEW_LOG_DEFAULT_LIMIT)
    )
    return list(db.execute(query).scalars().all())


def list_mentor_view_logs(
    db: Session,
    mentor_id: UUID,
    client_id: UUID | None = None,
    limit: int | None = None,
) -> list[ClientDataViewLog]:
    """A mentor's own view history, optionally narrowed to one client."""
    query = select(ClientDataViewLog).where(ClientDataViewLog.mentor_id == mentor_id)
    if client_id:
        query = query.where(ClientDataViewLog.client_id == client_id)
    query = query.order_by(ClientDataViewLog.created_at.desc()).limit(
        limit or settings.VIEW_LOG_DEFAULT_LIMIT
    )
    return list(db.execute(query).scalars().all())
