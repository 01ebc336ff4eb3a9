"""Mentor read surface over client data (gated by the client's sharing settings)."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mentalbase.core.data_access import NoActiveRelationshipError, PermissionDeniedError
from mentalbase.core.deps import get_db, require_mentor
from mentalbase.core.structured_logging import build_log_context
from mentalbase.db.enums import DataCategory
from mentalbase.schemas.audit import ViewLogListResponse, ViewLogRead
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.mentor_view import CategoryDataResponse, ClientDetailResponse
from mentalbase.services import audit_service, mentor_view_service
from mentalbase.services.mentor_view_service import CategoryFetchTimeoutError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mentor", tags=["mentor"])


@router.get("/view-logs", response_model=ViewLogListResponse)
def list_my_view_logs(
    client_id: UUID | None = None,
    limit: int | None = Query(None, ge=1, le=500),
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """The mentor's own access history."""
    logs = audit_service.list_mentor_view_logs(db, session.user_id, client_id, limit=limit)
    return ViewLogListResponse(items=[ViewLogRead.model_validate(log) for log in logs])


@router.get("/clients/{client_id}", response_model=ClientDetailResponse)
def get_client_detail(
    client_id: UUID,
    timeout_seconds: float | None = Query(None, gt=0),
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """
    Client overview: summary, sharing flags, every category (records or the
    denial reason) and the mentor's notes.
    """
    try:
        return mentor_view_service.get_client_detail(
            db, session.user_id, client_id, timeout_seconds=timeout_seconds
        )
    except NoActiveRelationshipError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CategoryFetchTimeoutError as e:
        logger.warning(
            "Client view timed out",
            extra=build_log_context(mentor_id=str(session.user_id), client_id=str(client_id)),
        )
        raise HTTPException(status_code=504, detail=str(e))


@router.get("/clients/{client_id}/{category}", response_model=CategoryDataResponse)
def get_client_category(
    client_id: UUID,
    category: DataCategory,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """One category of client data. 403 when not shared, 404 without an active relationship."""
    try:
        records = mentor_view_service.get_category_data(db, session.user_id, client_id, category)
    except NoActiveRelationshipError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return CategoryDataResponse(category=category, records=records)
