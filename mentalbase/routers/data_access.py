"""Client-side data sharing settings and the view audit trail."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mentalbase.core.deps import get_current_session, get_db, require_csrf_header
from mentalbase.schemas.audit import ViewLogListResponse, ViewLogRead
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.permission import (
    ClientDataAccessResponse,
    ClientRelationshipAccessItem,
    PermissionRead,
    PermissionUpdate,
)
from mentalbase.services import audit_service, permission_service, relationship_service
from mentalbase.services.permission_service import PermissionRecordMissingError
from mentalbase.services.relationship_service import (
    NotRelationshipPartyError,
    RelationshipNotActiveError,
    RelationshipNotFoundError,
)

router = APIRouter(prefix="/client", tags=["data-access"])


def _permission_errors(fn):
    """Run a permission write, translating service errors to HTTP."""
    try:
        return fn()
    except RelationshipNotFoundError:
        raise HTTPException(status_code=404, detail="Relationship not found")
    except NotRelationshipPartyError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except RelationshipNotActiveError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionRecordMissingError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/data-access", response_model=ClientDataAccessResponse)
def list_data_access(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Mentors the client is (or may become) connected to, with sharing settings."""
    relationships = relationship_service.list_client_relationships(db, session.user_id)
    items = [
        ClientRelationshipAccessItem(
            relationship_id=r.id,
            mentor_id=r.mentor_id,
            mentor_name=r.mentor.name,
            mentor_email=r.mentor.email,
            relationship_status=r.status,
            invited_at=r.invited_at,
            accepted_at=r.accepted_at,
            permissions=PermissionRead.model_validate(r.permission) if r.permission else None,
        )
        for r in relationships
    ]
    return ClientDataAccessResponse(items=items)


@router.put(
    "/data-access/{relationship_id}",
    response_model=PermissionRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_data_access(
    relationship_id: UUID,
    data: PermissionUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Replace the five category flags. Applies to the mentor's next read."""
    return _permission_errors(
        lambda: permission_service.update_permissions(db, relationship_id, session.user_id, data)
    )


@router.post(
    "/data-access/{relationship_id}/pause",
    response_model=PermissionRead,
    dependencies=[Depends(require_csrf_header)],
)
def pause_data_access(
    relationship_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Stop sharing everything without losing the per-category settings."""
    return _permission_errors(
        lambda: permission_service.set_sharing_active(db, relationship_id, session.user_id, False)
    )


@router.post(
    "/data-access/{relationship_id}/resume",
    response_model=PermissionRead,
    dependencies=[Depends(require_csrf_header)],
)
def resume_data_access(
    relationship_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return _permission_errors(
        lambda: permission_service.set_sharing_active(db, relationship_id, session.user_id, True)
    )


@router.get("/view-logs", response_model=ViewLogListResponse)
def list_view_logs(
    limit: int | None = Query(None, ge=1, le=500),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Who looked at (or was refused) the client's data, newest first."""
    logs = audit_service.list_client_view_logs(db, session.user_id, limit=limit)
    return ViewLogListResponse(items=[ViewLogRead.model_validate(log) for log in logs])
