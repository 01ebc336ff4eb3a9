"""Mentor progress reports: mentor drafting and sharing, and the client's shared list."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mentalbase.core.data_access import NoActiveRelationshipError
from mentalbase.core.deps import (
    get_current_session,
    get_db,
    require_csrf_header,
    require_mentor,
)
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.report import (
    MentorProgressReportItem,
    ProgressReportCreate,
    ProgressReportRead,
    ProgressReportUpdate,
)
from mentalbase.services import report_service
from mentalbase.services.relationship_service import RelationshipNotActiveError
from mentalbase.services.report_service import (
    ProgressReportAccessError,
    ProgressReportAlreadySharedError,
    ProgressReportNotFoundError,
)

router = APIRouter(tags=["reports"])


@router.get("/mentor/reports", response_model=list[MentorProgressReportItem])
def list_reports(
    client_id: UUID | None = None,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """The mentor's reports, optionally for one client (active relationship required)."""
    try:
        rows = report_service.list_mentor_reports(db, session.user_id, client_id)
    except RelationshipNotActiveError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [
        MentorProgressReportItem(
            **ProgressReportRead.model_validate(report).model_dump(),
            client_name=client.name,
            client_email=client.email,
        )
        for report, client in rows
    ]


@router.post(
    "/mentor/reports",
    response_model=ProgressReportRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_report(
    data: ProgressReportCreate,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    try:
        return report_service.create_report(db, session.user_id, data)
    except NoActiveRelationshipError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch(
    "/mentor/reports/{report_id}",
    response_model=ProgressReportRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_report(
    report_id: UUID,
    data: ProgressReportUpdate,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    try:
        return report_service.update_report(db, session.user_id, report_id, data)
    except ProgressReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProgressReportAccessError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post(
    "/mentor/reports/{report_id}/share",
    response_model=ProgressReportRead,
    dependencies=[Depends(require_csrf_header)],
)
def share_report(
    report_id: UUID,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """Share a report with its client. Sharing cannot be undone."""
    try:
        return report_service.share_report(db, session.user_id, report_id)
    except ProgressReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProgressReportAccessError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ProgressReportAlreadySharedError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/client/progress-reports", response_model=list[ProgressReportRead])
def list_shared_reports(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Reports mentors chose to share with the caller."""
    return report_service.list_shared_reports(db, session.user_id)
