"""Mentor-client relationship endpoints (invite, accept, terminate, list)."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mentalbase.core.deps import (
    get_current_session,
    get_db,
    require_csrf_header,
    require_mentor,
)
from mentalbase.db.models import User
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.relationship import (
    InviteCreate,
    MentorRelationshipItem,
    MentorRelationshipListResponse,
    RelationshipRead,
    RelationshipTerminate,
)
from mentalbase.services import relationship_service
from mentalbase.services.relationship_service import (
    DuplicateRelationshipError,
    InvalidRelationshipTransitionError,
    InviteeNotFoundError,
    NotAMentorError,
    NotRelationshipPartyError,
    RelationshipNotFoundError,
)

router = APIRouter(tags=["relationships"])


@router.get("/mentor/relationships", response_model=MentorRelationshipListResponse)
def list_mentor_relationships(
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """All of the mentor's relationships with client summaries."""
    relationships = relationship_service.list_mentor_relationships(db, session.user_id)
    items = [
        MentorRelationshipItem(
            **RelationshipRead.model_validate(r).model_dump(),
            client_name=r.client.name,
            client_email=r.client.email,
            has_active_permissions=bool(r.permission and r.permission.is_active),
        )
        for r in relationships
    ]
    return MentorRelationshipListResponse(items=items)


@router.post(
    "/mentor/invite",
    response_model=RelationshipRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def invite_client(
    data: InviteCreate,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """Invite an existing user to become a client (creates a pending relationship)."""
    mentor = db.get(User, session.user_id)
    try:
        return relationship_service.invite(db, mentor, data.client_email)
    except NotAMentorError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InviteeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateRelationshipError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidRelationshipTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/relationships/{relationship_id}/accept",
    response_model=RelationshipRead,
    dependencies=[Depends(require_csrf_header)],
)
def accept_relationship(
    relationship_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Client accepts a pending invitation. Sharing starts with the default grants."""
    try:
        return relationship_service.accept(db, relationship_id, session.user_id)
    except RelationshipNotFoundError:
        raise HTTPException(status_code=404, detail="Relationship not found")
    except NotRelationshipPartyError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidRelationshipTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/relationships/{relationship_id}/terminate",
    response_model=RelationshipRead,
    dependencies=[Depends(require_csrf_header)],
)
def terminate_relationship(
    relationship_id: UUID,
    data: RelationshipTerminate | None = None,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Either party ends the relationship. This cannot be undone."""
    try:
        return relationship_service.terminate(
            db,
            relationship_id,
            session.user_id,
            reason=data.reason if data else None,
        )
    except RelationshipNotFoundError:
        raise HTTPException(status_code=404, detail="Relationship not found")
    except NotRelationshipPartyError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidRelationshipTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
