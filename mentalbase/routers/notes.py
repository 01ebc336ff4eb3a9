"""Mentor notes: mentor CRUD and the client's shared-with-me list."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mentalbase.core.deps import (
    get_current_session,
    get_db,
    require_csrf_header,
    require_mentor,
)
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.note import MentorNoteCreate, MentorNoteRead, MentorNoteUpdate
from mentalbase.services import note_service
from mentalbase.services.note_service import NoteAccessError, NoteNotFoundError

router = APIRouter(tags=["notes"])


@router.get("/mentor/notes", response_model=list[MentorNoteRead])
def list_notes(
    client_id: UUID,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    return note_service.list_mentor_notes(db, session.user_id, client_id)


@router.post(
    "/mentor/notes",
    response_model=MentorNoteRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_note(
    data: MentorNoteCreate,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    try:
        return note_service.create_note(db, session.user_id, data)
    except NoteAccessError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.patch(
    "/mentor/notes/{note_id}",
    response_model=MentorNoteRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_note(
    note_id: UUID,
    data: MentorNoteUpdate,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    try:
        return note_service.update_note(db, session.user_id, note_id, data)
    except NoteNotFoundError:
        raise HTTPException(status_code=404, detail="Note not found")
    except NoteAccessError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete(
    "/mentor/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_note(
    note_id: UUID,
    session: UserSession = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    try:
        note_service.delete_note(db, session.user_id, note_id)
    except NoteNotFoundError:
        raise HTTPException(status_code=404, detail="Note not found")


@router.get("/client/mentor-notes", response_model=list[MentorNoteRead])
def list_shared_notes(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Notes mentors chose to share with the caller."""
    return note_service.list_shared_notes(db, session.user_id)
