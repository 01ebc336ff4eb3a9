"""Mentor notes about clients.

Not routed through the access gate: a mentor always sees their own notes,
and a client sees a note only when the mentor shared it.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.db.models import MentorNote
from mentalbase.schemas.note import MentorNoteCreate, MentorNoteUpdate
from mentalbase.services import relationship_service


class NoteServiceError(Exception):
    """Base exception for note service errors."""

    pass


class NoteNotFoundError(NoteServiceError):
    """Note not found (or written by another mentor)."""

    pass


class NoteAccessError(NoteServiceError):
    """No active relationship with the note's client."""

    pass


def _clean_tags(tags: list[str]) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _require_active(db: Session, mentor_id: UUID, client_id: UUID) -> None:
    if relationship_service.get_active_relationship(db, mentor_id, client_id) is None:
        raise NoteAccessError("No active relationship with this client")


def list_mentor_notes(db: Session, mentor_id: UUID, client_id: UUID) -> list[MentorNote]:
    """Mentor's own notes about one client, newest first."""
    return list(
        db.execute(
            select(MentorNote)
            .where(MentorNote.mentor_id == mentor_id, MentorNote.client_id == client_id)
            .order_by(MentorNote.created_at.desc())
        )
        .scalars()
        .all()
    )


def list_shared_notes(db: Session, client_id: UUID) -> list[MentorNote]:
    """Notes mentors have shared with this client, newest first."""
    return list(
        db.execute(
            select(MentorNote)
            .where(
                MentorNote.client_id == client_id,
                MentorNote.is_shared_with_client.is_(True),
            )
            .order_by(MentorNote.created_at.desc())
        )
        .scalars()
        .all()
    )


def get_note(db: Session, mentor_id: UUID, note_id: UUID) -> MentorNote:
    note = db.execute(
        select(MentorNote).where(MentorNote.id == note_id, MentorNote.mentor_id == mentor_id)
    ).scalar_one_or_none()
    if not note:
        raise NoteNotFoundError("Note not found")
    return note


def create_note(db: Session, mentor_id: UUID, data: MentorNoteCreate) -> MentorNote:
    _require_active(db, mentor_id, data.client_id)
    note = MentorNote(
        mentor_id=mentor_id,
        client_id=data.client_id,
        title=data.title.strip(),
        content=data.content,
        note_type=data.note_type.value,
        is_shared_with_client=data.is_shared_with_client,
        tags=_clean_tags(data.tags),
        linked_data_type=data.linked_data_type.value if data.linked_data_type else None,
        linked_data_id=data.linked_data_id,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def update_note(
    db: Session, mentor_id: UUID, note_id: UUID, data: MentorNoteUpdate
) -> MentorNote:
    note = get_note(db, mentor_id, note_id)
    _require_active(db, mentor_id, note.client_id)

    updates = data.model_dump(exclude_unset=True)
    if updates.get("title") is not None:
        note.title = updates["title"].strip()
    if updates.get("content") is not None:
        note.content = updates["content"]
    if updates.get("note_type") is not None:
        note.note_type = data.note_type.value
    if updates.get("is_shared_with_client") is not None:
        note.is_shared_with_client = updates["is_shared_with_client"]
    if updates.get("tags") is not None:
        note.tags = _clean_tags(updates["tags"])
    if "linked_data_type" in updates:
        note.linked_data_type = data.linked_data_type.value if data.linked_data_type else None
    if "linked_data_id" in updates:
        note.linked_data_id = updates["linked_data_id"]

    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, mentor_id: UUID, note_id: UUID) -> None:
    note = get_note(db, mentor_id, note_id)
    db.delete(note)
    db.commit()
