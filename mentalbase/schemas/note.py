"""Pydantic schemas for mentor notes."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from mentalbase.core.constants import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from mentalbase.db.enums import DataCategory, NoteType


class MentorNoteCreate(BaseModel):
    client_id: UUID
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    note_type: NoteType = NoteType.GENERAL
    is_shared_with_client: bool = False
    tags: list[str] = Field(default_factory=list, max_length=20)
    linked_data_type: DataCategory | None = None
    linked_data_id: UUID | None = None


class MentorNoteUpdate(BaseModel):
    """Partial update. Only provided fields change."""
    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(None, min_length=1, max_length=CONTENT_MAX_LENGTH)
    note_type: NoteType | None = None
    is_shared_with_client: bool | None = None
    tags: list[str] | None = Field(None, max_length=20)
    linked_data_type: DataCategory | None = None
    linked_data_id: UUID | None = None


class MentorNoteRead(BaseModel):
    id: UUID
    mentor_id: UUID
    client_id: UUID
    title: str
    content: str
    note_type: NoteType
    is_shared_with_client: bool
    tags: list[str]
    linked_data_type: DataCategory | None
    linked_data_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
