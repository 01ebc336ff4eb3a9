"""Pydantic schemas for the mentor's view of a client."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from mentalbase.db.enums import DataCategory
from mentalbase.schemas.note import MentorNoteRead


class CategoryDataResponse(BaseModel):
    """Single gated category read."""
    category: DataCategory
    records: list[dict[str, Any]]


class CategoryResult(BaseModel):
    """Category slot in the composite view. records is null when denied."""
    allowed: bool
    reason: str | None = None
    records: list[dict[str, Any]] | None = None


class ClientInfo(BaseModel):
    id: UUID
    name: str
    email: str
    registered_at: datetime
    relationship_id: UUID
    relationship_start_date: datetime | None


class CategoryFlags(BaseModel):
    allow_goals: bool = False
    allow_tasks: bool = False
    allow_logs: bool = False
    allow_reflections: bool = False
    allow_ai_reports: bool = False
    is_active: bool = False


class ClientDetailResponse(BaseModel):
    client_info: ClientInfo
    permissions: CategoryFlags
    progress_data: dict[DataCategory, CategoryResult]
    mentor_notes: list[MentorNoteRead]
