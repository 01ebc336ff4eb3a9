"""Pydantic schemas for the data view audit trail."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from mentalbase.db.enums import AccessOutcome, DataCategory


class ViewLogRead(BaseModel):
    id: UUID
    relationship_id: UUID | None
    mentor_id: UUID
    client_id: UUID | None
    data_type: DataCategory
    outcome: AccessOutcome
    reason: str | None
    action: str
    record_count: int | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ViewLogListResponse(BaseModel):
    items: list[ViewLogRead]
