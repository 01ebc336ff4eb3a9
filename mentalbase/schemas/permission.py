"""Pydantic schemas for client data access permissions."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, StrictBool

from mentalbase.db.enums import RelationshipStatus


class PermissionUpdate(BaseModel):
    """
    Full replacement of the five category grants.

    All five flags are required and must be real booleans; anything else
    is rejected before a write happens.
    """
    allow_goals: StrictBool
    allow_tasks: StrictBool
    allow_logs: StrictBool
    allow_reflections: StrictBool
    allow_ai_reports: StrictBool

    model_config = {"extra": "forbid"}


class PermissionRead(BaseModel):
    id: UUID
    relationship_id: UUID
    client_id: UUID
    allow_goals: bool
    allow_tasks: bool
    allow_logs: bool
    allow_reflections: bool
    allow_ai_reports: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientRelationshipAccessItem(BaseModel):
    """One mentor relationship as seen from the client's settings page."""
    relationship_id: UUID
    mentor_id: UUID
    mentor_name: str
    mentor_email: str
    relationship_status: RelationshipStatus
    invited_at: datetime
    accepted_at: datetime | None = None
    permissions: PermissionRead | None = None


class ClientDataAccessResponse(BaseModel):
    items: list[ClientRelationshipAccessItem]
