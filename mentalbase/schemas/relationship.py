"""Pydantic schemas for mentor-client relationships."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from mentalbase.core.constants import TERMINATION_REASON_MAX_LENGTH
from mentalbase.db.enums import RelationshipStatus


class InviteCreate(BaseModel):
    """Mentor invites an existing user to become their client."""
    client_email: EmailStr


class RelationshipTerminate(BaseModel):
    reason: str | None = Field(None, max_length=TERMINATION_REASON_MAX_LENGTH)


class RelationshipRead(BaseModel):
    id: UUID
    mentor_id: UUID
    client_id: UUID
    status: RelationshipStatus
    invited_by: UUID | None = None
    invited_at: datetime
    accepted_at: datetime | None = None
    terminated_at: datetime | None = None
    termination_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MentorRelationshipItem(RelationshipRead):
    """Relationship as listed for the mentor (with client summary)."""
    client_name: str
    client_email: str
    has_active_permissions: bool


class MentorRelationshipListResponse(BaseModel):
    items: list[MentorRelationshipItem]
