"""Client-owned data sharing settings.

Only the client who owns the data can change them, and only while the
relationship is active. Every write commits immediately; the access gate
reads the row fresh on each request.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.core.policies import CATEGORY_PERMISSION_FIELDS
from mentalbase.core.structured_logging import build_log_context
from mentalbase.db.enums import RelationshipStatus
from mentalbase.db.models import ClientDataAccessPermission, MentorClientRelationship
from mentalbase.schemas.permission import PermissionUpdate
from mentalbase.services.relationship_service import (
    NotRelationshipPartyError,
    RelationshipNotActiveError,
    RelationshipServiceError,
    get_relationship,
)

logger = logging.getLogger(__name__)


class PermissionRecordMissingError(RelationshipServiceError):
    """Active relationship without a permission row."""

    pass


def _owned_active_relationship(
    db: Session, relationship_id: UUID, client_id: UUID
) -> MentorClientRelationship:
    relationship = get_relationship(db, relationship_id)
    if relationship.client_id != client_id:
        raise NotRelationshipPartyError("Only the client can change data sharing")
    if relationship.status != RelationshipStatus.ACTIVE.value:
        raise RelationshipNotActiveError("Relationship is not active")
    return relationship


def get_permission(db: Session, relationship_id: UUID) -> ClientDataAccessPermission | None:
    return db.execute(
        select(ClientDataAccessPermission).where(
            ClientDataAccessPermission.relationship_id == relationship_id
        )
    ).scalar_one_or_none()


def _require_permission(db: Session, relationship_id: UUID) -> ClientDataAccessPermission:
    permission = get_permission(db, relationship_id)
    if permission is None:
        raise PermissionRecordMissingError("No permission record for this relationship")
    return permission


def update_permissions(
    db: Session,
    relationship_id: UUID,
    client_id: UUID,
    data: PermissionUpdate,
) -> ClientDataAccessPermission:
    """Replace all five category flags."""
    _owned_active_relationship(db, relationship_id, client_id)
    permission = _require_permission(db, relationship_id)

    changed = []
    for category, field in CATEGORY_PERMISSION_FIELDS.items():
        new_value = getattr(data, field)
        if getattr(permission, field) != new_value:
            setattr(permission, field, new_value)
            changed.append(category.value)

    db.commit()
    db.refresh(permission)

    if changed:
        logger.info(
            "Data sharing changed: %s",
            ", ".join(changed),
            extra=build_log_context(
                client_id=str(client_id),
                relationship_id=str(relationship_id),
            ),
        )
    return permission


def set_sharing_active(
    db: Session,
    relationship_id: UUID,
    client_id: UUID,
    is_active: bool,
) -> ClientDataAccessPermission:
    """Pause or resume all sharing without touching the category flags."""
    _owned_active_relationship(db, relationship_id, client_id)
    permission = _require_permission(db, relationship_id)
    permission.is_active = is_active
    db.commit()
    db.refresh(permission)

    logger.info(
        "Data sharing %s",
        "resumed" if is_active else "paused",
        extra=build_log_context(
            client_id=str(client_id),
            relationship_id=str(relationship_id),
        ),
    )
    return permission
