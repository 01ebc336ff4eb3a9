"""Mentor-client relationship lifecycle.

    invite:    (none)            -> pending     (mentor)
    accept:    pending           -> active      (client)
    terminate: pending | active  -> terminated  (either party)

Acceptance creates the permission record from DEFAULT_CATEGORY_GRANTS;
termination switches it off. A terminated pair is never reopened.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from mentalbase.core.policies import CATEGORY_PERMISSION_FIELDS, DEFAULT_CATEGORY_GRANTS
from mentalbase.core.structured_logging import build_log_context
from mentalbase.db.base import utcnow
from mentalbase.db.enums import RelationshipStatus
from mentalbase.db.models import (
    ClientDataAccessPermission,
    MentorClientRelationship,
    User,
)

logger = logging.getLogger(__name__)


class RelationshipServiceError(Exception):
    """Base exception for relationship service errors."""

    pass


class RelationshipNotFoundError(RelationshipServiceError):
    """Relationship not found."""

    pass


class RelationshipNotActiveError(RelationshipServiceError):
    """Operation needs an active relationship."""

    pass


class NotRelationshipPartyError(RelationshipServiceError):
    """Caller is not the mentor/client this operation belongs to."""

    pass


class InvalidRelationshipTransitionError(RelationshipServiceError):
    """Status change not allowed from the current status."""

    pass


class DuplicateRelationshipError(RelationshipServiceError):
    """A relationship already exists for this mentor/client pair."""

    pass


class InviteeNotFoundError(RelationshipServiceError):
    """No active user with the invited email."""

    pass


class NotAMentorError(RelationshipServiceError):
    """Only mentor accounts can invite clients."""

    pass


# =============================================================================
# Lookups
# =============================================================================


def get_relationship(db: Session, relationship_id: UUID) -> MentorClientRelationship:
    relationship = db.get(MentorClientRelationship, relationship_id)
    if not relationship:
        raise RelationshipNotFoundError("Relationship not found")
    return relationship


def get_active_relationship(
    db: Session, mentor_id: UUID, client_id: UUID
) -> MentorClientRelationship | None:
    return db.execute(
        select(MentorClientRelationship).where(
            MentorClientRelationship.mentor_id == mentor_id,
            MentorClientRelationship.client_id == client_id,
            MentorClientRelationship.status == RelationshipStatus.ACTIVE.value,
        )
    ).scalar_one_or_none()


def require_active_relationship(
    db: Session, mentor_id: UUID, client_id: UUID
) -> MentorClientRelationship:
    relationship = get_active_relationship(db, mentor_id, client_id)
    if relationship is None:
        raise RelationshipNotActiveError("No active relationship with this client")
    return relationship


def list_mentor_relationships(db: Session, mentor_id: UUID) -> list[MentorClientRelationship]:
    """All of a mentor's relationships, newest first."""
    return list(
        db.execute(
            select(MentorClientRelationship)
            .options(
                joinedload(MentorClientRelationship.client),
                joinedload(MentorClientRelationship.permission),
            )
            .where(MentorClientRelationship.mentor_id == mentor_id)
            .order_by(MentorClientRelationship.created_at.desc())
        )
        .scalars()
        .all()
    )


def list_client_relationships(db: Session, client_id: UUID) -> list[MentorClientRelationship]:
    """A client's pending and active relationships, newest first."""
    return list(
        db.execute(
            select(MentorClientRelationship)
            .options(
                joinedload(MentorClientRelationship.mentor),
                joinedload(MentorClientRelationship.permission),
            )
            .where(
                MentorClientRelationship.client_id == client_id,
                MentorClientRelationship.status.in_(
                    [RelationshipStatus.PENDING.value, RelationshipStatus.ACTIVE.value]
                ),
            )
            .order_by(MentorClientRelationship.created_at.desc())
        )
        .scalars()
        .all()
    )


# =============================================================================
# Lifecycle
# =============================================================================


def invite(db: Session, mentor: User, client_email: str) -> MentorClientRelationship:
    """Create a pending relationship from a mentor to an existing user."""
    if not mentor.is_mentor:
        raise NotAMentorError("Only mentors can invite clients")

    client = db.execute(
        select(User).where(
            func.lower(User.email) == client_email.strip().lower(),
            User.is_active.is_(True),
        )
    ).scalar_one_or_none()
    if not client:
        raise InviteeNotFoundError("No user with that email")
    if client.id == mentor.id:
        raise InvalidRelationshipTransitionError("Cannot invite yourself")

    existing = db.execute(
        select(MentorClientRelationship).where(
            MentorClientRelationship.mentor_id == mentor.id,
            MentorClientRelationship.client_id == client.id,
        )
    ).scalar_one_or_none()
    if existing:
        raise DuplicateRelationshipError(
            f"Relationship already exists with status '{existing.status}'"
        )

    relationship = MentorClientRelationship(
        mentor_id=mentor.id,
        client_id=client.id,
        status=RelationshipStatus.PENDING.value,
        invited_by=mentor.id,
    )
    try:
        db.add(relationship)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateRelationshipError("Relationship already exists")
    db.refresh(relationship)

    logger.info(
        "Relationship invited",
        extra=build_log_context(
            mentor_id=str(mentor.id),
            client_id=str(client.id),
            relationship_id=str(relationship.id),
        ),
    )
    return relationship


def accept(db: Session, relationship_id: UUID, client_id: UUID) -> MentorClientRelationship:
    """Client approves a pending invitation; sharing starts at policy defaults."""
    relationship = get_relationship(db, relationship_id)
    if relationship.client_id != client_id:
        raise NotRelationshipPartyError("Only the invited client can accept")
    if relationship.status != RelationshipStatus.PENDING.value:
        raise InvalidRelationshipTransitionError(
            f"Cannot accept a relationship with status '{relationship.status}'"
        )

    now = utcnow()
    relationship.status = RelationshipStatus.ACTIVE.value
    relationship.accepted_at = now

    permission = relationship.permission
    if permission is None:
        grants = {
            CATEGORY_PERMISSION_FIELDS[category]: allowed
            for category, allowed in DEFAULT_CATEGORY_GRANTS.items()
        }
        permission = ClientDataAccessPermission(
            relationship_id=relationship.id,
            client_id=relationship.client_id,
            is_active=True,
            **grants,
        )
        db.add(permission)
    else:
        permission.is_active = True

    db.commit()
    db.refresh(relationship)

    logger.info(
        "Relationship accepted",
        extra=build_log_context(
            mentor_id=str(relationship.mentor_id),
            client_id=str(relationship.client_id),
            relationship_id=str(relationship.id),
        ),
    )
    return relationship


def terminate(
    db: Session,
    relationship_id: UUID,
    actor_id: UUID,
    reason: str | None = None,
) -> MentorClientRelationship:
    """End a relationship. Every later gated read is denied."""
    relationship = get_relationship(db, relationship_id)
    if actor_id not in (relationship.mentor_id, relationship.client_id):
        raise NotRelationshipPartyError("Not a party to this relationship")
    if relationship.status == RelationshipStatus.TERMINATED.value:
        raise InvalidRelationshipTransitionError("Relationship is already terminated")

    relationship.status = RelationshipStatus.TERMINATED.value
    relationship.terminated_at = utcnow()
    relationship.termination_reason = reason.strip() if reason else None
    if relationship.permission is not None:
        relationship.permission.is_active = False

    db.commit()
    db.refresh(relationship)

    logger.info(
        "Relationship terminated",
        extra=build_log_context(
            user_id=str(actor_id),
            relationship_id=str(relationship.id),
        ),
    )
    return relationship
