"""
Mentor access gate for client data categories.

Single choke point for every mentor read of client-owned data. Each call
re-reads the relationship and permission rows; nothing is cached between
requests, so a client's toggle applies to the very next read.

Evaluation order:
1. Relationship absent or not active  -> no active relationship
2. Permission record absent           -> no permission record
3. Permission master switch off       -> sharing paused
4. Category flag off                  -> category not shared

Every denial is written to the audit trail here. Successful reads are
audited by the caller once the record count is known (see record_read).
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.core.policies import CATEGORY_PERMISSION_FIELDS
from mentalbase.db.enums import (
    AccessDenialReason,
    AccessOutcome,
    DataCategory,
    RelationshipStatus,
)
from mentalbase.db.models import ClientDataAccessPermission, MentorClientRelationship
from mentalbase.services import audit_service


# =============================================================================
# Exceptions
# =============================================================================


class DataAccessError(Exception):
    """Base exception for access gate denials."""

    def __init__(self, reason: AccessDenialReason, category: DataCategory | None = None):
        super().__init__(reason.value)
        self.reason = reason
        self.category = category


class NoActiveRelationshipError(DataAccessError):
    """Relationship absent, pending or terminated."""

    def __init__(self, category: DataCategory | None = None):
        super().__init__(AccessDenialReason.NO_ACTIVE_RELATIONSHIP, category)


class PermissionDeniedError(DataAccessError):
    """Relationship is active but the client has not shared the category."""

    pass


# =============================================================================
# Pure evaluation
# =============================================================================


@dataclass(frozen=True)
class PermissionFlags:
    """Immutable snapshot of a ClientDataAccessPermission row."""

    allow_goals: bool
    allow_tasks: bool
    allow_logs: bool
    allow_reflections: bool
    allow_ai_reports: bool
    is_active: bool

    @classmethod
    def from_model(cls, permission: ClientDataAccessPermission) -> "PermissionFlags":
        return cls(
            allow_goals=permission.allow_goals,
            allow_tasks=permission.allow_tasks,
            allow_logs=permission.allow_logs,
            allow_reflections=permission.allow_reflections,
            allow_ai_reports=permission.allow_ai_reports,
            is_active=permission.is_active,
        )

    def shares(self, category: DataCategory) -> bool:
        """Individual category flag, ignoring the master switch."""
        return bool(getattr(self, CATEGORY_PERMISSION_FIELDS[category]))


@dataclass(frozen=True)
class AccessDecision:
    category: DataCategory
    reason: AccessDenialReason | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None

    @property
    def outcome(self) -> AccessOutcome:
        return AccessOutcome.ALLOWED if self.allowed else AccessOutcome.DENIED


def evaluate(
    relationship_status: str | None,
    flags: PermissionFlags | None,
    category: DataCategory,
) -> AccessDecision:
    """
    Decide access for one category.

    relationship_status is None when no relationship exists. flags is None
    when no permission record exists, which always denies.
    """
    if relationship_status != RelationshipStatus.ACTIVE.value:
        return AccessDecision(category, AccessDenialReason.NO_ACTIVE_RELATIONSHIP)
    if flags is None:
        return AccessDecision(category, AccessDenialReason.NO_PERMISSION_RECORD)
    if not flags.is_active:
        return AccessDecision(category, AccessDenialReason.SHARING_PAUSED)
    if not flags.shares(category):
        return AccessDecision(category, AccessDenialReason.CATEGORY_NOT_SHARED)
    return AccessDecision(category)


# =============================================================================
# Store-backed gate
# =============================================================================


@dataclass(frozen=True)
class GateContext:
    """What the gate loaded for one (mentor, client) pair."""

    mentor_id: UUID
    client_id: UUID | None
    relationship_id: UUID | None
    relationship_status: str | None
    flags: PermissionFlags | None

    def evaluate(self, category: DataCategory) -> AccessDecision:
        return evaluate(self.relationship_status, self.flags, category)


def _load_permission(db: Session, relationship_id: UUID) -> PermissionFlags | None:
    permission = db.execute(
        select(ClientDataAccessPermission)
        .where(ClientDataAccessPermission.relationship_id == relationship_id)
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    return PermissionFlags.from_model(permission) if permission else None


def _context_for(
    db: Session,
    mentor_id: UUID,
    relationship: MentorClientRelationship | None,
    client_id: UUID | None = None,
) -> GateContext:
    if relationship is None:
        return GateContext(mentor_id, client_id, None, None, None)
    return GateContext(
        mentor_id=mentor_id,
        client_id=relationship.client_id,
        relationship_id=relationship.id,
        relationship_status=relationship.status,
        flags=_load_permission(db, relationship.id),
    )


def load_context(db: Session, relationship_id: UUID, mentor_id: UUID) -> GateContext:
    """
    Load gate state by relationship id.

    A relationship belonging to a different mentor is treated as absent.
    """
    relationship = db.execute(
        select(MentorClientRelationship)
        .where(MentorClientRelationship.id == relationship_id)
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if relationship is not None and relationship.mentor_id != mentor_id:
        relationship = None
    return _context_for(db, mentor_id, relationship)


def load_context_for_pair(db: Session, mentor_id: UUID, client_id: UUID) -> GateContext:
    """Load gate state for a (mentor, client) pair."""
    relationship = db.execute(
        select(MentorClientRelationship)
        .where(
            MentorClientRelationship.mentor_id == mentor_id,
            MentorClientRelationship.client_id == client_id,
        )
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    return _context_for(db, mentor_id, relationship, client_id=client_id)


def audit_decision(
    context: GateContext,
    decision: AccessDecision,
    record_count: int | None = None,
) -> None:
    """Write the audit row for a gate outcome (best-effort)."""
    audit_service.record_access(
        mentor_id=context.mentor_id,
        client_id=context.client_id,
        relationship_id=context.relationship_id,
        category=decision.category,
        outcome=decision.outcome,
        reason=decision.reason.value if decision.reason else None,
        record_count=record_count,
    )


def decide(context: GateContext, category: DataCategory) -> AccessDecision:
    """Evaluate one category and audit it when denied."""
    decision = context.evaluate(category)
    if not decision.allowed:
        audit_decision(context, decision)
    return decision


def check_access(
    db: Session,
    relationship_id: UUID,
    category: DataCategory,
    mentor_id: UUID,
) -> AccessDecision:
    """Allowed or Denied(reason) for one category of one relationship."""
    return decide(load_context(db, relationship_id, mentor_id), category)


def require_access(context: GateContext, category: DataCategory) -> AccessDecision:
    """
    Like decide(), but raises on denial.

    Raises:
        NoActiveRelationshipError: relationship missing or not active
        PermissionDeniedError: any other denial
    """
    decision = decide(context, category)
    if decision.reason == AccessDenialReason.NO_ACTIVE_RELATIONSHIP:
        raise NoActiveRelationshipError(category)
    if decision.reason is not None:
        raise PermissionDeniedError(decision.reason, category)
    return decision


def record_read(context: GateContext, category: DataCategory, record_count: int) -> None:
    """Audit a successful category read with the number of records returned."""
    audit_decision(context, AccessDecision(category), record_count=record_count)
