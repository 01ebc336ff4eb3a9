"""Mentor-client relationship and data access enums."""

from enum import Enum


class RelationshipStatus(str, Enum):
    """
    Lifecycle of a mentor-client relationship.

        pending → active (client accepts)
        pending/active → terminated (either party)

    TERMINATED is final.
    """

    PENDING = "pending"
    ACTIVE = "active"
    TERMINATED = "terminated"


class DataCategory(str, Enum):
    """Client data categories a mentor can be granted access to."""

    GOALS = "goals"
    TASKS = "tasks"
    LOGS = "logs"
    REFLECTIONS = "reflections"
    AI_REPORTS = "ai_reports"


class AccessOutcome(str, Enum):
    """Result of an access gate evaluation."""

    ALLOWED = "allowed"
    DENIED = "denied"


class AccessDenialReason(str, Enum):
    """Why the access gate denied a category read."""

    NO_ACTIVE_RELATIONSHIP = "no active relationship"
    NO_PERMISSION_RECORD = "no permission record"
    SHARING_PAUSED = "sharing paused"
    CATEGORY_NOT_SHARED = "category not shared"


class ViewAction(str, Enum):
    """What the mentor did with the data (audit trail)."""

    VIEW = "view"
