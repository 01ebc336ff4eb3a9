"""Service layer modules."""

# Import service modules (not individual functions) for cleaner access
from mentalbase.services import (
    audit_service,
    record_service,
    progress_service,
    activity_feed_service,
    task_service,
    goal_service,
    relationship_service,
    permission_service,
    note_service,
    mentor_view_service,
    dashboard_service,
    report_service,
)

__all__ = [
    "activity_feed_service",
    "audit_service",
    "dashboard_service",
    "goal_service",
    "mentor_view_service",
    "note_service",
    "permission_service",
    "progress_service",
    "record_service",
    "relationship_service",
    "report_service",
    "task_service",
]
