"""Enum definitions for application constants."""

from mentalbase.db.enums.activity import ActivityType
from mentalbase.db.enums.records import (
    ActionPlanStatus,
    Emotion,
    GoalStatus,
    LogType,
    MentalState,
    NoteType,
    ReflectionPeriod,
    ReportPeriod,
    StatsPeriod,
    TaskPriority,
    TaskStatus,
)
from mentalbase.db.enums.relationships import (
    AccessDenialReason,
    AccessOutcome,
    DataCategory,
    RelationshipStatus,
    ViewAction,
)

__all__ = [
    "AccessDenialReason",
    "AccessOutcome",
    "ActionPlanStatus",
    "ActivityType",
    "DataCategory",
    "Emotion",
    "GoalStatus",
    "LogType",
    "MentalState",
    "NoteType",
    "ReflectionPeriod",
    "RelationshipStatus",
    "ReportPeriod",
    "StatsPeriod",
    "TaskPriority",
    "TaskStatus",
    "ViewAction",
]
