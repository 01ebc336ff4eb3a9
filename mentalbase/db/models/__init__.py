"""SQLAlchemy ORM models."""

from mentalbase.db.models.audit import ClientDataViewLog
from mentalbase.db.models.auth import User
from mentalbase.db.models.notes import MentorNote
from mentalbase.db.models.records import (
    ActionPlan,
    AIAnalysisReport,
    Goal,
    Log,
    Reflection,
    Task,
)
from mentalbase.db.models.relationships import (
    ClientDataAccessPermission,
    MentorClientRelationship,
)
from mentalbase.db.models.reports import ClientProgressReport

__all__ = [
    "AIAnalysisReport",
    "ActionPlan",
    "ClientDataAccessPermission",
    "ClientDataViewLog",
    "ClientProgressReport",
    "Goal",
    "Log",
    "MentorClientRelationship",
    "MentorNote",
    "Reflection",
    "Task",
    "User",
]
