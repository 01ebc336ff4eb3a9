"""Pydantic schemas for API request/response models."""

from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.dashboard import CompassSummary, DashboardResponse
from mentalbase.schemas.goal import GoalCreate, GoalRead, GoalUpdate, GoalWithProgress
from mentalbase.schemas.permission import PermissionRead, PermissionUpdate
from mentalbase.schemas.relationship import InviteCreate, RelationshipRead
from mentalbase.schemas.task import TaskCreate, TaskRead, TaskWithGoal

__all__ = [
    "CompassSummary",
    "DashboardResponse",
    "GoalCreate",
    "GoalRead",
    "GoalUpdate",
    "GoalWithProgress",
    "InviteCreate",
    "PermissionRead",
    "PermissionUpdate",
    "RelationshipRead",
    "TaskCreate",
    "TaskRead",
    "TaskWithGoal",
    "UserSession",
]
