"""Enums for client-owned records (goals, tasks, logs, reflections, plans)."""

from enum import Enum


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority. Sort rank lives in core.policies.PRIORITY_RANK."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class LogType(str, Enum):
    DAILY = "daily"
    REFLECTION = "reflection"
    INSIGHT = "insight"


class Emotion(str, Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANXIOUS = "anxious"
    EXCITED = "excited"
    TIRED = "tired"


class MentalState(str, Enum):
    ENERGETIC = "energetic"
    TIRED = "tired"
    FOCUSED = "focused"
    DISTRACTED = "distracted"
    CALM = "calm"
    STRESSED = "stressed"


class ReflectionPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ActionPlanStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class NoteType(str, Enum):
    """Mentor note classification."""

    GENERAL = "general"
    SESSION = "session"
    GOAL_REVIEW = "goal_review"
    CONCERN = "concern"


class ReportPeriod(str, Enum):
    """Span a mentor progress report covers."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class StatsPeriod(str, Enum):
    """
    Window for progress statistics. Weeks start on Sunday.

    CUSTOM requires explicit start and end dates.
    """

    TODAY = "today"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    CUSTOM = "custom"
