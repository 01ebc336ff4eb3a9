"""Centralized business policy constants.

These values are consumed by existing clients (dashboard widgets, mentor UI)
and must stay output-compatible. Change them here, never inline.
"""

from dataclasses import dataclass
from types import MappingProxyType

from mentalbase.db.enums import ActivityType, DataCategory, TaskPriority


# =============================================================================
# Data sharing
# =============================================================================

# Grants written when a relationship first becomes active (full disclosure).
# The client may change them afterwards.
DEFAULT_CATEGORY_GRANTS: MappingProxyType[DataCategory, bool] = MappingProxyType(
    {
        DataCategory.GOALS: True,
        DataCategory.TASKS: True,
        DataCategory.LOGS: True,
        DataCategory.REFLECTIONS: True,
        DataCategory.AI_REPORTS: True,
    }
)

# Permission column backing each category
CATEGORY_PERMISSION_FIELDS: MappingProxyType[DataCategory, str] = MappingProxyType(
    {
        DataCategory.GOALS: "allow_goals",
        DataCategory.TASKS: "allow_tasks",
        DataCategory.LOGS: "allow_logs",
        DataCategory.REFLECTIONS: "allow_reflections",
        DataCategory.AI_REPORTS: "allow_ai_reports",
    }
)


# =============================================================================
# Compass (PLAN / DO / CHECK / ACTION)
# =============================================================================

PERCENT_CAP = 100
PLAN_POINTS_PER_ACTIVE_GOAL = 20  # 5 active goals = 100%
CHECK_POINTS_PER_LOG = 10  # 10 logs = 100%


# =============================================================================
# Task ordering
# =============================================================================

PRIORITY_RANK: MappingProxyType[str, int] = MappingProxyType(
    {
        TaskPriority.HIGH.value: 0,
        TaskPriority.MEDIUM.value: 1,
        TaskPriority.LOW.value: 2,
    }
)


# =============================================================================
# Activity feed
# =============================================================================

@dataclass(frozen=True)
class ActivityStyle:
    """Presentation tuple attached to every activity event."""

    icon: str
    icon_color: str
    background_color: str


ACTIVITY_STYLES: MappingProxyType[ActivityType, ActivityStyle] = MappingProxyType(
    {
        ActivityType.TASK_COMPLETED: ActivityStyle("check_circle", "var(--success)", "#e6f9f0"),
        ActivityType.LOG_RECORDED: ActivityStyle("edit", "var(--warning)", "#fff5e6"),
        ActivityType.TASK_CREATED: ActivityStyle("assignment", "var(--primary)", "#e6f2ff"),
        ActivityType.IMPROVEMENT_SUGGESTED: ActivityStyle(
            "lightbulb", "var(--secondary)", "#f3e6ff"
        ),
        ActivityType.GOAL_CREATED: ActivityStyle("flag", "var(--primary)", "#e6f2ff"),
        ActivityType.REFLECTION_CREATED: ActivityStyle("insights", "var(--warning)", "#fff5e6"),
    }
)

# Log excerpts in the feed are cut to this many characters
LOG_EXCERPT_LENGTH = 30
