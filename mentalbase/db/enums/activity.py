"""Activity feed enums."""

from enum import Enum


class ActivityType(str, Enum):
    """Synthetic activity events derived from client records at read time."""

    TASK_COMPLETED = "task_completed"
    TASK_CREATED = "task_created"
    GOAL_CREATED = "goal_created"
    REFLECTION_CREATED = "reflection_created"
    IMPROVEMENT_SUGGESTED = "improvement_suggested"
    LOG_RECORDED = "log_recorded"
