"""Recent activity feed built from client records at read time.

Events are never stored. Each source contributes at most
ACTIVITY_FEED_PER_SOURCE_CAP of its newest rows; the merged set is sorted
newest first (stable, so ties keep source order) and cut to the limit.
"""

import html
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.core.config import settings
from mentalbase.core.policies import ACTIVITY_STYLES, LOG_EXCERPT_LENGTH
from mentalbase.db.enums import ActivityType, TaskStatus
from mentalbase.db.models import ActionPlan, Goal, Log, Reflection, Task
from mentalbase.schemas.activity import ActivityRead


class InvalidFeedLimitError(ValueError):
    """Requested limit outside 1..ACTIVITY_FEED_MAX_LIMIT."""

    pass


@dataclass(frozen=True)
class ActivityEvent:
    """Tagged feed entry prior to styling."""

    type: ActivityType
    source_id: UUID
    timestamp: datetime
    description: str

    @property
    def id(self) -> str:
        return f"{self.type.value}_{self.source_id}"

    def to_read(self) -> ActivityRead:
        style = ACTIVITY_STYLES[self.type]
        return ActivityRead(
            id=self.id,
            type=self.type,
            description=self.description,
            timestamp=self.timestamp,
            icon=style.icon,
            icon_color=style.icon_color,
            background_color=style.background_color,
        )


def _aware(value: datetime) -> datetime:
    # naive values are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _describe(label: str, text: str) -> str:
    return f"<strong>{label}:</strong> {html.escape(text)}"


def excerpt(content: str, length: int = LOG_EXCERPT_LENGTH) -> str:
    if len(content) <= length:
        return content
    return content[:length] + "..."


# =============================================================================
# Record -> event mapping
# =============================================================================


def task_completed_event(task: Task) -> ActivityEvent:
    return ActivityEvent(
        ActivityType.TASK_COMPLETED,
        task.id,
        _aware(task.completed_at or task.updated_at),
        _describe("Task completed", task.title),
    )


def task_created_event(task: Task) -> ActivityEvent:
    return ActivityEvent(
        ActivityType.TASK_CREATED,
        task.id,
        _aware(task.created_at),
        _describe("Task created", task.title),
    )


def goal_created_event(goal: Goal) -> ActivityEvent:
    return ActivityEvent(
        ActivityType.GOAL_CREATED,
        goal.id,
        _aware(goal.created_at),
        _describe("Goal created", goal.title),
    )


def reflection_created_event(reflection: Reflection) -> ActivityEvent:
    return ActivityEvent(
        ActivityType.REFLECTION_CREATED,
        reflection.id,
        _aware(reflection.created_at),
        _describe("Reflection", f"{reflection.period.capitalize()} reflection recorded"),
    )


def improvement_suggested_event(plan: ActionPlan) -> ActivityEvent:
    return ActivityEvent(
        ActivityType.IMPROVEMENT_SUGGESTED,
        plan.id,
        _aware(plan.created_at),
        _describe("Improvement suggestion", plan.title),
    )


def log_recorded_event(log: Log) -> ActivityEvent:
    return ActivityEvent(
        ActivityType.LOG_RECORDED,
        log.id,
        _aware(log.created_at),
        _describe("Log recorded", excerpt(log.content)),
    )


# =============================================================================
# Merge
# =============================================================================


def merge_events(sources: Iterable[Iterable[ActivityEvent]], limit: int) -> list[ActivityEvent]:
    """Concatenate sources in order, sort newest first, truncate."""
    merged = [event for source in sources for event in source]
    merged.sort(key=lambda event: event.timestamp, reverse=True)
    return merged[:limit]


def validate_limit(limit: int | None) -> int:
    if limit is None:
        return settings.ACTIVITY_FEED_DEFAULT_LIMIT
    if limit < 1 or limit > settings.ACTIVITY_FEED_MAX_LIMIT:
        raise InvalidFeedLimitError(
            f"limit must be between 1 and {settings.ACTIVITY_FEED_MAX_LIMIT}"
        )
    return limit


def _recent(db: Session, query, cap: int) -> list:
    return list(db.execute(query.limit(cap)).scalars().all())


def collect_sources(
    db: Session, user_id: UUID, per_source_cap: int | None = None
) -> list[list[ActivityEvent]]:
    """Newest rows of each source mapped to events, in fixed source order."""
    cap = per_source_cap or settings.ACTIVITY_FEED_PER_SOURCE_CAP
    sources: list[tuple[object, Callable[[object], ActivityEvent]]] = [
        (
            select(Task)
            .where(
                Task.user_id == user_id,
                Task.status == TaskStatus.COMPLETED.value,
                Task.completed_at.is_not(None),
            )
            .order_by(Task.completed_at.desc()),
            task_completed_event,
        ),
        (
            select(Task).where(Task.user_id == user_id).order_by(Task.created_at.desc()),
            task_created_event,
        ),
        (
            select(Goal).where(Goal.user_id == user_id).order_by(Goal.created_at.desc()),
            goal_created_event,
        ),
        (
            select(Reflection)
            .where(Reflection.user_id == user_id)
            .order_by(Reflection.created_at.desc()),
            reflection_created_event,
        ),
        (
            select(ActionPlan)
            .where(ActionPlan.user_id == user_id)
            .order_by(ActionPlan.created_at.desc()),
            improvement_suggested_event,
        ),
        (
            select(Log).where(Log.user_id == user_id).order_by(Log.created_at.desc()),
            log_recorded_event,
        ),
    ]
    return [[to_event(row) for row in _recent(db, query, cap)] for query, to_event in sources]


def build_feed(db: Session, user_id: UUID, limit: int | None = None) -> list[ActivityRead]:
    """
    Point-in-time activity feed for a user.

    Raises:
        InvalidFeedLimitError: limit out of range
    """
    limit = validate_limit(limit)
    events = merge_events(collect_sources(db, user_id), limit)
    return [event.to_read() for event in events]
