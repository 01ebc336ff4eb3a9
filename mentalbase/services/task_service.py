"""Task service - creation, completion toggling and today's ordered list."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.core.config import settings
from mentalbase.core.policies import PRIORITY_RANK
from mentalbase.db.base import utcnow
from mentalbase.db.enums import TaskStatus
from mentalbase.db.models import Goal, Task
from mentalbase.schemas.task import TaskCreate, TaskRead, TaskWithGoal
from mentalbase.services.record_service import RecordNotFoundError

logger = logging.getLogger(__name__)


def today_window(now: datetime | None = None, tz_name: str | None = None) -> tuple[datetime, datetime]:
    """[start of today, start of tomorrow) in the configured zone, as UTC."""
    tz = ZoneInfo(tz_name or settings.DEFAULT_TIMEZONE)
    local_now = (now or utcnow()).astimezone(tz)
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start.astimezone(timezone.utc), (start + timedelta(hours=24)).astimezone(timezone.utc)


def task_sort_key(task) -> tuple:
    """
    Priority (high first), then scheduled time ascending with timed tasks
    ahead of untimed ones, then creation time.
    """
    return (
        PRIORITY_RANK.get(task.priority, len(PRIORITY_RANK)),
        0 if task.scheduled_time else 1,
        task.scheduled_time or "",
        task.created_at,
    )


def order_tasks(tasks: list) -> list:
    return sorted(tasks, key=task_sort_key)


def goal_titles(db: Session, goal_ids: set[UUID]) -> dict[UUID, str]:
    """Titles of the goals that still exist. Missing ids are simply absent."""
    if not goal_ids:
        return {}
    rows = db.execute(select(Goal.id, Goal.title).where(Goal.id.in_(goal_ids))).all()
    return {row.id: row.title for row in rows}


def attach_goal_names(db: Session, tasks: list[Task]) -> list[TaskWithGoal]:
    titles = goal_titles(db, {t.goal_id for t in tasks if t.goal_id})
    return [
        TaskWithGoal(
            **TaskRead.model_validate(task).model_dump(),
            goal_name=titles.get(task.goal_id) if task.goal_id else None,
        )
        for task in tasks
    ]


def list_tasks(
    db: Session,
    user_id: UUID,
    goal_id: UUID | None = None,
    status: TaskStatus | None = None,
) -> list[Task]:
    query = select(Task).where(Task.user_id == user_id)
    if goal_id:
        query = query.where(Task.goal_id == goal_id)
    if status:
        query = query.where(Task.status == status.value)
    return list(db.execute(query.order_by(Task.created_at.desc())).scalars().all())


def list_tasks_with_goal(db: Session, user_id: UUID) -> list[TaskWithGoal]:
    return attach_goal_names(db, list_tasks(db, user_id))


def list_today_tasks(db: Session, user_id: UUID, now: datetime | None = None) -> list[TaskWithGoal]:
    """Tasks due today, deterministically ordered, each with its goal name."""
    start, end = today_window(now)
    tasks = db.execute(
        select(Task).where(
            Task.user_id == user_id,
            Task.due_date >= start,
            Task.due_date < end,
        )
    ).scalars().all()
    return attach_goal_names(db, order_tasks(list(tasks)))


def get_task(db: Session, user_id: UUID, task_id: UUID) -> Task:
    task = db.execute(
        select(Task).where(Task.id == task_id, Task.user_id == user_id)
    ).scalar_one_or_none()
    if not task:
        raise RecordNotFoundError("Task not found")
    return task


def create_task(db: Session, user_id: UUID, data: TaskCreate) -> Task:
    """Create a task. A goal_id must name one of the user's goals."""
    if data.goal_id:
        goal = db.execute(
            select(Goal.id).where(Goal.id == data.goal_id, Goal.user_id == user_id)
        ).scalar_one_or_none()
        if goal is None:
            raise RecordNotFoundError("Goal not found")

    task = Task(
        user_id=user_id,
        goal_id=data.goal_id,
        title=data.title.strip(),
        description=data.description,
        priority=data.priority.value,
        due_date=data.due_date,
        scheduled_time=data.scheduled_time,
        estimated_minutes=data.estimated_minutes,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def toggle_task(db: Session, user_id: UUID, task_id: UUID) -> Task:
    """Flip pending <-> completed, keeping completed_at in step."""
    task = get_task(db, user_id, task_id)
    if task.status == TaskStatus.COMPLETED.value:
        task.status = TaskStatus.PENDING.value
        task.completed_at = None
    else:
        task.status = TaskStatus.COMPLETED.value
        task.completed_at = utcnow()
    db.commit()
    db.refresh(task)
    logger.info("Task %s toggled to %s", task.id, task.status)
    return task
