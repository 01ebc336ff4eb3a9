"""Goal service - CRUD plus per-goal task progress."""

import logging
from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentalbase.db.enums import GoalStatus
from mentalbase.db.models import Goal, Task
from mentalbase.schemas.goal import GoalCreate, GoalRead, GoalUpdate, GoalWithProgress
from mentalbase.services import progress_service
from mentalbase.services.record_service import RecordNotFoundError

logger = logging.getLogger(__name__)


def list_goals(
    db: Session,
    user_id: UUID,
    include_archived: bool = False,
) -> list[Goal]:
    query = select(Goal).where(Goal.user_id == user_id)
    if not include_archived:
        query = query.where(Goal.status != GoalStatus.ARCHIVED.value)
    return list(db.execute(query.order_by(Goal.created_at.desc())).scalars().all())


def with_progress(db: Session, goals: list[Goal]) -> list[GoalWithProgress]:
    """Attach completed/total/percentage from each goal's tasks."""
    statuses: dict[UUID, list[str]] = defaultdict(list)
    if goals:
        rows = db.execute(
            select(Task.goal_id, Task.status).where(Task.goal_id.in_([g.id for g in goals]))
        ).all()
        for row in rows:
            statuses[row.goal_id].append(row.status)

    result = []
    for goal in goals:
        progress = progress_service.goal_progress(statuses[goal.id])
        result.append(
            GoalWithProgress(
                **GoalRead.model_validate(goal).model_dump(),
                completed_tasks=progress.completed_tasks,
                total_tasks=progress.total_tasks,
                progress_percentage=progress.progress_percentage,
            )
        )
    return result


def list_goals_with_progress(db: Session, user_id: UUID) -> list[GoalWithProgress]:
    return with_progress(db, list_goals(db, user_id))


def get_goal(db: Session, user_id: UUID, goal_id: UUID) -> Goal:
    goal = db.execute(
        select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    ).scalar_one_or_none()
    if not goal:
        raise RecordNotFoundError("Goal not found")
    return goal


def create_goal(db: Session, user_id: UUID, data: GoalCreate) -> Goal:
    goal = Goal(
        user_id=user_id,
        title=data.title.strip(),
        description=data.description,
        deadline=data.deadline,
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


def update_goal(db: Session, user_id: UUID, goal_id: UUID, data: GoalUpdate) -> Goal:
    goal = get_goal(db, user_id, goal_id)
    updates = data.model_dump(exclude_unset=True)
    if "title" in updates and updates["title"] is not None:
        goal.title = updates["title"].strip()
    if "description" in updates:
        goal.description = updates["description"]
    if "deadline" in updates:
        goal.deadline = updates["deadline"]
    if updates.get("status") is not None:
        goal.status = GoalStatus(updates["status"]).value
    db.commit()
    db.refresh(goal)
    return goal


def delete_goal(db: Session, user_id: UUID, goal_id: UUID) -> None:
    """
    Delete a goal. Its tasks are kept; their goal_id now resolves to no goal.
    """
    goal = get_goal(db, user_id, goal_id)
    db.delete(goal)
    db.commit()
    logger.info("Goal %s deleted", goal_id)
