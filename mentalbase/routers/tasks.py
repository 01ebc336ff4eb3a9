"""Task endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mentalbase.core.deps import get_current_session, get_db, require_csrf_header
from mentalbase.db.enums import TaskStatus
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.task import TaskCreate, TaskRead, TaskWithGoal
from mentalbase.services import task_service
from mentalbase.services.record_service import RecordNotFoundError

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskWithGoal])
def list_tasks(
    goal_id: UUID | None = None,
    status_filter: TaskStatus | None = None,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    tasks = task_service.list_tasks(db, session.user_id, goal_id=goal_id, status=status_filter)
    return task_service.attach_goal_names(db, tasks)


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_task(
    data: TaskCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    try:
        return task_service.create_task(db, session.user_id, data)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/{task_id}/toggle",
    response_model=TaskRead,
    dependencies=[Depends(require_csrf_header)],
)
def toggle_task(
    task_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Mark complete, or back to pending if already complete."""
    try:
        return task_service.toggle_task(db, session.user_id, task_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
