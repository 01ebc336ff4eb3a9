"""Goal endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mentalbase.core.deps import get_current_session, get_db, require_csrf_header
from mentalbase.schemas.auth import UserSession
from mentalbase.schemas.goal import GoalCreate, GoalRead, GoalUpdate, GoalWithProgress
from mentalbase.services import goal_service
from mentalbase.services.record_service import RecordNotFoundError

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=list[GoalWithProgress])
def list_goals(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Non-archived goals with task progress."""
    return goal_service.list_goals_with_progress(db, session.user_id)


@router.post(
    "",
    response_model=GoalRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_goal(
    data: GoalCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return goal_service.create_goal(db, session.user_id, data)


@router.get("/{goal_id}", response_model=GoalWithProgress)
def get_goal(
    goal_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    try:
        goal = goal_service.get_goal(db, session.user_id, goal_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal_service.with_progress(db, [goal])[0]


@router.patch(
    "/{goal_id}",
    response_model=GoalRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_goal(
    goal_id: UUID,
    data: GoalUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    try:
        return goal_service.update_goal(db, session.user_id, goal_id, data)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")


@router.delete(
    "/{goal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_goal(
    goal_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Delete a goal. Linked tasks remain and show no goal."""
    try:
        goal_service.delete_goal(db, session.user_id, goal_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
