"""Progress math: goal completion, the compass summary and period statistics.

The compass has four independent axes (PLAN / DO / CHECK / ACTION). Each is
a separate proxy computed from its own raw count and clamped to 0-100; they
are not weighted against each other.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from mentalbase.core.config import settings
from mentalbase.core.policies import (
    CHECK_POINTS_PER_LOG,
    PERCENT_CAP,
    PLAN_POINTS_PER_ACTIVE_GOAL,
)
from mentalbase.db.base import utcnow
from mentalbase.db.enums import ActionPlanStatus, GoalStatus, StatsPeriod, TaskStatus
from mentalbase.db.models import ActionPlan, Goal, Log, Task
from mentalbase.schemas.dashboard import CompassSummary, ProgressStats


def percentage(part: int, whole: int) -> int:
    """
    Integer percentage rounded half-up (2/3 -> 67, 1/8 -> 13).

    Returns 0 when whole is 0.
    """
    if whole <= 0:
        return 0
    value = (Decimal(part) * 100 / Decimal(whole)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return max(0, min(int(value), PERCENT_CAP))


def points(count: int, per_item: int) -> int:
    """Linear score clamped to 0-100."""
    return max(0, min(count * per_item, PERCENT_CAP))


@dataclass(frozen=True)
class GoalProgress:
    completed_tasks: int
    total_tasks: int

    @property
    def progress_percentage(self) -> int:
        return percentage(self.completed_tasks, self.total_tasks)


def goal_progress(task_statuses: list[str]) -> GoalProgress:
    """Progress for one goal given the statuses of its tasks."""
    completed = sum(1 for s in task_statuses if s == TaskStatus.COMPLETED.value)
    return GoalProgress(completed_tasks=completed, total_tasks=len(task_statuses))


def compute_compass(
    *,
    active_goal_count: int,
    completed_task_count: int,
    total_task_count: int,
    log_count: int,
    completed_action_plan_count: int,
    total_action_plan_count: int,
) -> CompassSummary:
    return CompassSummary(
        plan_progress=points(active_goal_count, PLAN_POINTS_PER_ACTIVE_GOAL),
        do_progress=percentage(completed_task_count, total_task_count),
        check_progress=points(log_count, CHECK_POINTS_PER_LOG),
        action_progress=percentage(completed_action_plan_count, total_action_plan_count),
    )


def _count(db: Session, model, *conditions) -> int:
    query = select(func.count()).select_from(model).where(*conditions)
    return db.execute(query).scalar_one()


def get_compass_summary(db: Session, user_id: UUID) -> CompassSummary:
    """Load the raw counts for a user and compute the four axes."""
    return compute_compass(
        active_goal_count=_count(
            db, Goal, Goal.user_id == user_id, Goal.status == GoalStatus.ACTIVE.value
        ),
        completed_task_count=_count(
            db, Task, Task.user_id == user_id, Task.status == TaskStatus.COMPLETED.value
        ),
        total_task_count=_count(db, Task, Task.user_id == user_id),
        log_count=_count(db, Log, Log.user_id == user_id),
        completed_action_plan_count=_count(
            db,
            ActionPlan,
            ActionPlan.user_id == user_id,
            ActionPlan.status == ActionPlanStatus.COMPLETED.value,
        ),
        total_action_plan_count=_count(db, ActionPlan, ActionPlan.user_id == user_id),
    )


# =============================================================================
# Period statistics
# =============================================================================


class InvalidPeriodError(ValueError):
    """Custom period without a usable date range."""

    pass


def _midnight(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time(), tzinfo=tz).astimezone(timezone.utc)


def period_window(
    period: StatsPeriod,
    *,
    now: datetime | None = None,
    tz_name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> tuple[datetime, datetime]:
    """
    [start, end) of a stats period in the configured zone, as UTC.

    Current periods (today, this week, this month) end at the close of
    today. Custom ranges include both end dates.

    Raises:
        InvalidPeriodError: custom period missing a date, or end before start
    """
    tz = ZoneInfo(tz_name or settings.DEFAULT_TIMEZONE)
    today = (now or utcnow()).astimezone(tz).date()
    tomorrow = today + timedelta(days=1)
    sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    month_start = today.replace(day=1)

    if period == StatsPeriod.CUSTOM:
        if start_date is None or end_date is None:
            raise InvalidPeriodError("Custom period requires start_date and end_date")
        if end_date < start_date:
            raise InvalidPeriodError("end_date must not be before start_date")
        first, last = start_date, end_date + timedelta(days=1)
    elif period == StatsPeriod.TODAY:
        first, last = today, tomorrow
    elif period == StatsPeriod.THIS_WEEK:
        first, last = sunday, tomorrow
    elif period == StatsPeriod.LAST_WEEK:
        first, last = sunday - timedelta(days=7), sunday
    elif period == StatsPeriod.THIS_MONTH:
        first, last = month_start, tomorrow
    elif period == StatsPeriod.LAST_MONTH:
        first, last = (month_start - timedelta(days=1)).replace(day=1), month_start
    else:
        raise InvalidPeriodError(f"Unknown period: {period}")
    return _midnight(first, tz), _midnight(last, tz)


def count_between(db: Session, model, column, start: datetime, end: datetime, *conditions) -> int:
    """Rows of ``model`` with ``column`` in [start, end)."""
    return _count(db, model, column >= start, column < end, *conditions)


def distinct_log_days(
    db: Session, user_id: UUID, start: datetime, end: datetime, tz_name: str | None = None
) -> int:
    """Number of local calendar days in [start, end) with at least one log."""
    tz = ZoneInfo(tz_name or settings.DEFAULT_TIMEZONE)
    stamps = db.execute(
        select(Log.created_at).where(
            Log.user_id == user_id,
            Log.created_at >= start,
            Log.created_at < end,
        )
    ).scalars().all()
    return len({stamp.astimezone(tz).date() for stamp in stamps})


def get_progress_stats(
    db: Session,
    user_id: UUID,
    period: StatsPeriod = StatsPeriod.THIS_WEEK,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    now: datetime | None = None,
) -> ProgressStats:
    """
    Achievement rate and activity for one period.

    The rate compares tasks completed in the window with tasks created in
    it, capped at 100. Active goals are counted regardless of the window.
    """
    start, end = period_window(period, now=now, start_date=start_date, end_date=end_date)
    completed = count_between(
        db,
        Task,
        Task.completed_at,
        start,
        end,
        Task.user_id == user_id,
        Task.status == TaskStatus.COMPLETED.value,
    )
    total = count_between(db, Task, Task.created_at, start, end, Task.user_id == user_id)
    return ProgressStats(
        period=period,
        start=start,
        end=end,
        achievement_rate=percentage(completed, total),
        completed_tasks=completed,
        total_tasks=total,
        log_days=distinct_log_days(db, user_id, start, end),
        active_goals=_count(
            db, Goal, Goal.user_id == user_id, Goal.status == GoalStatus.ACTIVE.value
        ),
    )
