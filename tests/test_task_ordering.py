from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from mentalbase.db.enums import TaskPriority
from mentalbase.schemas.task import TaskCreate
from mentalbase.services import goal_service, task_service


def _task(priority, time=None, created_minutes=0, title=""):
    return SimpleNamespace(
        title=title,
        priority=priority,
        scheduled_time=time,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=created_minutes),
    )


def test_priority_then_time():
    tasks = [
        _task("low", "08:00", title="low/08:00"),
        _task("high", "18:00", title="high/18:00"),
        _task("high", "09:00", title="high/09:00"),
    ]

    ordered = [t.title for t in task_service.order_tasks(tasks)]

    assert ordered == ["high/09:00", "high/18:00", "low/08:00"]


def test_timed_before_untimed_then_created_at():
    tasks = [
        _task("medium", None, created_minutes=5, title="untimed-late"),
        _task("medium", None, created_minutes=1, title="untimed-early"),
        _task("medium", "23:00", created_minutes=9, title="timed"),
    ]

    ordered = [t.title for t in task_service.order_tasks(tasks)]

    assert ordered == ["timed", "untimed-early", "untimed-late"]


def test_today_window_uses_configured_zone():
    now = datetime(2026, 3, 10, 1, 30, tzinfo=timezone.utc)

    start, end = task_service.today_window(now, "Asia/Tokyo")

    # 10:30 in Tokyo; the local day began at 15:00 UTC the day before
    assert start == datetime(2026, 3, 9, 15, 0, tzinfo=timezone.utc)
    assert end - start == timedelta(hours=24)


def test_today_tasks_filter_order_and_goal_name(db, make, client_user):
    now = datetime.now(timezone.utc)
    start, _ = task_service.today_window(now)
    goal = make.goal(client_user, "Health")

    make.task(client_user, "tomorrow", priority=TaskPriority.HIGH, due_date=start + timedelta(days=1))
    make.task(client_user, "low", priority=TaskPriority.LOW, due_date=start, scheduled_time="08:00")
    make.task(
        client_user,
        "high late",
        priority=TaskPriority.HIGH,
        due_date=start + timedelta(hours=1),
        scheduled_time="18:00",
        goal_id=goal.id,
    )
    make.task(
        client_user,
        "high early",
        priority=TaskPriority.HIGH,
        due_date=start + timedelta(hours=2),
        scheduled_time="09:00",
    )

    today = task_service.list_today_tasks(db, client_user.id, now=now)

    assert [t.title for t in today] == ["high early", "high late", "low"]
    assert today[1].goal_name == "Health"
    assert today[0].goal_name is None


def test_deleted_goal_resolves_to_no_goal(db, make, client_user):
    goal = make.goal(client_user, "Temporary")
    task = make.task(client_user, goal_id=goal.id)

    goal_service.delete_goal(db, client_user.id, goal.id)

    [listed] = task_service.list_tasks_with_goal(db, client_user.id)
    assert listed.id == task.id
    assert listed.goal_id == goal.id
    assert listed.goal_name is None


def test_toggle_sets_and_clears_completed_at(db, make, client_user):
    task = make.task(client_user)

    toggled = task_service.toggle_task(db, client_user.id, task.id)
    assert toggled.status == "completed"
    assert toggled.completed_at is not None

    toggled = task_service.toggle_task(db, client_user.id, task.id)
    assert toggled.status == "pending"
    assert toggled.completed_at is None


def test_offset_due_dates_are_stored_as_utc(db, client_user):
    now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
    # 22:00 UTC on the 18th, sent as the next morning in Tokyo
    late = task_service.create_task(
        db, client_user.id, TaskCreate(title="late", due_date="2026-10-19T07:00:00+09:00")
    )
    # 02:30 UTC on the 19th, sent as the evening before in Sao Paulo
    task_service.create_task(
        db, client_user.id, TaskCreate(title="tomorrow", due_date="2026-10-18T23:30:00-03:00")
    )

    today = task_service.list_today_tasks(db, client_user.id, now=now)

    assert [t.title for t in today] == ["late"]
    db.refresh(late)
    assert late.due_date == datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc)
    assert late.due_date.utcoffset() == timedelta(0)
