import time
from datetime import datetime, timezone

import pytest

from mentalbase.db.enums import TaskPriority
from mentalbase.services import progress_service


@pytest.mark.asyncio
async def test_dashboard_combines_sections(authed_client, make, client_user):
    now = datetime.now(timezone.utc)
    goal = make.goal(client_user, "Ship side project")
    make.task(client_user, "Write tests", priority=TaskPriority.HIGH, due_date=now, goal_id=goal.id)
    make.task(client_user, "Done already", completed=True)
    make.log(client_user)

    resp = await authed_client.get("/dashboard")
    assert resp.status_code == 200, resp.text
    data = resp.json()

    assert data["compass_summary"] == {
        "plan_progress": 20,
        "do_progress": 50,
        "check_progress": 10,
        "action_progress": 0,
    }
    assert [t["title"] for t in data["today_tasks"]] == ["Write tests"]
    assert data["today_tasks"][0]["goal_name"] == "Ship side project"
    assert len(data["recent_activities"]) <= 10
    stamps = [a["timestamp"] for a in data["recent_activities"]]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_dashboard_empty_user(authed_client):
    resp = await authed_client.get("/dashboard")
    assert resp.status_code == 200
    data = resp.json()
    assert data["today_tasks"] == []
    assert data["recent_activities"] == []
    assert set(data["compass_summary"].values()) == {0}


@pytest.mark.asyncio
async def test_compass_endpoint(authed_client, make, client_user):
    for i in range(6):
        make.goal(client_user, f"Goal {i}")

    resp = await authed_client.get("/compass/progress")
    assert resp.status_code == 200
    assert resp.json()["plan_progress"] == 100


@pytest.mark.asyncio
async def test_today_tasks_endpoint(authed_client, make, client_user):
    now = datetime.now(timezone.utc)
    make.task(client_user, "low", priority=TaskPriority.LOW, due_date=now, scheduled_time="08:00")
    make.task(client_user, "high", priority=TaskPriority.HIGH, due_date=now)

    resp = await authed_client.get("/tasks/today")
    assert resp.status_code == 200
    assert [t["title"] for t in resp.json()] == ["high", "low"]


@pytest.mark.asyncio
async def test_dashboard_honours_caller_deadline(monkeypatch, authed_client):
    def _slow_compass(db, user_id):
        time.sleep(1.0)

    monkeypatch.setattr(progress_service, "get_compass_summary", _slow_compass)

    resp = await authed_client.get("/dashboard", params={"timeout_seconds": 0.05})
    assert resp.status_code == 504
    assert "compass_summary" not in resp.json()


@pytest.mark.asyncio
async def test_dashboard_rejects_non_positive_deadline(authed_client):
    resp = await authed_client.get("/dashboard", params={"timeout_seconds": 0})
    assert resp.status_code == 422

