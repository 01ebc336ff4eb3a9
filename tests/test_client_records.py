"""Client self-management endpoints (goals, tasks, logs, reflections, plans, reports)."""

import uuid

import pytest


@pytest.mark.asyncio
async def test_goal_lifecycle(authed_client):
    resp = await authed_client.post("/goals", json={"title": "  Learn Spanish "})
    assert resp.status_code == 201, resp.text
    goal = resp.json()
    assert goal["title"] == "Learn Spanish"
    assert goal["status"] == "active"

    task = await authed_client.post("/tasks", json={"title": "Duolingo", "goal_id": goal["id"]})
    assert task.status_code == 201, task.text
    toggled = await authed_client.post(f"/tasks/{task.json()['id']}/toggle")
    assert toggled.json()["status"] == "completed"

    resp = await authed_client.get(f"/goals/{goal['id']}")
    assert resp.json()["progress_percentage"] == 100

    resp = await authed_client.patch(f"/goals/{goal['id']}", json={"status": "archived"})
    assert resp.status_code == 200
    resp = await authed_client.get("/goals")
    assert resp.json() == []

    resp = await authed_client.delete(f"/goals/{goal['id']}")
    assert resp.status_code == 204

    resp = await authed_client.get("/tasks")
    [orphan] = resp.json()
    assert orphan["goal_id"] == goal["id"]
    assert orphan["goal_name"] is None


@pytest.mark.asyncio
async def test_goals_are_private_to_owner(client_for, make, client_user):
    goal = make.goal(client_user)
    other = make.user()

    resp = await client_for(other).get(f"/goals/{goal.id}")
    assert resp.status_code == 404

    resp = await client_for(other).post("/tasks", json={"title": "x", "goal_id": str(goal.id)})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_task_validation(authed_client):
    resp = await authed_client.post("/tasks", json={"title": "Late", "scheduled_time": "25:00"})
    assert resp.status_code == 422

    resp = await authed_client.post(f"/tasks/{uuid.uuid4()}/toggle")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_logs_and_reflections(authed_client):
    resp = await authed_client.post(
        "/logs", json={"content": "Calm morning", "emotion": "happy", "state": "calm"}
    )
    assert resp.status_code == 201, resp.text
    resp = await authed_client.get("/logs")
    assert [l["content"] for l in resp.json()] == ["Calm morning"]

    resp = await authed_client.post(
        "/reflections",
        json={
            "period": "weekly",
            "start_date": "2026-05-04T00:00:00Z",
            "end_date": "2026-05-10T00:00:00Z",
            "content": "Solid week",
        },
    )
    assert resp.status_code == 201, resp.text

    resp = await authed_client.post(
        "/reflections",
        json={
            "period": "weekly",
            "start_date": "2026-05-10T00:00:00Z",
            "end_date": "2026-05-04T00:00:00Z",
            "content": "Backwards",
        },
    )
    assert resp.status_code == 422

    resp = await authed_client.get("/reflections", params={"period": "weekly"})
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_action_plans_feed_action_progress(authed_client):
    ids = []
    for title in ("Walk daily", "No phone in bed"):
        resp = await authed_client.post(
            "/action-plans",
            json={"title": title, "description": "Plan", "action_items": ["Start"]},
        )
        assert resp.status_code == 201, resp.text
        ids.append(resp.json()["id"])

    resp = await authed_client.patch(f"/action-plans/{ids[0]}/status", json={"status": "completed"})
    assert resp.status_code == 200

    resp = await authed_client.get("/compass/progress")
    assert resp.json()["action_progress"] == 50


@pytest.mark.asyncio
async def test_ai_reports_read_only(authed_client, make, client_user):
    resp = await authed_client.get("/ai-reports/latest")
    assert resp.status_code == 200
    assert resp.json() is None

    make.report(client_user, confidence=0.5)
    latest = make.report(client_user, confidence=0.125)

    resp = await authed_client.get("/ai-reports/latest")
    data = resp.json()
    assert data["id"] == str(latest.id)
    assert data["confidence_percentage"] == 13

    resp = await authed_client.get("/ai-reports")
    assert len(resp.json()) == 2
