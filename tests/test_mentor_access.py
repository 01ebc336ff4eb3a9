"""Mentor reads of client data through the access gate (API level)."""

import time
import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from mentalbase.db.enums import DataCategory
from mentalbase.db.models import ClientDataViewLog
from mentalbase.services import audit_service, mentor_view_service

SHARE_GOALS_ONLY = {
    "allow_goals": True,
    "allow_tasks": False,
    "allow_logs": True,
    "allow_reflections": True,
    "allow_ai_reports": True,
}


def _audit_rows(db):
    db.expire_all()
    return list(
        db.execute(select(ClientDataViewLog).order_by(ClientDataViewLog.created_at)).scalars()
    )


@pytest.mark.asyncio
async def test_shared_goals_readable_unshared_tasks_forbidden(
    db, make, client_for, relationship, mentor, client_user
):
    goal = make.goal(client_user, "Sleep 8h")
    make.task(client_user, goal_id=goal.id, completed=True)
    make.task(client_user, goal_id=goal.id)
    await client_for(client_user).put(
        f"/client/data-access/{relationship.id}", json=SHARE_GOALS_ONLY
    )
    mentor_http = client_for(mentor)

    resp = await mentor_http.get(f"/mentor/clients/{client_user.id}/goals")
    assert resp.status_code == 200, resp.text
    [record] = resp.json()["records"]
    assert record["title"] == "Sleep 8h"
    assert record["progress_percentage"] == 50

    resp = await mentor_http.get(f"/mentor/clients/{client_user.id}/tasks")
    assert resp.status_code == 403
    assert resp.json()["detail"] == "category not shared"

    rows = _audit_rows(db)
    assert [(r.data_type, r.outcome) for r in rows] == [("goals", "allowed"), ("tasks", "denied")]
    assert rows[0].record_count == 1
    assert rows[1].reason == "category not shared"


@pytest.mark.asyncio
async def test_toggle_reflected_on_next_read(client_for, relationship, mentor, client_user):
    client_http = client_for(client_user)
    mentor_http = client_for(mentor)

    resp = await mentor_http.get(f"/mentor/clients/{client_user.id}/tasks")
    assert resp.status_code == 200

    await client_http.put(f"/client/data-access/{relationship.id}", json=SHARE_GOALS_ONLY)
    resp = await mentor_http.get(f"/mentor/clients/{client_user.id}/tasks")
    assert resp.status_code == 403

    await client_http.put(
        f"/client/data-access/{relationship.id}", json={**SHARE_GOALS_ONLY, "allow_tasks": True}
    )
    resp = await mentor_http.get(f"/mentor/clients/{client_user.id}/tasks")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_paused_sharing_is_403_not_404(client_for, relationship, mentor, client_user):
    await client_for(client_user).post(f"/client/data-access/{relationship.id}/pause")

    for category in DataCategory:
        resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}/{category.value}")
        assert resp.status_code == 403
        assert resp.json()["detail"] == "sharing paused"


@pytest.mark.asyncio
async def test_terminated_relationship_reads_deny_with_no_active_relationship(
    db, client_for, relationship, mentor, client_user
):
    await client_for(client_user).post(f"/relationships/{relationship.id}/terminate")

    for category in DataCategory:
        resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}/{category.value}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "no active relationship"

    reasons = {r.reason for r in _audit_rows(db)}
    assert reasons == {"no active relationship"}


@pytest.mark.asyncio
async def test_unknown_client_is_404(client_for, mentor):
    resp = await client_for(mentor).get(f"/mentor/clients/{uuid.uuid4()}/goals")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_unknown_category_is_422(client_for, relationship, mentor, client_user):
    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}/diary")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_non_mentor_cannot_use_mentor_surface(authed_client, relationship, client_user):
    resp = await authed_client.get(f"/mentor/clients/{client_user.id}/goals")
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_ai_reports_expose_confidence_and_ordered_recommendations(
    make, client_for, relationship, mentor, client_user
):
    make.report(client_user, confidence=0.855)

    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}/ai_reports")
    assert resp.status_code == 200, resp.text
    [report] = resp.json()["records"]
    assert report["confidence_percentage"] == 86
    assert [r["priority"] for r in report["recommendations"]] == [1, 2]


@pytest.mark.asyncio
async def test_audit_failure_does_not_block_read(
    monkeypatch, make, client_for, relationship, mentor, client_user
):
    make.goal(client_user)

    def _broken_factory():
        def _session():
            raise OperationalError("INSERT", {}, Exception("audit store down"))

        return _session

    monkeypatch.setattr(audit_service, "get_audit_session_factory", _broken_factory)

    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}/goals")
    assert resp.status_code == 200
    assert len(resp.json()["records"]) == 1


@pytest.mark.asyncio
async def test_audit_failure_does_not_turn_denial_into_allow(
    monkeypatch, client_for, relationship, mentor, client_user
):
    await client_for(client_user).post(f"/client/data-access/{relationship.id}/pause")

    def _broken_factory():
        def _session():
            raise OperationalError("INSERT", {}, Exception("audit store down"))

        return _session

    monkeypatch.setattr(audit_service, "get_audit_session_factory", _broken_factory)

    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}/logs")
    assert resp.status_code == 403


# =============================================================================
# Composite client view
# =============================================================================


@pytest.mark.asyncio
async def test_client_detail_mixes_records_and_denials(
    db, make, client_for, relationship, mentor, client_user
):
    make.goal(client_user, "Meditate")
    make.log(client_user)
    make.report(client_user)
    await client_for(client_user).put(
        f"/client/data-access/{relationship.id}", json=SHARE_GOALS_ONLY
    )
    note = await client_for(mentor).post(
        "/mentor/notes",
        json={"client_id": str(client_user.id), "title": "Intake", "content": "First session"},
    )
    assert note.status_code == 201, note.text

    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}")
    assert resp.status_code == 200, resp.text
    data = resp.json()

    assert data["client_info"]["email"] == client_user.email
    assert data["client_info"]["relationship_id"] == str(relationship.id)
    assert data["permissions"]["allow_tasks"] is False

    progress = data["progress_data"]
    assert progress["goals"]["allowed"] is True
    assert progress["goals"]["records"][0]["title"] == "Meditate"
    assert progress["tasks"] == {"allowed": False, "reason": "category not shared", "records": None}
    assert len(progress["logs"]["records"]) == 1
    assert progress["reflections"]["records"] == []
    assert len(progress["ai_reports"]["records"]) == 1

    assert [n["title"] for n in data["mentor_notes"]] == ["Intake"]

    outcomes = {(r.data_type, r.outcome) for r in _audit_rows(db)}
    assert outcomes == {
        ("goals", "allowed"),
        ("tasks", "denied"),
        ("logs", "allowed"),
        ("reflections", "allowed"),
        ("ai_reports", "allowed"),
    }


@pytest.mark.asyncio
async def test_client_detail_never_fetches_denied_categories(
    monkeypatch, client_for, relationship, mentor, client_user
):
    await client_for(client_user).put(
        f"/client/data-access/{relationship.id}", json=SHARE_GOALS_ONLY
    )

    def _must_not_run(db, client_id):
        pytest.fail("denied category was fetched")

    monkeypatch.setitem(mentor_view_service.CATEGORY_FETCHERS, DataCategory.TASKS, _must_not_run)

    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}")
    assert resp.status_code == 200, resp.text


@pytest.mark.asyncio
async def test_client_detail_without_relationship_is_404(client_for, make, mentor, client_user):
    make.relationship(mentor, client_user, accept=False)

    resp = await client_for(mentor).get(f"/mentor/clients/{client_user.id}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_client_detail_deadline_returns_504_without_partial_data(
    monkeypatch, client_for, relationship, mentor, client_user
):
    def _slow(db, client_id):
        time.sleep(1.0)
        return []

    monkeypatch.setitem(mentor_view_service.CATEGORY_FETCHERS, DataCategory.LOGS, _slow)

    resp = await client_for(mentor).get(
        f"/mentor/clients/{client_user.id}", params={"timeout_seconds": 0.05}
    )
    assert resp.status_code == 504
    assert "progress_data" not in resp.json()


def test_resolve_timeout_is_bounded():
    from mentalbase.core.config import settings

    assert mentor_view_service.resolve_timeout(None) == settings.CATEGORY_FETCH_TIMEOUT_SECONDS
    assert mentor_view_service.resolve_timeout(10_000) == settings.CATEGORY_FETCH_MAX_TIMEOUT_SECONDS
    assert mentor_view_service.resolve_timeout(2.5) == 2.5


# =============================================================================
# View logs
# =============================================================================


@pytest.mark.asyncio
async def test_view_logs_visible_to_client_and_mentor(
    make, client_for, relationship, mentor, client_user
):
    make.goal(client_user)
    mentor_http = client_for(mentor)
    await mentor_http.get(f"/mentor/clients/{client_user.id}/goals")
    await client_for(client_user).post(f"/client/data-access/{relationship.id}/pause")
    await mentor_http.get(f"/mentor/clients/{client_user.id}/logs")

    resp = await client_for(client_user).get("/client/view-logs")
    assert resp.status_code == 200
    items = resp.json()["items"]
    assert {(i["data_type"], i["outcome"]) for i in items} == {
        ("goals", "allowed"),
        ("logs", "denied"),
    }
    assert all(i["mentor_id"] == str(mentor.id) for i in items)
    assert {i["action"] for i in items} == {"view"}

    resp = await mentor_http.get("/mentor/view-logs", params={"client_id": str(client_user.id)})
    assert resp.status_code == 200
    assert len(resp.json()["items"]) == 2

    other_client = make.user()
    resp = await mentor_http.get("/mentor/view-logs", params={"client_id": str(other_client.id)})
    assert resp.json()["items"] == []
