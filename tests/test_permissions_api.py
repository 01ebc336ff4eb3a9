import uuid

import pytest

ALL_SHARED = {
    "allow_goals": True,
    "allow_tasks": True,
    "allow_logs": True,
    "allow_reflections": True,
    "allow_ai_reports": True,
}


@pytest.mark.asyncio
async def test_list_data_access(authed_client, relationship, mentor):
    resp = await authed_client.get("/client/data-access")
    assert resp.status_code == 200, resp.text

    [item] = resp.json()["items"]
    assert item["relationship_id"] == str(relationship.id)
    assert item["mentor_name"] == mentor.name
    assert item["relationship_status"] == "active"
    assert item["permissions"]["allow_goals"] is True
    assert item["permissions"]["is_active"] is True


@pytest.mark.asyncio
async def test_pending_relationship_listed_without_permissions(client_for, make, mentor, client_user):
    make.relationship(mentor, client_user, accept=False)

    resp = await client_for(client_user).get("/client/data-access")
    [item] = resp.json()["items"]
    assert item["relationship_status"] == "pending"
    assert item["permissions"] is None


@pytest.mark.asyncio
async def test_update_flags(authed_client, relationship):
    body = {**ALL_SHARED, "allow_tasks": False, "allow_logs": False}

    resp = await authed_client.put(f"/client/data-access/{relationship.id}", json=body)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["allow_tasks"] is False
    assert data["allow_logs"] is False
    assert data["allow_goals"] is True
    assert data["is_active"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"allow_goals": True},
        {**ALL_SHARED, "allow_goals": "yes"},
        {**ALL_SHARED, "allow_goals": 1},
        {**ALL_SHARED, "is_active": False},
    ],
)
async def test_malformed_update_rejected_before_write(authed_client, db, relationship, body):
    resp = await authed_client.put(f"/client/data-access/{relationship.id}", json=body)
    assert resp.status_code == 422

    db.expire_all()
    assert relationship.permission.allow_goals is True


@pytest.mark.asyncio
async def test_only_owning_client_can_update(client_for, relationship, mentor):
    resp = await client_for(mentor).put(
        f"/client/data-access/{relationship.id}", json=ALL_SHARED
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_update_requires_active_relationship(client_for, make, mentor, client_user):
    pending = make.relationship(mentor, client_user, accept=False)
    resp = await client_for(client_user).put(f"/client/data-access/{pending.id}", json=ALL_SHARED)
    assert resp.status_code == 400

    resp = await client_for(client_user).put(f"/client/data-access/{uuid.uuid4()}", json=ALL_SHARED)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_pause_and_resume_keep_flags(authed_client, relationship):
    body = {**ALL_SHARED, "allow_reflections": False}
    await authed_client.put(f"/client/data-access/{relationship.id}", json=body)

    resp = await authed_client.post(f"/client/data-access/{relationship.id}/pause")
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False
    assert resp.json()["allow_reflections"] is False
    assert resp.json()["allow_goals"] is True

    resp = await authed_client.post(f"/client/data-access/{relationship.id}/resume")
    assert resp.status_code == 200
    assert resp.json()["is_active"] is True
    assert resp.json()["allow_reflections"] is False


@pytest.mark.asyncio
async def test_mutation_requires_csrf_header(authed_client, relationship):
    resp = await authed_client.put(
        f"/client/data-access/{relationship.id}",
        json=ALL_SHARED,
        headers={"X-Requested-With": ""},
    )
    assert resp.status_code == 403
