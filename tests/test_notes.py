import uuid

import pytest


def _note(client_id, **overrides):
    body = {
        "client_id": str(client_id),
        "title": "Session 1",
        "content": "Talked about sleep",
        "note_type": "session",
        "tags": ["sleep", " sleep ", "habits"],
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_mentor_note_crud(client_for, relationship, mentor, client_user):
    mentor_http = client_for(mentor)

    resp = await mentor_http.post("/mentor/notes", json=_note(client_user.id))
    assert resp.status_code == 201, resp.text
    note = resp.json()
    assert note["tags"] == ["sleep", "habits"]
    assert note["is_shared_with_client"] is False

    resp = await mentor_http.patch(
        f"/mentor/notes/{note['id']}", json={"title": "Session one", "is_shared_with_client": True}
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["title"] == "Session one"
    assert resp.json()["content"] == "Talked about sleep"

    resp = await mentor_http.get("/mentor/notes", params={"client_id": str(client_user.id)})
    assert [n["id"] for n in resp.json()] == [note["id"]]

    resp = await mentor_http.delete(f"/mentor/notes/{note['id']}")
    assert resp.status_code == 204
    resp = await mentor_http.delete(f"/mentor/notes/{note['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_client_sees_only_shared_notes(client_for, relationship, mentor, client_user):
    mentor_http = client_for(mentor)
    await mentor_http.post("/mentor/notes", json=_note(client_user.id, title="Private"))
    await mentor_http.post(
        "/mentor/notes", json=_note(client_user.id, title="Shared", is_shared_with_client=True)
    )

    resp = await client_for(client_user).get("/client/mentor-notes")
    assert resp.status_code == 200
    assert [n["title"] for n in resp.json()] == ["Shared"]


@pytest.mark.asyncio
async def test_notes_not_gated_by_data_sharing(client_for, relationship, mentor, client_user):
    await client_for(client_user).post(f"/client/data-access/{relationship.id}/pause")

    resp = await client_for(mentor).post("/mentor/notes", json=_note(client_user.id))
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_notes_require_active_relationship(client_for, make, mentor):
    stranger = make.user()
    resp = await client_for(mentor).post("/mentor/notes", json=_note(stranger.id))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_mentor_cannot_edit_another_mentors_note(client_for, make, relationship, mentor, client_user):
    resp = await client_for(mentor).post("/mentor/notes", json=_note(client_user.id))
    note_id = resp.json()["id"]
    other_mentor = make.user(mentor=True)

    resp = await client_for(other_mentor).patch(f"/mentor/notes/{note_id}", json={"title": "Mine"})
    assert resp.status_code == 404

    resp = await client_for(other_mentor).patch(f"/mentor/notes/{uuid.uuid4()}", json={"title": "x"})
    assert resp.status_code == 404
