import pytest

from mentalbase.core.constants import COOKIE_NAME


@pytest.mark.asyncio
async def test_missing_cookie_is_401(client_for):
    resp = await client_for(None).get("/goals")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_is_401(client_for):
    c = client_for(None)
    c.cookies.set(COOKIE_NAME, "not-a-jwt")
    resp = await c.get("/goals")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_revoked_session_is_401(db, client_for, client_user):
    c = client_for(client_user)
    client_user.token_version += 1
    db.commit()

    resp = await c.get("/goals")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Session revoked"


@pytest.mark.asyncio
async def test_disabled_account_is_401(db, client_for, client_user):
    c = client_for(client_user)
    client_user.is_active = False
    db.commit()

    resp = await c.get("/goals")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_health(client_for):
    resp = await client_for(None).get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
