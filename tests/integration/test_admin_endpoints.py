"""Integration tests for admin session and contact endpoints."""

from datetime import datetime, timedelta, UTC

import pytest
from sqlalchemy import select

import config
from auth.schemas import PlatformIdentity
from models.admin_session import AdminSession
from models.telegram_contact import TelegramContact
from repos import admin_sessions_repo

ADMIN = PlatformIdentity(id=42, username="alice")


@pytest.mark.asyncio
async def test_session_probe_anonymous(client, use_authenticator, authenticator_factory):
    """Test: The probe reports anonymous callers instead of failing."""
    use_authenticator(authenticator_factory())

    response = await client.get("/api/v1/admin/session")

    assert response.status_code == 200
    assert response.json() == {
        "authenticated": False,
        "telegram_user_id": None,
        "username": None,
        "is_admin": False,
        "source": None,
    }


@pytest.mark.asyncio
async def test_session_probe_reports_role(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)

    response = await client.get("/api/v1/admin/session", headers=admin_cookie(token))

    assert response.json() == {
        "authenticated": True,
        "telegram_user_id": "42",
        "username": "alice",
        "is_admin": True,
        "source": "signed_cookie",
    }


@pytest.mark.asyncio
async def test_guarded_endpoint_without_identity_is_401(client, use_authenticator, authenticator_factory):
    use_authenticator(authenticator_factory(allow_list=["42"]))

    response = await client.get("/api/v1/admin/contacts")

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


@pytest.mark.asyncio
async def test_browser_without_identity_is_redirected_to_login(client, use_authenticator, authenticator_factory):
    """Test: Expired/missing sessions send browsers to re-authenticate."""
    use_authenticator(authenticator_factory(allow_list=["42"]))

    response = await client.get(
        "/api/v1/admin/contacts",
        headers={"accept": "text/html,application/xhtml+xml", "Cookie": "tg_admin=expired.token"},
    )

    assert response.status_code == 303
    assert response.headers["location"] == config.settings.ADMIN_LOGIN_PATH


@pytest.mark.asyncio
async def test_promote_and_demote_contact(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    """Test: Admins can toggle the persisted flag of another contact."""
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)
    db_session.add(TelegramContact(telegram_user_id=7, username="carol"))
    await db_session.commit()

    promoted = await client.put(
        "/api/v1/admin/contacts/7/admin", json={"is_admin": True}, headers=admin_cookie(token)
    )
    assert promoted.status_code == 200
    assert promoted.json()["is_admin"] is True

    # The promoted contact now passes the admin guard through the header path
    use_authenticator(authenticator_factory(allow_list=["42"], trust_user_id_header=True))
    as_carol = await client.get("/api/v1/admin/contacts", headers={"x-telegram-user-id": "7"})
    assert as_carol.status_code == 200

    demoted = await client.put(
        "/api/v1/admin/contacts/7/admin", json={"is_admin": False}, headers=admin_cookie(token)
    )
    assert demoted.json()["is_admin"] is False
    as_carol = await client.get("/api/v1/admin/contacts", headers={"x-telegram-user-id": "7"})
    assert as_carol.status_code == 403


@pytest.mark.asyncio
async def test_demoting_allow_listed_admin_keeps_access(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    """Test: Allow-list entries cannot be revoked through the database."""
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)
    db_session.add(TelegramContact(telegram_user_id=42, is_admin=True))
    await db_session.commit()

    await client.put("/api/v1/admin/contacts/42/admin", json={"is_admin": False}, headers=admin_cookie(token))
    response = await client.get("/api/v1/admin/contacts", headers=admin_cookie(token))

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_unknown_contact_is_404(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)

    response = await client.put(
        "/api/v1/admin/contacts/12345/admin", json={"is_admin": True}, headers=admin_cookie(token)
    )

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("telegram_user_id", [str(2**63), "0"])
async def test_update_out_of_range_contact_id_is_422(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie, telegram_user_id
):
    """Test: Ids outside the BIGINT column range are rejected before any query."""
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)

    response = await client.put(
        f"/api/v1/admin/contacts/{telegram_user_id}/admin", json={"is_admin": True}, headers=admin_cookie(token)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_non_admin_cannot_promote(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    use_authenticator(authenticator_factory(allow_list=["99"]))
    token = await stateless_backend.issue(db_session, ADMIN)
    db_session.add(TelegramContact(telegram_user_id=42))
    await db_session.commit()

    response = await client.put(
        "/api/v1/admin/contacts/42/admin", json={"is_admin": True}, headers=admin_cookie(token)
    )

    assert response.status_code == 403
    result = await db_session.execute(select(TelegramContact.is_admin))
    assert result.scalar_one() is False


@pytest.mark.asyncio
async def test_contacts_pagination(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)
    for telegram_user_id in range(1, 6):
        db_session.add(TelegramContact(telegram_user_id=telegram_user_id))
    await db_session.commit()

    response = await client.get("/api/v1/admin/contacts?limit=2&offset=4", headers=admin_cookie(token))

    body = response.json()
    assert body["total"] == 5
    assert body["limit"] == 2
    assert body["offset"] == 4
    assert len(body["contacts"]) == 1


@pytest.mark.asyncio
async def test_logout_clears_cookie(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)

    response = await client.post("/api/v1/admin/logout", headers=admin_cookie(token))

    assert response.status_code == 204
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("tg_admin=")
    assert "Max-Age=0" in set_cookie


@pytest.mark.asyncio
async def test_logout_revokes_store_backed_session(
    client, use_authenticator, authenticator_factory, store_backend, db_session, admin_cookie
):
    """Test: With the store backend, logout invalidates the token server-side."""
    use_authenticator(authenticator_factory(allow_list=["42"], backend=store_backend))
    token = await store_backend.issue(db_session, ADMIN)

    assert (await client.get("/api/v1/me", headers=admin_cookie(token))).status_code == 200

    await client.post("/api/v1/admin/logout", headers=admin_cookie(token))

    assert (await client.get("/api/v1/me", headers=admin_cookie(token))).status_code == 401


@pytest.mark.asyncio
async def test_sweep_deletes_expired_sessions(
    client, use_authenticator, authenticator_factory, stateless_backend, db_session, admin_cookie
):
    use_authenticator(authenticator_factory(allow_list=["42"]))
    token = await stateless_backend.issue(db_session, ADMIN)
    live = await admin_sessions_repo.create(db_session, telegram_user_id=1, ttl_seconds=3600)
    stale = await admin_sessions_repo.create(db_session, telegram_user_id=2, ttl_seconds=3600)
    stale.expires_at = datetime.now(UTC) - timedelta(days=1)
    await db_session.commit()

    response = await client.post("/api/v1/admin/sessions/sweep", headers=admin_cookie(token))

    assert response.status_code == 200
    assert response.json() == {"deleted": 1}
    result = await db_session.execute(select(AdminSession.telegram_user_id))
    assert result.scalars().all() == [live.telegram_user_id]


@pytest.mark.asyncio
async def test_sweep_requires_admin(client, use_authenticator, authenticator_factory):
    use_authenticator(authenticator_factory(trust_user_id_header=True))

    response = await client.post("/api/v1/admin/sessions/sweep", headers={"x-telegram-user-id": "42"})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
