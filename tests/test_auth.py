"""
Tests for the auth router and session resolution.

The hosted auth provider is never called: auth_service functions are
monkeypatched per test.
"""

import uuid

import pytest

from asme.core.deps import COOKIE_NAME
from asme.core.errors import ExternalServiceError
from asme.db.enums import OtpType, Role
from asme.db.models import UserRole
from asme.services import auth_service, role_service

CSRF = {"X-Requested-With": "XMLHttpRequest"}


def _provider_session(token: str = "access-123") -> dict:
    return {
        "access_token": token,
        "expires_in": 7200,
        "user": {"id": str(uuid.uuid4()), "email": "staff@asme.mx"},
    }


# =============================================================================
# Sign in
# =============================================================================

@pytest.mark.asyncio
async def test_login_sets_session_cookie(client, monkeypatch):
    calls = []

    async def fake_login(email, password):
        calls.append((email, password))
        return _provider_session()

    monkeypatch.setattr(auth_service, "login", fake_login)

    response = await client.post(
        "/api/auth/login", json={"email": "Staff@ASME.mx", "password": "secreto"}
    )

    assert response.status_code == 200
    assert response.json()["session"]["access_token"] == "access-123"
    assert calls == [("staff@asme.mx", "secreto")]
    cookie = response.headers["set-cookie"]
    assert f"{COOKIE_NAME}=access-123" in cookie
    assert "HttpOnly" in cookie
    assert "Max-Age=7200" in cookie


@pytest.mark.asyncio
async def test_login_passes_provider_error_through(client, monkeypatch):
    async def fake_login(email, password):
        raise ExternalServiceError("Invalid login credentials", status_code=400, service="auth")

    monkeypatch.setattr(auth_service, "login", fake_login)

    response = await client.post("/api/auth/login", json={"email": "a@asme.mx", "password": "x"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid login credentials"
    assert COOKIE_NAME not in response.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_login_missing_password_returns_400(client):
    response = await client.post("/api/auth/login", json={"email": "a@asme.mx"})

    assert response.status_code == 400
    assert "password" in response.json()["detail"]


@pytest.mark.asyncio
async def test_accept_invite_uses_token_hash(client, monkeypatch):
    seen = {}

    async def fake_verify(**kwargs):
        seen.update(kwargs)
        return _provider_session("invite-token")

    monkeypatch.setattr(auth_service, "verify_otp", fake_verify)

    response = await client.post("/api/auth/accept-invite", json={"token": "hash-abc"})

    assert response.status_code == 200
    assert seen == {"token": "hash-abc", "otp_type": OtpType.INVITE, "token_hash": True}
    assert f"{COOKIE_NAME}=invite-token" in response.headers["set-cookie"]


# =============================================================================
# Account management
# =============================================================================

@pytest.mark.asyncio
async def test_invite_user_records_role(authed_client, db, monkeypatch):
    new_id = uuid.uuid4()

    async def fake_create(email, password, *, name=None, role=None):
        return {"id": str(new_id), "email": email}

    monkeypatch.setattr(auth_service, "create_confirmed_user", fake_create)

    response = await authed_client.post(
        "/api/auth/invite-user",
        json={"email": "nuevo@asme.mx", "password": "secreto1", "role": "lawyer"},
    )

    assert response.status_code == 201
    row = db.query(UserRole).filter(UserRole.user_id == new_id).one()
    assert row.role == Role.LAWYER.value


@pytest.mark.asyncio
async def test_signup_requires_admin(client_for, monkeypatch):
    async def fake_recreate(email, password, *, name=None):
        raise AssertionError("provider must not be called")

    monkeypatch.setattr(auth_service, "recreate_confirmed_user", fake_recreate)

    async with client_for(Role.VIEWER) as c:
        response = await c.post(
            "/api/auth/signup", json={"email": "x@asme.mx", "password": "secreto1"}
        )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_signup_requires_csrf_header(client_for):
    async with client_for(Role.ADMIN, csrf=False) as c:
        response = await c.post(
            "/api/auth/signup", json={"email": "x@asme.mx", "password": "secreto1"}
        )

    assert response.status_code == 403


# =============================================================================
# Session
# =============================================================================

@pytest.mark.asyncio
async def test_me_resolves_role_from_user_roles(client, db, monkeypatch):
    user_id = uuid.uuid4()
    role_service.set_role(db, user_id, Role.ASSISTANT)

    async def fake_get_user(token):
        assert token == "tok"
        return {"id": str(user_id), "email": "asistente@asme.mx", "user_metadata": {"name": "Rosa"}}

    monkeypatch.setattr(auth_service, "get_user", fake_get_user)

    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer tok"})

    assert response.status_code == 200
    assert response.json() == {
        "user_id": str(user_id),
        "email": "asistente@asme.mx",
        "display_name": "Rosa",
        "role": "assistant",
    }


@pytest.mark.asyncio
async def test_me_with_rejected_token_returns_401(client, monkeypatch):
    async def fake_get_user(token):
        raise ExternalServiceError("invalid JWT", status_code=400, service="auth")

    monkeypatch.setattr(auth_service, "get_user", fake_get_user)

    client.cookies.set(COOKIE_NAME, "expired")
    response = await client.get("/api/auth/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_without_token_returns_401(client):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookie_even_if_provider_fails(client, monkeypatch):
    async def fake_logout(token):
        raise ExternalServiceError("provider down")

    monkeypatch.setattr(auth_service, "logout", fake_logout)

    client.cookies.set(COOKIE_NAME, "tok")
    response = await client.post("/api/auth/logout", headers=CSRF)

    assert response.status_code == 200
    assert response.json() == {"status": "logged_out"}
    assert f'{COOKIE_NAME}=""' in response.headers["set-cookie"]


def test_role_from_metadata():
    assert role_service.role_from_metadata({"is_admin": True}) == Role.ADMIN
    assert role_service.role_from_metadata({"role": "viewer"}) == Role.VIEWER
    assert role_service.role_from_metadata({"role": "owner"}) is None
    assert role_service.role_from_metadata(None) is None
