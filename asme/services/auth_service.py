"""Hosted auth provider (Supabase GoTrue) client.

All user accounts live in the provider; this module only wraps its REST
API. Public calls use the anon key, admin calls (user creation/deletion)
use the service-role key and must never be reachable without an admin
session.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from asme.core.config import settings
from asme.core.errors import ExternalServiceError
from asme.db.enums import OtpType, Role
from asme.services.http_service import request_with_retries

logger = logging.getLogger(__name__)

SERVICE_NAME = "auth"
ADMIN_USERS_PAGE_SIZE = 200


def _auth_url(path: str) -> str:
    return f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1{path}"


def _headers(*, access_token: str | None = None, admin: bool = False) -> dict[str, str]:
    key = settings.SUPABASE_SERVICE_ROLE_KEY if admin else settings.SUPABASE_ANON_KEY
    return {
        "apikey": key,
        "Authorization": f"Bearer {access_token or key}",
        "Content-Type": "application/json",
    }


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Auth provider error ({response.status_code})"
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Auth provider error ({response.status_code})"


async def _request(
    method: str,
    path: str,
    *,
    json: dict | None = None,
    params: dict | None = None,
    access_token: str | None = None,
    admin: bool = False,
) -> Any:
    """
    Call the provider and return the decoded JSON body.

    Raises:
        ExternalServiceError: 400 with the provider message for 4xx, 502 otherwise
    """
    if not settings.SUPABASE_URL:
        raise ExternalServiceError("Auth provider not configured", service=SERVICE_NAME)

    async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
        try:
            response = await request_with_retries(
                lambda: client.request(
                    method,
                    _auth_url(path),
                    json=json,
                    params=params,
                    headers=_headers(access_token=access_token, admin=admin),
                )
            )
        except httpx.RequestError as exc:
            logger.warning("Auth provider unreachable: %s %s", method, path, exc_info=exc)
            raise ExternalServiceError("Auth provider unreachable", service=SERVICE_NAME) from exc

    if response.status_code >= 400:
        message = _error_message(response)
        if response.status_code < 500:
            raise ExternalServiceError(message, status_code=400, service=SERVICE_NAME)
        logger.error("Auth provider %s %s failed with %s", method, path, response.status_code)
        raise ExternalServiceError(message, service=SERVICE_NAME)

    if response.status_code == 204 or not response.content:
        return {}
    return response.json()


# =============================================================================
# Sessions
# =============================================================================


async def login(email: str, password: str) -> dict:
    """Password login. Returns the provider session (access_token, user, ...)."""
    return await _request(
        "POST",
        "/token",
        params={"grant_type": "password"},
        json={"email": email, "password": password},
    )


async def verify_otp(
    *,
    token: str,
    otp_type: OtpType,
    email: str | None = None,
    token_hash: bool = False,
) -> dict:
    """
    Verify an emailed OTP or token hash.

    With token_hash=True the token is the hash from an invite/magic link and
    no email is sent along.
    """
    payload: dict[str, Any] = {"type": otp_type.value}
    if token_hash:
        payload["token_hash"] = token
    else:
        payload["token"] = token
        payload["email"] = email
    return await _request("POST", "/verify", json=payload)


async def get_user(access_token: str) -> dict:
    """Resolve an access token to the provider user (validates the token)."""
    return await _request("GET", "/user", access_token=access_token)


async def update_password(access_token: str, password: str) -> dict:
    return await _request("PUT", "/user", access_token=access_token, json={"password": password})


async def send_recovery_email(email: str) -> None:
    await _request(
        "POST",
        "/recover",
        json={"email": email},
        params={"redirect_to": f"{settings.FRONTEND_URL.rstrip('/')}/reset-password"},
    )


async def logout(access_token: str) -> None:
    await _request("POST", "/logout", access_token=access_token)


# =============================================================================
# Admin user management
# =============================================================================


async def find_user_by_email(email: str) -> dict | None:
    """Scan the provider's user list for an exact (case-insensitive) email match."""
    wanted = email.strip().lower()
    page = 1
    while True:
        body = await _request(
            "GET",
            "/admin/users",
            params={"page": page, "per_page": ADMIN_USERS_PAGE_SIZE},
            admin=True,
        )
        users = body.get("users", []) if isinstance(body, dict) else []
        for user in users:
            if (user.get("email") or "").lower() == wanted:
                return user
        if len(users) < ADMIN_USERS_PAGE_SIZE:
            return None
        page += 1


async def delete_user(user_id: str) -> None:
    await _request("DELETE", f"/admin/users/{user_id}", admin=True)


async def create_confirmed_user(
    email: str,
    password: str,
    *,
    name: str | None = None,
    role: Role | None = None,
) -> dict:
    """Create a user whose email is already confirmed (no OTP round-trip)."""
    metadata: dict[str, Any] = {
        "name": name,
        "is_admin": True,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    if role is not None:
        metadata["role"] = role.value
    return await _request(
        "POST",
        "/admin/users",
        admin=True,
        json={
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": metadata,
        },
    )


async def recreate_confirmed_user(email: str, password: str, *, name: str | None = None) -> dict:
    """Delete any existing account with this email, then create it fresh."""
    existing = await find_user_by_email(email)
    if existing:
        logger.info("Replacing existing auth user %s", existing.get("id"))
        await delete_user(existing["id"])
    return await create_confirmed_user(email, password, name=name)
