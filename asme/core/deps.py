"""FastAPI dependencies for authentication, authorization, and database access."""

import logging
from typing import Generator
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from asme.core.errors import ExternalServiceError
from asme.db.session import SessionLocal
from asme.schemas.auth import UserSession
from asme.services import auth_service, role_service

logger = logging.getLogger(__name__)

# Cookie and header names
COOKIE_NAME = "asme_session"
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_access_token(request: Request) -> str | None:
    """Access token from the Authorization header, else the session cookie."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(COOKIE_NAME) or None


async def get_current_user(request: Request) -> dict:
    """
    Validate the access token with the auth provider and return its user.

    Raises:
        HTTPException 401: Missing, invalid or expired token
        HTTPException 502: Auth provider unavailable
    """
    token = get_access_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        user = await auth_service.get_user(token)
    except ExternalServiceError as exc:
        if exc.status_code == 400:
            raise HTTPException(status_code=401, detail="Invalid session")
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    if not user.get("id"):
        raise HTTPException(status_code=401, detail="Invalid session")
    return user


async def get_current_session(
    request: Request,
    db: Session = Depends(get_db),
) -> UserSession:
    """
    Get session context: user_id, email, role.

    This is the PRIMARY auth dependency for dashboard endpoints.
    """
    user = await get_current_user(request)
    metadata = user.get("user_metadata") or {}
    user_id = UUID(user["id"])
    role = role_service.resolve_role(db, user_id, metadata)
    request.state.user_id = str(user_id)

    return UserSession(
        user_id=user_id,
        email=user.get("email") or "",
        role=role,
        display_name=metadata.get("name"),
    )


def require_roles(allowed_roles):
    """
    Dependency factory for role-based authorization.

    Uses enum values (not strings) to prevent drift.

    Usage:
        @router.post("/casos", dependencies=[Depends(require_roles(ROLES_CAN_EDIT_CASES))])
    """

    def dependency(session: UserSession = Depends(get_current_session)) -> UserSession:
        if session.role not in allowed_roles:
            role_label = session.role.value if session.role else "none"
            logger.info("Role %s denied for user %s", role_label, session.user_id)
            raise HTTPException(
                status_code=403,
                detail=f"Role '{role_label}' not authorized for this action",
            )
        return session

    return dependency


def require_csrf_header(request: Request) -> None:
    """
    Verify CSRF header on mutations.

    Apply to state-changing dashboard endpoints (POST, PATCH, DELETE).

    Raises:
        HTTPException 403: Missing or invalid CSRF header
    """
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'",
        )
