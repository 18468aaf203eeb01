"""Authentication router backed by the hosted auth provider."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from asme.core.config import settings
from asme.core.deps import (
    COOKIE_NAME,
    get_access_token,
    get_current_session,
    get_db,
    require_csrf_header,
    require_roles,
)
from asme.core.errors import ExternalServiceError
from asme.core.rate_limit import AUTH_LIMIT, limiter
from asme.db.enums import ROLES_CAN_INVITE, OtpType
from asme.schemas.auth import (
    AcceptInviteRequest,
    AuthSessionResponse,
    AuthUserResponse,
    InviteUserRequest,
    LoginRequest,
    MeResponse,
    PasswordUpdateRequest,
    RecoverRequest,
    SignupRequest,
    UserSession,
    VerifyRequest,
)
from asme.services import auth_service, role_service
from asme.utils.normalization import normalize_email

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_SESSION_MAX_AGE = 3600
can_invite = require_roles(ROLES_CAN_INVITE)


def _provider_error(e: ExternalServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def _set_session_cookie(response: Response, provider_session: dict) -> None:
    token = provider_session.get("access_token")
    if not token:
        return
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=int(provider_session.get("expires_in") or DEFAULT_SESSION_MAX_AGE),
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/",
    )


def _session_response(provider_session: dict) -> AuthSessionResponse:
    return AuthSessionResponse(
        session=provider_session or None,
        user=provider_session.get("user"),
    )


# =============================================================================
# Sign in
# =============================================================================

@router.post("/login", response_model=AuthSessionResponse)
@limiter.limit(AUTH_LIMIT)
async def login(request: Request, response: Response, data: LoginRequest):
    """Password login. The access token is also set as the session cookie."""
    try:
        provider_session = await auth_service.login(normalize_email(data.email), data.password)
    except ExternalServiceError as e:
        raise _provider_error(e)
    _set_session_cookie(response, provider_session)
    return _session_response(provider_session)


@router.post("/verify", response_model=AuthSessionResponse)
@limiter.limit(AUTH_LIMIT)
async def verify(request: Request, response: Response, data: VerifyRequest):
    try:
        provider_session = await auth_service.verify_otp(
            token=data.token,
            otp_type=data.type,
            email=normalize_email(data.email),
        )
    except ExternalServiceError as e:
        raise _provider_error(e)
    _set_session_cookie(response, provider_session)
    return _session_response(provider_session)


@router.post("/accept-invite", response_model=AuthSessionResponse)
@limiter.limit(AUTH_LIMIT)
async def accept_invite(request: Request, response: Response, data: AcceptInviteRequest):
    """Exchange the invite link's token hash for a session."""
    try:
        provider_session = await auth_service.verify_otp(
            token=data.token,
            otp_type=OtpType.INVITE,
            token_hash=True,
        )
    except ExternalServiceError as e:
        raise _provider_error(e)
    _set_session_cookie(response, provider_session)
    return _session_response(provider_session)


@router.post("/recover", response_model=AuthUserResponse)
@limiter.limit(AUTH_LIMIT)
async def recover(request: Request, data: RecoverRequest):
    try:
        await auth_service.send_recovery_email(normalize_email(data.email))
    except ExternalServiceError as e:
        raise _provider_error(e)
    return AuthUserResponse(message="Si el correo existe, enviamos un enlace de recuperación.")


# =============================================================================
# Account management (admin)
# =============================================================================

@router.post(
    "/signup",
    response_model=AuthUserResponse,
    status_code=201,
    dependencies=[Depends(require_csrf_header), Depends(can_invite)],
)
async def signup(data: SignupRequest):
    """
    Create a confirmed account.

    Any existing account with the same email is deleted first, so this
    doubles as a password reset for staff who lost access.
    """
    try:
        user = await auth_service.recreate_confirmed_user(
            normalize_email(data.email), data.password, name=data.name
        )
    except ExternalServiceError as e:
        raise _provider_error(e)
    return AuthUserResponse(user=user, message="Usuario creado")


@router.post(
    "/invite-user",
    response_model=AuthUserResponse,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
async def invite_user(
    data: InviteUserRequest,
    session: UserSession = Depends(can_invite),
    db: Session = Depends(get_db),
):
    """Create a confirmed staff user and record their dashboard role."""
    try:
        user = await auth_service.create_confirmed_user(
            normalize_email(data.email),
            data.password,
            name=data.name,
            role=data.role,
        )
    except ExternalServiceError as e:
        raise _provider_error(e)

    user_id = user.get("id")
    if user_id:
        role_service.set_role(db, UUID(user_id), data.role)
    logger.info("User %s invited by %s as %s", user_id, session.user_id, data.role.value)
    return AuthUserResponse(user=user, message="Usuario invitado")


# =============================================================================
# Session Endpoints
# =============================================================================

@router.post(
    "/password",
    response_model=AuthUserResponse,
    dependencies=[Depends(require_csrf_header)],
)
async def set_password(request: Request, data: PasswordUpdateRequest):
    """Set a new password for the signed-in user (after recovery or invite)."""
    token = get_access_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        user = await auth_service.update_password(token, data.password)
    except ExternalServiceError as e:
        raise _provider_error(e)
    return AuthUserResponse(user=user, message="Contraseña actualizada")


@router.post("/logout", dependencies=[Depends(require_csrf_header)])
async def logout(request: Request, response: Response):
    """
    Revoke the provider session and clear the cookie.

    The cookie is cleared even when the provider call fails.
    """
    token = get_access_token(request)
    if token:
        try:
            await auth_service.logout(token)
        except ExternalServiceError as e:
            logger.warning("Provider logout failed: %s", e.message)
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"status": "logged_out"}


@router.get("/me", response_model=MeResponse)
def get_me(session: UserSession = Depends(get_current_session)) -> MeResponse:
    """Current user and dashboard role, used to bootstrap the dashboard."""
    return MeResponse(
        user_id=session.user_id,
        email=session.email,
        display_name=session.display_name,
        role=session.role,
    )
