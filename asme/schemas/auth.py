"""Authentication-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from asme.db.enums import OtpType, Role


class UserSession(BaseModel):
    """
    Session context for authenticated requests.

    Built by get_current_session from the auth provider's user record and
    the user_roles table. role is None for users with no dashboard role.
    """
    user_id: UUID
    email: str
    role: Role | None = None
    display_name: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """Admin-created account, confirmed immediately."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str | None = None


class InviteUserRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str | None = None
    role: Role = Role.ADMIN


class VerifyRequest(BaseModel):
    email: EmailStr
    token: str = Field(..., min_length=1)
    type: OtpType = OtpType.SIGNUP


class AcceptInviteRequest(BaseModel):
    token: str = Field(..., min_length=1, description="token_hash from the invite link")


class RecoverRequest(BaseModel):
    email: EmailStr


class PasswordUpdateRequest(BaseModel):
    password: str = Field(..., min_length=6)


class AuthSessionResponse(BaseModel):
    """Provider session returned to the dashboard after login/verify."""
    success: bool = True
    session: dict | None = None
    user: dict | None = None


class AuthUserResponse(BaseModel):
    success: bool = True
    user: dict | None = None
    message: str | None = None


class MeResponse(BaseModel):
    """Response schema for GET /api/auth/me."""
    user_id: UUID
    email: str
    display_name: str | None
    role: Role | None
