"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    Staff roles stored in the user_roles lookup table.

    - ADMIN: Full dashboard access, can invite users
    - LAWYER: Manages cases and hearings
    - ASSISTANT: Manages cases and hearings on behalf of lawyers
    - VIEWER: Read-only dashboard access
    """

    ADMIN = "admin"
    LAWYER = "lawyer"
    ASSISTANT = "assistant"
    VIEWER = "viewer"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class OtpType(str, Enum):
    """OTP verification types accepted by the auth provider."""

    SIGNUP = "signup"
    INVITE = "invite"
    MAGICLINK = "magiclink"
    RECOVERY = "recovery"
    EMAIL_CHANGE = "email_change"
    EMAIL = "email"
