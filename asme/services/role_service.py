"""Dashboard role resolution.

Resolution order: user_roles row > provider metadata (is_admin, role) > None
"""

import logging
import uuid

from sqlalchemy.orm import Session

from asme.db.enums import Role
from asme.db.models import UserRole

logger = logging.getLogger(__name__)


def get_role_row(db: Session, user_id: uuid.UUID) -> UserRole | None:
    return db.query(UserRole).filter(UserRole.user_id == user_id).first()


def role_from_metadata(metadata: dict | None) -> Role | None:
    """Fallback role from the auth user's user_metadata."""
    if not metadata:
        return None
    if metadata.get("is_admin") is True:
        return Role.ADMIN
    raw = metadata.get("role")
    if isinstance(raw, str) and Role.has_value(raw):
        return Role(raw)
    return None


def resolve_role(db: Session, user_id: uuid.UUID, metadata: dict | None = None) -> Role | None:
    """Return the user's dashboard role, or None if they have none."""
    row = get_role_row(db, user_id)
    if row:
        if Role.has_value(row.role):
            return Role(row.role)
        logger.warning("Unknown role %r in user_roles for %s", row.role, user_id)
    return role_from_metadata(metadata)


def set_role(db: Session, user_id: uuid.UUID, role: Role) -> UserRole:
    """Insert or update the user_roles row."""
    row = get_role_row(db, user_id)
    if row:
        row.role = role.value
    else:
        row = UserRole(user_id=user_id, role=role.value)
        db.add(row)
    db.commit()
    db.refresh(row)
    return row
