"""Staff role lookup model."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from asme.db.base import Base, utcnow


class UserRole(Base):
    """
    Role assignment for an auth-provider user.

    The user itself lives in the hosted auth service; this table only maps
    its id to one of the dashboard roles.
    """

    __tablename__ = "user_roles"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
