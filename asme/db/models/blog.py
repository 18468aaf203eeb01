"""Blog post models (ASME and ASME Abogados collections)."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from asme.db.base import Base, utcnow


class _BlogColumns:
    """Columns shared by both blog tables."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    featured_image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    media_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    media_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    slug: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    archived: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("FALSE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )


class BlogPost(_BlogColumns, Base):
    """Post on the ASME (consulting) blog."""

    __tablename__ = "blogs"


class LegalBlogPost(_BlogColumns, Base):
    """Post on the ASME Abogados (legal) blog."""

    __tablename__ = "legal_blogs"
