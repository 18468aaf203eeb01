"""Marketing site content models: service cards, gallery images, team."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from asme.db.base import Base, utcnow


class ServiceCard(Base):
    """
    Image row driving a marketing page block.

    content_type selects the feed (service card, page gallery, legal
    service hero); page_slug/section locate it on the site.
    """

    __tablename__ = "service_cards"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    content_type: Mapped[str] = mapped_column(String(30), nullable=False)
    service_slug: Mapped[str | None] = mapped_column(String(100), nullable=True)
    page_slug: Mapped[str] = mapped_column(String(100), nullable=False, default="main")
    section: Mapped[str] = mapped_column(String(100), nullable=False, default="main")
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("TRUE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )


class TeamMember(Base):
    """Staff profile shown on the "Nosotros" page."""

    __tablename__ = "team_members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("TRUE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )

    images: Mapped[list["TeamMemberImage"]] = relationship(
        back_populates="team_member",
        order_by="TeamMemberImage.order",
        cascade="all, delete-orphan",
    )


class TeamMemberImage(Base):
    __tablename__ = "team_member_images"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    team_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    team_member: Mapped["TeamMember"] = relationship(back_populates="images")
