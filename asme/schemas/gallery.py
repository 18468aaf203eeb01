"""Schemas for service cards, gallery feeds and team members."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from asme.db.enums import ServiceCardContentType


# =============================================================================
# Service cards
# =============================================================================

class ServiceCardCreate(BaseModel):
    content_type: ServiceCardContentType
    service_slug: str | None = Field(None, max_length=100)
    page_slug: str = Field("main", min_length=1, max_length=100)
    section: str = Field("main", min_length=1, max_length=100)
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    order_index: int = 0
    is_active: bool = True


class ServiceCardUpdate(BaseModel):
    content_type: ServiceCardContentType | None = None
    service_slug: str | None = Field(None, max_length=100)
    page_slug: str | None = Field(None, min_length=1, max_length=100)
    section: str | None = Field(None, min_length=1, max_length=100)
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    order_index: int | None = None
    is_active: bool | None = None


class ServiceCardRead(BaseModel):
    id: UUID
    content_type: str
    service_slug: str | None
    page_slug: str
    section: str
    title: str | None
    description: str | None
    image_url: str | None
    order_index: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ServiceCardImageResponse(BaseModel):
    success: bool = True
    imageUrl: str


# =============================================================================
# Team
# =============================================================================

class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    bio: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    linkedin_url: str | None = Field(None, max_length=1000)
    email: str | None = Field(None, max_length=255)
    order: int = 0
    active: bool = True


class TeamMemberUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    position: str | None = Field(None, min_length=1, max_length=255)
    bio: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    linkedin_url: str | None = Field(None, max_length=1000)
    email: str | None = Field(None, max_length=255)
    order: int | None = None
    active: bool | None = None


class TeamMemberImageCreate(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=1000)
    order: int | None = Field(None, ge=0)


class TeamMemberImageReorder(BaseModel):
    order: int = Field(..., ge=0)


class TeamMemberImageRead(BaseModel):
    id: UUID
    team_member_id: UUID
    image_url: str
    order: int

    model_config = {"from_attributes": True}


class TeamMemberRead(BaseModel):
    id: UUID
    name: str
    position: str
    bio: str | None
    image_url: str | None
    linkedin_url: str | None
    email: str | None
    order: int
    active: bool
    created_at: datetime
    images: list[TeamMemberImageRead] = []

    model_config = {"from_attributes": True}
