"""Blog post schemas (shared by the ASME and ASME Abogados collections)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class BlogPostCreate(BaseModel):
    """
    New post. Title is checked in the service so a blank one gets the same
    400 as a missing one.
    """
    title: str | None = Field(None, max_length=500)
    content: str | None = None
    category: str | None = Field(None, max_length=100)
    type: str | None = Field(None, max_length=50)
    featured_image: str | None = Field(None, max_length=1000)
    media_url: str | None = Field(None, max_length=1000)
    media_type: str | None = Field(None, max_length=50)
    slug: str | None = Field(None, max_length=500)


class BlogPostUpdate(BaseModel):
    """Partial update. Omitted fields are left unchanged."""
    title: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = None
    category: str | None = Field(None, max_length=100)
    type: str | None = Field(None, max_length=50)
    featured_image: str | None = Field(None, max_length=1000)
    media_url: str | None = Field(None, max_length=1000)
    media_type: str | None = Field(None, max_length=50)


class BlogPostRead(BaseModel):
    id: UUID
    title: str
    content: str | None
    category: str | None
    type: str | None
    featured_image: str | None
    media_url: str | None
    media_type: str | None
    slug: str
    archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogPostResponse(BaseModel):
    success: bool = True
    data: BlogPostRead
