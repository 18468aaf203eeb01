"""Email campaign schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from asme.db.enums import Segment


class CampaignCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=500)
    body: str = Field(..., min_length=1)
    segment: Segment = Segment.ALL


class CampaignUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    subject: str | None = Field(None, min_length=1, max_length=500)
    body: str | None = Field(None, min_length=1)
    segment: Segment | None = None


class CampaignRead(BaseModel):
    id: UUID
    name: str
    subject: str
    body: str
    segment: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CampaignTargetsRequest(BaseModel):
    client_ids: list[UUID] = Field(default_factory=list)


class CampaignTargetRead(BaseModel):
    id: UUID
    campaign_id: UUID
    client_id: UUID | None
    email: str
    status: str
    error: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class SegmentRead(BaseModel):
    id: str
    label: str
    description: str
    count: int


class CampaignSendResult(BaseModel):
    """Outcome of a send: per-target counts."""
    campaign_id: UUID
    total: int
    sent: int
    failed: int
