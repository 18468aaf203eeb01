"""CRM client, contact and history schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from asme.db.enums import ClientStatus


class ClientCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    contact_name: str | None = Field(None, max_length=255)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, max_length=50)
    sector: str | None = Field(None, max_length=100)
    status: ClientStatus = ClientStatus.PROSPECTO
    notes: str | None = None


class ClientUpdate(BaseModel):
    """Partial update. Archiving goes through its own endpoint."""
    company_name: str | None = Field(None, min_length=1, max_length=255)
    contact_name: str | None = Field(None, max_length=255)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, max_length=50)
    sector: str | None = Field(None, max_length=100)
    status: ClientStatus | None = None


class ClientNotesUpdate(BaseModel):
    notes: str = ""


class ClientRead(BaseModel):
    id: UUID
    company_name: str
    contact_name: str | None
    contact_email: str | None
    contact_phone: str | None
    sector: str | None
    status: str
    notes: str | None
    archived_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientListResponse(BaseModel):
    data: list[ClientRead]
    total: int
    page: int
    totalPages: int
    limit: int


class ClientContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    position: str | None = Field(None, max_length=255)


class ClientContactRead(BaseModel):
    id: UUID
    client_id: UUID
    name: str
    email: str | None
    phone: str | None
    position: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ClientHistoryRead(BaseModel):
    id: UUID
    client_id: UUID
    event_type: str
    description: str
    metadata: dict[str, Any] | None = Field(None, validation_alias="event_metadata")
    created_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}
