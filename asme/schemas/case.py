"""Pydantic schemas for legal cases (casos) and their child records."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from asme.db.enums import CaseStatus, CaseType, HearingStatus


def _reject_null(value):
    if value is None:
        raise ValueError("cannot be null")
    return value


# =============================================================================
# Cases
# =============================================================================

class CaseBase(BaseModel):
    case_number: str = Field(..., min_length=1, max_length=100)
    client_name: str = Field(..., min_length=1, max_length=255)
    client_phone: str | None = Field(None, max_length=50)
    client_email: EmailStr | None = None
    case_type: CaseType
    status: CaseStatus = CaseStatus.ABIERTO
    assigned_to: str = Field(..., min_length=1, max_length=255)
    summary: str | None = None
    next_date: date | None = None


class CaseCreate(CaseBase):
    """Case fields; the mandatory document arrives as a separate multipart file."""


class CaseUpdate(BaseModel):
    """Partial update. Omitted fields are left unchanged."""
    case_number: str | None = Field(None, min_length=1, max_length=100)
    client_name: str | None = Field(None, min_length=1, max_length=255)
    client_phone: str | None = Field(None, max_length=50)
    client_email: EmailStr | None = None
    case_type: CaseType | None = None
    status: CaseStatus | None = None
    assigned_to: str | None = Field(None, min_length=1, max_length=255)
    summary: str | None = None
    next_date: date | None = None

    # Required columns may be omitted but not cleared
    @field_validator("case_number", "client_name", "case_type", "status", "assigned_to")
    @classmethod
    def required_not_null(cls, v):
        return _reject_null(v)


class CaseRead(BaseModel):
    id: UUID
    case_number: str
    client_name: str
    client_phone: str | None
    client_email: str | None
    case_type: str
    status: str
    assigned_to: str
    summary: str | None
    last_update: datetime
    next_date: date | None
    created_at: datetime
    is_archived: bool = False

    model_config = {"from_attributes": True}

    @field_validator("is_archived", mode="before")
    @classmethod
    def null_is_not_archived(cls, v):
        return bool(v)


# =============================================================================
# Hearings (audiencias)
# =============================================================================

class HearingCreate(BaseModel):
    fecha: datetime
    tipo: str = Field(..., min_length=1, max_length=255)
    sala: str | None = Field(None, max_length=255)
    estatus: HearingStatus = HearingStatus.PROGRAMADA
    notas: str | None = None


class HearingUpdate(BaseModel):
    fecha: datetime | None = None
    tipo: str | None = Field(None, min_length=1, max_length=255)
    sala: str | None = Field(None, max_length=255)
    estatus: HearingStatus | None = None
    notas: str | None = None

    @field_validator("fecha", "tipo", "estatus")
    @classmethod
    def required_not_null(cls, v):
        return _reject_null(v)


class HearingRead(BaseModel):
    id: UUID
    caso_id: UUID
    fecha: datetime
    tipo: str
    sala: str | None
    estatus: str
    notas: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Notes, documents, timeline
# =============================================================================

class CaseNoteCreate(BaseModel):
    contenido: str = Field(..., min_length=1, max_length=10000)


class CaseNoteRead(BaseModel):
    id: UUID
    caso_id: UUID
    contenido: str
    created_at: datetime

    model_config = {"from_attributes": True}


class DocumentRead(BaseModel):
    """Document metadata with a presigned download URL (valid for one hour)."""
    id: UUID
    caso_id: UUID
    file_name: str
    storage_path: str
    file_size: int | None
    mime_type: str | None
    document_type: str | None
    audiencia_id: UUID | None
    description: str | None
    created_at: datetime
    download_url: str | None = None


class TimelineRead(BaseModel):
    id: UUID
    caso_id: UUID
    action_type: str
    message: str
    user_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}
