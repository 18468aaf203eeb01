"""Appointment schemas - Pydantic models for appointments API."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class AppointmentCreate(BaseModel):
    """Public booking form submission. Status is always set server-side."""
    source: str | None = Field(None, max_length=50)
    service_key: str | None = Field(None, max_length=100)
    service_label: str | None = Field(None, max_length=255)
    customer_name: str | None = Field(None, max_length=255)
    customer_email: EmailStr | None = None
    customer_phone: str | None = Field(None, max_length=50)
    participants: str | None = Field(None, max_length=50)
    message: str | None = Field(None, max_length=5000)
    requested_date: date | None = None
    requested_time: time | None = None


class AppointmentAdminAction(BaseModel):
    """
    Approve or reject an appointment.

    id/action are optional here so a missing value gets the same 400 as an
    invalid one instead of a validation 422.
    """
    id: UUID | None = None
    action: str | None = None
    assigned_date: date | None = None
    assigned_time: time | None = None
    admin_notes: str | None = Field(None, max_length=5000)


class AppointmentRead(BaseModel):
    id: UUID
    source: str
    service_key: str | None
    service_label: str
    customer_name: str | None
    customer_email: str | None
    customer_phone: str | None
    participants: str | None
    message: str | None
    requested_date: date | None
    requested_time: time | None
    status: str
    assigned_date: date | None
    assigned_time: time | None
    admin_notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class AppointmentListResponse(BaseModel):
    """Paginated list; field names match the dashboard agenda client."""
    data: list[AppointmentRead]
    page: int
    totalPages: int
    limit: int


class SuccessResponse(BaseModel):
    success: bool = True
