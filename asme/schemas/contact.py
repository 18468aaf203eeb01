"""Schemas for the public contact/booking notification form."""

from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    """
    Contact or booking notification.

    source selects the template: "contacto" (general contact), "asme"
    (consulting service request) or "asme_abogados" (legal appointment).
    """
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    message: str | None = Field(None, max_length=5000)
    service: str | None = Field(None, max_length=255)
    participants: str | int | None = None
    source: Literal["contacto", "asme", "asme_abogados"] = "contacto"


class ContactResponse(BaseModel):
    success: bool = True
    id: str | None = None
