"""Appointment request model."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time

from sqlalchemy import Date, Index, String, Text, Time, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from asme.db.base import Base, utcnow
from asme.db.enums import DEFAULT_APPOINTMENT_STATUS


class Appointment(Base):
    """
    Booking request submitted from the public ASME / ASME Abogados forms.

    Created as pending; staff either approve it with an assigned date/time
    or reject it. Deleting is a plain row delete.
    """

    __tablename__ = "appointments"
    __table_args__ = (
        Index("idx_appointments_slot", "assigned_date", "assigned_time", "status"),
        Index("idx_appointments_created", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Request origin
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    service_key: Mapped[str | None] = mapped_column(String(100), nullable=True)
    service_label: Mapped[str] = mapped_column(String(255), nullable=False)

    # Customer
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    participants: Mapped[str | None] = mapped_column(String(50), nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    requested_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    requested_time: Mapped[time | None] = mapped_column(Time, nullable=True)

    # Admin review
    status: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_APPOINTMENT_STATUS.value,
        server_default=text(f"'{DEFAULT_APPOINTMENT_STATUS.value}'"),
        nullable=False,
    )
    assigned_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    assigned_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
