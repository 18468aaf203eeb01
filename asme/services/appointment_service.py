"""Appointment service - booking requests and their admin review.

Handles:
- Public booking creation (service catalogue per source)
- Paginated listing for the dashboard agenda
- Approval with exact-slot conflict detection, rejection, deletion
"""

import logging
from datetime import date, time
from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.enums import (
    DEFAULT_APPOINTMENT_STATUS,
    SERVICES_BY_SOURCE,
    AppointmentAction,
    AppointmentSource,
    AppointmentStatus,
)
from asme.db.models import Appointment
from asme.schemas.appointment import AppointmentAdminAction, AppointmentCreate
from asme.utils.pagination import PaginationParams, paginate_query

logger = logging.getLogger(__name__)

SOURCE_DISPLAY_NAMES = {
    AppointmentSource.ASME: "ASME Consultoría",
    AppointmentSource.ASME_ABOGADOS: "ASME Abogados",
}


class AppointmentConflictError(ValueError):
    """Another approved appointment already holds the requested slot."""


# =============================================================================
# Validation
# =============================================================================

def validate_service(source: str | None, service_label: str | None) -> None:
    """
    Check the service label belongs to the source's catalogue.

    Unknown sources are accepted as long as both values are present; only
    the two known brands have a fixed catalogue.
    """
    if not source or not service_label:
        raise ValueError("Missing source or service_label")

    try:
        known_source = AppointmentSource(source)
    except ValueError:
        return

    if service_label not in SERVICES_BY_SOURCE[known_source]:
        raise ValueError(f"Servicio no válido para {SOURCE_DISPLAY_NAMES[known_source]}.")


# =============================================================================
# CRUD
# =============================================================================

def create_appointment(db: Session, data: AppointmentCreate) -> Appointment:
    """Insert a new booking request. Status is always pending."""
    validate_service(data.source, data.service_label)

    appointment = Appointment(
        **data.model_dump(),
        status=DEFAULT_APPOINTMENT_STATUS.value,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s created (source=%s)", appointment.id, appointment.source)
    return appointment


def get_appointment(db: Session, appointment_id: UUID) -> Appointment | None:
    return db.query(Appointment).filter(Appointment.id == appointment_id).first()


def list_appointments(
    db: Session,
    pagination: PaginationParams | None = None,
) -> tuple[list[Appointment], int]:
    """
    List appointments newest first.

    With no pagination every row is returned.

    Returns:
        (appointments, total_count)
    """
    query = db.query(Appointment).order_by(Appointment.created_at.desc())
    if pagination is None:
        items = query.all()
        return items, len(items)
    return paginate_query(query, pagination)


def delete_appointment(db: Session, appointment: Appointment) -> None:
    db.delete(appointment)
    db.commit()


# =============================================================================
# Admin review
# =============================================================================

def find_slot_conflicts(
    db: Session,
    assigned_date: date,
    assigned_time: time,
    exclude_id: UUID,
) -> list[UUID]:
    """IDs of other approved appointments at exactly this date and time."""
    rows = (
        db.query(Appointment.id)
        .filter(
            Appointment.assigned_date == assigned_date,
            Appointment.assigned_time == assigned_time,
            Appointment.status == AppointmentStatus.APPROVED.value,
            Appointment.id != exclude_id,
        )
        .all()
    )
    return [row.id for row in rows]


def approve_appointment(
    db: Session,
    appointment: Appointment,
    assigned_date: date | None,
    assigned_time: time | None,
    admin_notes: str | None = None,
) -> Appointment:
    """
    Approve an appointment for an exact slot.

    Only an identical date+time on another approved appointment counts as a
    conflict; there are no durations. Check-then-write without a lock.
    """
    if not assigned_date or not assigned_time:
        raise ValueError("Fecha y hora requeridas para aprobar.")

    if find_slot_conflicts(db, assigned_date, assigned_time, appointment.id):
        raise AppointmentConflictError("Ya existe una cita aprobada en ese horario.")

    appointment.status = AppointmentStatus.APPROVED.value
    appointment.assigned_date = assigned_date
    appointment.assigned_time = assigned_time
    appointment.admin_notes = admin_notes or None
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s approved for %s %s", appointment.id, assigned_date, assigned_time)
    return appointment


def reject_appointment(
    db: Session,
    appointment: Appointment,
    admin_notes: str | None = None,
) -> Appointment:
    """Reject and release any assigned slot."""
    appointment.status = AppointmentStatus.REJECTED.value
    appointment.admin_notes = admin_notes or None
    appointment.assigned_date = None
    appointment.assigned_time = None
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s rejected", appointment.id)
    return appointment


def apply_admin_action(db: Session, data: AppointmentAdminAction) -> Appointment | None:
    """
    Dispatch an approve/reject request.

    Returns None when the appointment does not exist.

    Raises:
        ValueError: Missing id/action, unknown action, or missing slot on approve
        AppointmentConflictError: Slot already taken
    """
    if not data.id or not data.action:
        raise ValueError("Missing id or action")
    if not AppointmentAction.has_value(data.action):
        raise ValueError("Invalid action")

    appointment = get_appointment(db, data.id)
    if not appointment:
        return None

    if AppointmentAction(data.action) == AppointmentAction.REJECT:
        return reject_appointment(db, appointment, data.admin_notes)
    return approve_appointment(
        db, appointment, data.assigned_date, data.assigned_time, data.admin_notes
    )
