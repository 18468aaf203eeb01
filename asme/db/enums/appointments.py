"""Appointment and booking enums."""

from enum import Enum


class AppointmentSource(str, Enum):
    """Which brand's booking form produced the request."""

    ASME = "asme"
    ASME_ABOGADOS = "asme_abogados"


class AppointmentStatus(str, Enum):
    """
    Appointment lifecycle status.

    Flow: pending → approved
              ↘ rejected
    """

    PENDING = "pending"  # Awaiting admin review
    APPROVED = "approved"  # Date/time assigned
    REJECTED = "rejected"  # Declined; assigned slot cleared


class AppointmentAction(str, Enum):
    """Admin actions on a pending appointment."""

    APPROVE = "approve"
    REJECT = "reject"

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_


# Service catalogue accepted per booking source
ASME_SERVICES = ("Protección Civil", "Capacitación", "Defensa Legal")
ABOGADOS_SERVICES = ("Litigio Familiar", "Litigio Penal", "Litigio Civil", "Amparos")

SERVICES_BY_SOURCE = {
    AppointmentSource.ASME: ASME_SERVICES,
    AppointmentSource.ASME_ABOGADOS: ABOGADOS_SERVICES,
}

# Default appointment status
DEFAULT_APPOINTMENT_STATUS = AppointmentStatus.PENDING
