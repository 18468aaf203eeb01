"""Campaign-related enums."""

from enum import Enum


class CampaignStatus(str, Enum):
    """Status of an email campaign."""

    DRAFT = "draft"
    SENT = "sent"


class CampaignTargetStatus(str, Enum):
    """Delivery status of a campaign target."""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class Segment(str, Enum):
    """Recipient segments for campaigns."""

    ALL = "all"
    ACTIVE = "active"
    PROSPECTS = "prospects"


SEGMENT_LABELS = {
    Segment.ALL: ("Todos los clientes", "Incluye todos los clientes en la base."),
    Segment.ACTIVE: ("Clientes activos", "Clientes con estado 'Activo'."),
    Segment.PROSPECTS: ("Prospectos", "Clientes en seguimiento / preventa."),
}
