"""CRM client enums."""

from enum import Enum


class ClientStatus(str, Enum):
    """Client pipeline status (values are stored in Spanish)."""

    ACTIVO = "Activo"
    PROSPECTO = "Prospecto"
    INACTIVO = "Inactivo"
    ARCHIVADO = "Archivado"


class ClientSort(str, Enum):
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    CREATED_ASC = "created_asc"
    CREATED_DESC = "created_desc"


class ClientHistoryEvent(str, Enum):
    """Event types in the append-only client history."""

    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    ARCHIVED = "archived"
    UNARCHIVED = "unarchived"
    NOTES_UPDATED = "notes_updated"
    CAMPAIGN_SENT = "campaign_sent"
