"""Case (caso) and hearing (audiencia) enums."""

from enum import Enum


class CaseType(str, Enum):
    """Practice area of a case."""

    PENAL = "penal"
    FAMILIAR = "familiar"
    CIVIL = "civil"
    AMPAROS = "amparos"


class CaseStatus(str, Enum):
    """Working status of a case."""

    ABIERTO = "abierto"
    EN_PROCESO = "en_proceso"
    PENDIENTE_DOCS = "pendiente_docs"
    CERRADO = "cerrado"


class HearingStatus(str, Enum):
    """Status of a hearing."""

    PROGRAMADA = "programada"
    CELEBRADA = "celebrada"
    DIFERIDA = "diferida"
    CANCELADA = "cancelada"


class DocumentType(str, Enum):
    """Kinds of case documents. AUTO is the court order attached to a hearing."""

    AUTO = "AUTO"
    EVIDENCE = "EVIDENCE"
    CONTRACT = "CONTRACT"
    OTHER = "OTHER"


class TimelineAction(str, Enum):
    """Timeline action types written by case services."""

    CREATE_CASE = "create_case"
    UPDATE_CASE = "update_case"
    ARCHIVE_CASE = "archive_case"
    UNARCHIVE_CASE = "unarchive_case"
    CREATE_HEARING = "create_hearing"
    UPDATE_HEARING = "update_hearing"
    DELETE_HEARING = "delete_hearing"
    ADD_NOTE = "add_note"
    DELETE_NOTE = "delete_note"
    ADD_DOC = "add_doc"
    DELETE_DOC = "delete_doc"


DEFAULT_CASE_STATUS = CaseStatus.ABIERTO
DEFAULT_HEARING_STATUS = HearingStatus.PROGRAMADA
