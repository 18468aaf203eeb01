"""Case service - business logic for legal cases (casos)."""

import logging
from typing import BinaryIO
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from asme.db.base import utcnow
from asme.db.enums import DocumentType, TimelineAction
from asme.db.models import Caso, CasoAudiencia, CasoDocumento, CasoNota, CasoTimeline
from asme.schemas.case import CaseCreate, CaseUpdate
from asme.services import case_document_service, case_note_service, timeline_service
from asme.utils.sanitize import sanitize_html

logger = logging.getLogger(__name__)

# Human-readable field names for update_case timeline messages
FIELD_LABELS = {
    "case_number": "número de caso",
    "client_name": "cliente",
    "client_phone": "teléfono",
    "client_email": "email",
    "case_type": "tipo de caso",
    "status": "estatus",
    "assigned_to": "asignado a",
    "summary": "resumen",
    "next_date": "próxima fecha",
}


def list_cases(db: Session, include_archived: bool = False) -> list[Caso]:
    """Cases ordered by last activity; archived ones only on request."""
    query = db.query(Caso)
    if not include_archived:
        query = query.filter(or_(Caso.is_archived.is_(None), Caso.is_archived.is_(False)))
    return query.order_by(Caso.last_update.desc()).all()


def get_case(db: Session, caso_id: UUID) -> Caso | None:
    return db.query(Caso).filter(Caso.id == caso_id).first()


def create_case(
    db: Session,
    data: CaseCreate,
    *,
    document_name: str,
    document_body: bytes | BinaryIO,
    document_content_type: str | None,
    document_size: int | None,
    initial_note: str | None = None,
    user_id: UUID | None = None,
) -> Caso:
    """
    Create a case together with its mandatory AUTO document.

    Everything is written in one transaction: if the document cannot be
    stored, no case row is left behind, and if a later step fails the
    stored object is removed again.
    """
    if not document_name:
        raise ValueError("El documento es obligatorio para crear un caso.")
    has_note = bool(initial_note and initial_note.strip())
    if has_note and not sanitize_html(initial_note).strip():
        raise ValueError("La nota no puede estar vacía.")

    values = data.model_dump()
    values["case_type"] = data.case_type.value
    values["status"] = data.status.value
    caso = Caso(**values, last_update=utcnow())
    db.add(caso)
    db.flush()

    storage_path = None
    try:
        timeline_service.log_timeline(
            db,
            caso.id,
            TimelineAction.CREATE_CASE,
            f"Caso creado: {caso.case_number}",
            user_id,
            commit=False,
        )
        document = case_document_service.upload_document(
            db,
            caso.id,
            file_name=document_name,
            body=document_body,
            content_type=document_content_type,
            file_size=document_size,
            document_type=DocumentType.AUTO,
            user_id=user_id,
            commit=False,
        )
        storage_path = document.storage_path
        if has_note:
            case_note_service.create_note(db, caso.id, initial_note, user_id, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        if storage_path:
            logger.warning("Case insert failed; removing %s", storage_path)
            case_document_service.delete_objects([storage_path])
        raise

    db.refresh(caso)
    logger.info("Case %s created", caso.id)
    return caso


def update_case(
    db: Session,
    caso: Caso,
    data: CaseUpdate,
    user_id: UUID | None = None,
) -> Caso:
    """Apply a partial update; last_update is always bumped."""
    changes = data.model_dump(exclude_unset=True)
    changed_fields = []
    for field, value in changes.items():
        if hasattr(value, "value"):
            value = value.value
        if getattr(caso, field) != value:
            setattr(caso, field, value)
            changed_fields.append(FIELD_LABELS.get(field, field))

    caso.last_update = utcnow()

    if len(changed_fields) == 1:
        message = f"Campo actualizado: {changed_fields[0]}"
    elif changed_fields:
        message = f"Campos actualizados: {', '.join(changed_fields)}"
    else:
        message = "Caso actualizado"
    timeline_service.log_timeline(
        db, caso.id, TimelineAction.UPDATE_CASE, message, user_id, commit=False
    )
    db.commit()
    db.refresh(caso)
    return caso


def set_archived(db: Session, caso: Caso, archived: bool, user_id: UUID | None = None) -> Caso:
    """Archive (soft delete) or restore a case."""
    caso.is_archived = archived
    caso.last_update = utcnow()
    action = TimelineAction.ARCHIVE_CASE if archived else TimelineAction.UNARCHIVE_CASE
    message = "Caso archivado" if archived else "Caso restaurado"
    timeline_service.log_timeline(db, caso.id, action, message, user_id, commit=False)
    db.commit()
    db.refresh(caso)
    return caso


def delete_case(db: Session, caso: Caso) -> None:
    """
    Permanently delete a case and everything attached to it.

    Order: hearings, notes, timeline, document objects, document rows,
    then the case. Storage is cleared before rows so a storage failure
    leaves the case intact and retryable.
    """
    caso_id = caso.id
    storage_paths = [
        row.storage_path
        for row in db.query(CasoDocumento.storage_path).filter(CasoDocumento.caso_id == caso_id)
    ]
    case_document_service.delete_objects(storage_paths)

    db.query(CasoDocumento).filter(CasoDocumento.caso_id == caso_id).delete(synchronize_session=False)
    db.query(CasoAudiencia).filter(CasoAudiencia.caso_id == caso_id).delete(synchronize_session=False)
    db.query(CasoNota).filter(CasoNota.caso_id == caso_id).delete(synchronize_session=False)
    db.query(CasoTimeline).filter(CasoTimeline.caso_id == caso_id).delete(synchronize_session=False)
    db.delete(caso)
    db.commit()
    logger.info("Case %s deleted with %s documents", caso_id, len(storage_paths))
