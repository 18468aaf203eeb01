"""Hearing (audiencia) service."""

import logging
from typing import BinaryIO
from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.enums import DocumentType, TimelineAction
from asme.db.models import Caso, CasoAudiencia, CasoDocumento
from asme.schemas.case import HearingCreate, HearingUpdate
from asme.services import case_document_service, timeline_service

logger = logging.getLogger(__name__)


def list_all_hearings(db: Session) -> list[CasoAudiencia]:
    """Every hearing, soonest first (agenda view)."""
    return db.query(CasoAudiencia).order_by(CasoAudiencia.fecha.asc()).all()


def list_hearings_for_case(db: Session, caso_id: UUID) -> list[CasoAudiencia]:
    return (
        db.query(CasoAudiencia)
        .filter(CasoAudiencia.caso_id == caso_id)
        .order_by(CasoAudiencia.fecha.asc())
        .all()
    )


def get_hearing(db: Session, audiencia_id: UUID) -> CasoAudiencia | None:
    return db.query(CasoAudiencia).filter(CasoAudiencia.id == audiencia_id).first()


def create_hearing(
    db: Session,
    caso: Caso,
    data: HearingCreate,
    *,
    auto_name: str,
    auto_body: bytes | BinaryIO,
    auto_content_type: str | None,
    auto_size: int | None,
    user_id: UUID | None = None,
) -> CasoAudiencia:
    """
    Schedule a hearing with its mandatory AUTO (court order) document.

    The document is linked to the hearing; both are written in one
    transaction.
    """
    if not auto_name:
        raise ValueError("El AUTO es obligatorio para crear una audiencia.")

    hearing = CasoAudiencia(
        caso_id=caso.id,
        fecha=data.fecha,
        tipo=data.tipo.strip(),
        sala=(data.sala or "").strip() or None,
        estatus=data.estatus.value,
        notas=(data.notas or "").strip() or None,
    )
    db.add(hearing)
    db.flush()

    storage_path = None
    try:
        timeline_service.log_timeline(
            db,
            caso.id,
            TimelineAction.CREATE_HEARING,
            f"Audiencia programada: {hearing.tipo}",
            user_id,
            commit=False,
        )
        document = case_document_service.upload_document(
            db,
            caso.id,
            file_name=auto_name,
            body=auto_body,
            content_type=auto_content_type,
            file_size=auto_size,
            document_type=DocumentType.AUTO,
            audiencia_id=hearing.id,
            description=f"AUTO para audiencia: {hearing.tipo}",
            user_id=user_id,
            commit=False,
        )
        storage_path = document.storage_path
        db.commit()
    except Exception:
        db.rollback()
        if storage_path:
            logger.warning("Hearing insert failed; removing %s", storage_path)
            case_document_service.delete_objects([storage_path])
        raise

    db.refresh(hearing)
    logger.info("Hearing %s created for case %s", hearing.id, caso.id)
    return hearing


def update_hearing(
    db: Session,
    hearing: CasoAudiencia,
    data: HearingUpdate,
    user_id: UUID | None = None,
) -> CasoAudiencia:
    for field, value in data.model_dump(exclude_unset=True).items():
        if hasattr(value, "value"):
            value = value.value
        setattr(hearing, field, value)
    timeline_service.log_timeline(
        db,
        hearing.caso_id,
        TimelineAction.UPDATE_HEARING,
        "Audiencia actualizada",
        user_id,
        commit=False,
    )
    db.commit()
    db.refresh(hearing)
    return hearing


def delete_hearing(db: Session, hearing: CasoAudiencia, user_id: UUID | None = None) -> None:
    """Delete the hearing; its documents stay on the case, unlinked."""
    caso_id = hearing.caso_id
    db.query(CasoDocumento).filter(CasoDocumento.audiencia_id == hearing.id).update(
        {CasoDocumento.audiencia_id: None}, synchronize_session=False
    )
    db.delete(hearing)
    timeline_service.log_timeline(
        db, caso_id, TimelineAction.DELETE_HEARING, "Audiencia eliminada", user_id, commit=False
    )
    db.commit()
