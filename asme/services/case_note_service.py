"""Case notes."""

from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.enums import TimelineAction
from asme.db.models import CasoNota
from asme.services import timeline_service
from asme.utils.sanitize import sanitize_html


def list_notes(db: Session, caso_id: UUID) -> list[CasoNota]:
    return (
        db.query(CasoNota)
        .filter(CasoNota.caso_id == caso_id)
        .order_by(CasoNota.created_at.desc())
        .all()
    )


def get_note(db: Session, note_id: UUID) -> CasoNota | None:
    return db.query(CasoNota).filter(CasoNota.id == note_id).first()


def create_note(
    db: Session,
    caso_id: UUID,
    content: str,
    user_id: UUID | None = None,
    *,
    commit: bool = True,
) -> CasoNota:
    """Add a sanitized note and log it on the timeline."""
    clean_content = sanitize_html(content).strip()
    if not clean_content:
        raise ValueError("La nota no puede estar vacía.")

    note = CasoNota(caso_id=caso_id, contenido=clean_content)
    db.add(note)
    db.flush()
    timeline_service.log_timeline(
        db, caso_id, TimelineAction.ADD_NOTE, "Nota agregada", user_id, commit=False
    )
    if commit:
        db.commit()
        db.refresh(note)
    return note


def delete_note(db: Session, note: CasoNota, user_id: UUID | None = None) -> None:
    caso_id = note.caso_id
    db.delete(note)
    timeline_service.log_timeline(
        db, caso_id, TimelineAction.DELETE_NOTE, "Nota eliminada", user_id, commit=False
    )
    db.commit()
