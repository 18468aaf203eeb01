"""Client history - append-only event log for CRM clients."""

from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.enums import ClientHistoryEvent
from asme.db.models import ClientHistory


def log_event(
    db: Session,
    client_id: UUID,
    event_type: ClientHistoryEvent,
    description: str,
    metadata: dict | None = None,
    *,
    commit: bool = True,
) -> ClientHistory:
    """Append one event. With commit=False the caller owns the transaction."""
    entry = ClientHistory(
        client_id=client_id,
        event_type=event_type.value,
        description=description,
        event_metadata=metadata or None,
    )
    db.add(entry)
    if commit:
        db.commit()
        db.refresh(entry)
    else:
        db.flush()
    return entry


def list_history(db: Session, client_id: UUID) -> list[ClientHistory]:
    """Events newest first."""
    return (
        db.query(ClientHistory)
        .filter(ClientHistory.client_id == client_id)
        .order_by(ClientHistory.created_at.desc())
        .all()
    )


# =============================================================================
# Event helpers
# =============================================================================

def log_client_created(db: Session, client_id: UUID, company_name: str, *, commit: bool = True):
    return log_event(
        db,
        client_id,
        ClientHistoryEvent.CREATED,
        f'Cliente "{company_name}" fue creado',
        {"company_name": company_name},
        commit=commit,
    )


def log_status_change(
    db: Session, client_id: UUID, old_status: str, new_status: str, *, commit: bool = True
):
    return log_event(
        db,
        client_id,
        ClientHistoryEvent.STATUS_CHANGED,
        f'Estado cambió de "{old_status}" a "{new_status}"',
        {"old_status": old_status, "new_status": new_status},
        commit=commit,
    )


def log_client_archived(db: Session, client_id: UUID, *, commit: bool = True):
    return log_event(
        db, client_id, ClientHistoryEvent.ARCHIVED, "Cliente fue archivado", commit=commit
    )


def log_client_unarchived(db: Session, client_id: UUID, *, commit: bool = True):
    return log_event(
        db, client_id, ClientHistoryEvent.UNARCHIVED, "Cliente fue restaurado", commit=commit
    )


def log_notes_updated(db: Session, client_id: UUID, *, commit: bool = True):
    return log_event(
        db, client_id, ClientHistoryEvent.NOTES_UPDATED, "Notas actualizadas", commit=commit
    )


def log_campaign_sent(
    db: Session, client_id: UUID, campaign_name: str, campaign_id: UUID, *, commit: bool = True
):
    return log_event(
        db,
        client_id,
        ClientHistoryEvent.CAMPAIGN_SENT,
        f'Campaña "{campaign_name}" fue enviada',
        {"campaign_id": str(campaign_id), "campaign_name": campaign_name},
        commit=commit,
    )
