"""Client service - CRM clients and their contacts."""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.base import utcnow
from asme.db.enums import ClientSort, ClientStatus
from asme.db.models import Client, ClientContact
from asme.schemas.client import ClientContactCreate, ClientCreate, ClientUpdate
from asme.services import client_history_service
from asme.utils.normalization import normalize_email, normalize_text
from asme.utils.pagination import PaginationParams, paginate_query

logger = logging.getLogger(__name__)

# Filter value meaning "no filter" in the dashboard dropdowns
ALL_FILTER_VALUE = "todos"


@dataclass
class ClientFilters:
    search: str | None = None
    status: str | None = None
    sector: str | None = None
    sort: ClientSort = ClientSort.NAME_ASC
    show_archived: bool = False


def list_clients(
    db: Session,
    filters: ClientFilters,
    pagination: PaginationParams,
) -> tuple[list[Client], int]:
    """
    Paginated client list.

    show_archived switches the list to archived clients only; the status
    filter is ignored in that mode.
    """
    query = db.query(Client)
    if filters.show_archived:
        query = query.filter(Client.status == ClientStatus.ARCHIVADO.value)
    else:
        query = query.filter(Client.status != ClientStatus.ARCHIVADO.value)

    if filters.search:
        query = query.filter(Client.company_name.ilike(f"%{filters.search.strip()}%"))
    if filters.status and filters.status != ALL_FILTER_VALUE and not filters.show_archived:
        query = query.filter(Client.status == filters.status)
    if filters.sector and filters.sector != ALL_FILTER_VALUE:
        query = query.filter(Client.sector == filters.sector)

    if filters.sort == ClientSort.NAME_DESC:
        query = query.order_by(Client.company_name.desc())
    elif filters.sort == ClientSort.CREATED_ASC:
        query = query.order_by(Client.created_at.asc())
    elif filters.sort == ClientSort.CREATED_DESC:
        query = query.order_by(Client.created_at.desc())
    else:
        query = query.order_by(Client.company_name.asc())

    return paginate_query(query, pagination)


def get_client(db: Session, client_id: UUID) -> Client | None:
    return db.query(Client).filter(Client.id == client_id).first()


def create_client(db: Session, data: ClientCreate) -> Client:
    client = Client(
        company_name=data.company_name.strip(),
        contact_name=normalize_text(data.contact_name),
        contact_email=normalize_email(data.contact_email),
        contact_phone=normalize_text(data.contact_phone),
        sector=normalize_text(data.sector),
        status=data.status.value,
        notes=normalize_text(data.notes),
    )
    db.add(client)
    db.flush()
    client_history_service.log_client_created(db, client.id, client.company_name, commit=False)
    db.commit()
    db.refresh(client)
    logger.info("Client %s created", client.id)
    return client


def update_client(db: Session, client: Client, data: ClientUpdate) -> Client:
    """Partial update; a status change is recorded in the history."""
    changes = data.model_dump(exclude_unset=True)
    old_status = client.status

    for field, value in changes.items():
        if field == "status":
            if value is None:
                continue
            value = value.value
        elif field == "contact_email":
            value = normalize_email(value)
        elif field == "company_name":
            value = value.strip() if value else client.company_name
        else:
            value = normalize_text(value)
        setattr(client, field, value)

    if client.status != old_status:
        client_history_service.log_status_change(
            db, client.id, old_status, client.status, commit=False
        )
    db.commit()
    db.refresh(client)
    return client


def update_notes(db: Session, client: Client, notes: str) -> Client:
    client.notes = notes.strip() or None
    client_history_service.log_notes_updated(db, client.id, commit=False)
    db.commit()
    db.refresh(client)
    return client


def archive_client(db: Session, client: Client) -> Client:
    client.status = ClientStatus.ARCHIVADO.value
    client.archived_at = utcnow()
    client_history_service.log_client_archived(db, client.id, commit=False)
    db.commit()
    db.refresh(client)
    return client


def unarchive_client(db: Session, client: Client) -> Client:
    """Restore an archived client as Activo."""
    client.status = ClientStatus.ACTIVO.value
    client.archived_at = None
    client_history_service.log_client_unarchived(db, client.id, commit=False)
    db.commit()
    db.refresh(client)
    return client


# =============================================================================
# Contacts
# =============================================================================

def list_contacts(db: Session, client_id: UUID) -> list[ClientContact]:
    return (
        db.query(ClientContact)
        .filter(ClientContact.client_id == client_id)
        .order_by(ClientContact.created_at.asc())
        .all()
    )


def add_contact(db: Session, client_id: UUID, data: ClientContactCreate) -> ClientContact:
    contact = ClientContact(
        client_id=client_id,
        name=data.name.strip(),
        email=normalize_email(data.email),
        phone=normalize_text(data.phone),
        position=normalize_text(data.position),
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact
