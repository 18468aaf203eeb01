"""Clients router - CRM clients, contacts and history."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.db.enums import ROLES_CAN_MANAGE_CONTENT, ROLES_CAN_VIEW_DASHBOARD, ClientSort
from asme.schemas.client import (
    ClientContactCreate,
    ClientContactRead,
    ClientCreate,
    ClientHistoryRead,
    ClientListResponse,
    ClientNotesUpdate,
    ClientRead,
    ClientUpdate,
)
from asme.services import client_history_service, client_service
from asme.services.client_service import ClientFilters
from asme.utils.pagination import PaginationParams, get_pagination, total_pages

router = APIRouter()

can_view = [Depends(require_roles(ROLES_CAN_VIEW_DASHBOARD))]
staff_write = [Depends(require_csrf_header), Depends(require_roles(ROLES_CAN_MANAGE_CONTENT))]


def _get_client_or_404(db: Session, client_id: UUID):
    client = client_service.get_client(db, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Cliente no encontrado")
    return client


@router.get("", response_model=ClientListResponse, dependencies=can_view)
def list_clients(
    search: str | None = Query(None),
    status: str | None = Query(None),
    sector: str | None = Query(None),
    sort: ClientSort = Query(ClientSort.NAME_ASC),
    show_archived: bool = Query(False),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    filters = ClientFilters(
        search=search,
        status=status,
        sector=sector,
        sort=sort,
        show_archived=show_archived,
    )
    items, total = client_service.list_clients(db, filters, pagination)
    return ClientListResponse(
        data=items,
        total=total,
        page=pagination.page,
        totalPages=total_pages(total, pagination.limit),
        limit=pagination.limit,
    )


@router.get("/{client_id}", response_model=ClientRead, dependencies=can_view)
def get_client(client_id: UUID, db: Session = Depends(get_db)):
    return _get_client_or_404(db, client_id)


@router.post("", response_model=ClientRead, status_code=201, dependencies=staff_write)
def create_client(data: ClientCreate, db: Session = Depends(get_db)):
    return client_service.create_client(db, data)


@router.patch("/{client_id}", response_model=ClientRead, dependencies=staff_write)
def update_client(client_id: UUID, data: ClientUpdate, db: Session = Depends(get_db)):
    client = _get_client_or_404(db, client_id)
    return client_service.update_client(db, client, data)


@router.put("/{client_id}/notes", response_model=ClientRead, dependencies=staff_write)
def update_notes(client_id: UUID, data: ClientNotesUpdate, db: Session = Depends(get_db)):
    client = _get_client_or_404(db, client_id)
    return client_service.update_notes(db, client, data.notes)


@router.post("/{client_id}/archive", response_model=ClientRead, dependencies=staff_write)
def archive_client(client_id: UUID, db: Session = Depends(get_db)):
    """Soft delete: status Archivado plus archived_at."""
    client = _get_client_or_404(db, client_id)
    return client_service.archive_client(db, client)


@router.post("/{client_id}/unarchive", response_model=ClientRead, dependencies=staff_write)
def unarchive_client(client_id: UUID, db: Session = Depends(get_db)):
    client = _get_client_or_404(db, client_id)
    return client_service.unarchive_client(db, client)


# =============================================================================
# Contacts and history
# =============================================================================

@router.get("/{client_id}/contacts", response_model=list[ClientContactRead], dependencies=can_view)
def list_contacts(client_id: UUID, db: Session = Depends(get_db)):
    _get_client_or_404(db, client_id)
    return client_service.list_contacts(db, client_id)


@router.post(
    "/{client_id}/contacts",
    response_model=ClientContactRead,
    status_code=201,
    dependencies=staff_write,
)
def add_contact(client_id: UUID, data: ClientContactCreate, db: Session = Depends(get_db)):
    _get_client_or_404(db, client_id)
    return client_service.add_contact(db, client_id, data)


@router.get("/{client_id}/history", response_model=list[ClientHistoryRead], dependencies=can_view)
def list_history(client_id: UUID, db: Session = Depends(get_db)):
    _get_client_or_404(db, client_id)
    return client_history_service.list_history(db, client_id)
