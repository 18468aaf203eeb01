"""Appointments router - public booking and staff review of requests."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.core.rate_limit import PUBLIC_FORM_LIMIT, limiter
from asme.db.enums import ROLES_CAN_MANAGE_APPOINTMENTS
from asme.schemas.appointment import (
    AppointmentAdminAction,
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentRead,
    SuccessResponse,
)
from asme.services import appointment_service
from asme.services.appointment_service import AppointmentConflictError
from asme.utils.pagination import DEFAULT_LIMIT, MAX_LIMIT, PaginationParams, total_pages

router = APIRouter()


@router.post("", response_model=SuccessResponse)
@limiter.limit(PUBLIC_FORM_LIMIT)
def create_appointment(
    request: Request,
    data: AppointmentCreate,
    db: Session = Depends(get_db),
):
    """
    Submit a booking request from the public site.

    The row is always created as pending; staff approve it later.
    """
    try:
        appointment_service.create_appointment(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse()


@router.get(
    "",
    response_model=AppointmentListResponse,
    dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_APPOINTMENTS))],
)
def list_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    all_rows: bool = Query(False, alias="all", description="Return every appointment in one page"),
    db: Session = Depends(get_db),
):
    """List appointments newest first, paginated unless all=true."""
    if all_rows:
        items, _ = appointment_service.list_appointments(db)
        return AppointmentListResponse(data=items, page=1, totalPages=1, limit=len(items))

    pagination = PaginationParams(page=page, limit=limit)
    items, total = appointment_service.list_appointments(db, pagination)
    return AppointmentListResponse(
        data=items,
        page=page,
        totalPages=total_pages(total, limit),
        limit=limit,
    )


@router.post(
    "/admin",
    response_model=SuccessResponse,
    dependencies=[
        Depends(require_csrf_header),
        Depends(require_roles(ROLES_CAN_MANAGE_APPOINTMENTS)),
    ],
)
def review_appointment(
    data: AppointmentAdminAction,
    db: Session = Depends(get_db),
):
    """Approve (with slot conflict check) or reject an appointment."""
    try:
        appointment = appointment_service.apply_admin_action(db, data)
    except AppointmentConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if appointment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return SuccessResponse()


@router.delete(
    "/{appointment_id}",
    response_model=SuccessResponse,
    dependencies=[
        Depends(require_csrf_header),
        Depends(require_roles(ROLES_CAN_MANAGE_APPOINTMENTS)),
    ],
)
def delete_appointment(
    appointment_id: UUID,
    db: Session = Depends(get_db),
):
    appointment = appointment_service.get_appointment(db, appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    appointment_service.delete_appointment(db, appointment)
    return SuccessResponse()


@router.get(
    "/{appointment_id}",
    response_model=AppointmentRead,
    dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_APPOINTMENTS))],
)
def get_appointment(
    appointment_id: UUID,
    db: Session = Depends(get_db),
):
    appointment = appointment_service.get_appointment(db, appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment
