"""Hearings (audiencias) router."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.core.errors import ExternalServiceError
from asme.db.enums import ROLES_CAN_EDIT_CASES, ROLES_CAN_VIEW_DASHBOARD
from asme.schemas.auth import UserSession
from asme.schemas.case import DocumentRead, HearingCreate, HearingRead, HearingUpdate
from asme.services import case_document_service, case_service, hearing_service
from asme.utils.file_upload import get_upload_file_size, has_file

router = APIRouter()

can_view = require_roles(ROLES_CAN_VIEW_DASHBOARD)
can_edit = require_roles(ROLES_CAN_EDIT_CASES)


def _get_hearing_or_404(db: Session, audiencia_id: UUID):
    hearing = hearing_service.get_hearing(db, audiencia_id)
    if not hearing:
        raise HTTPException(status_code=404, detail="Audiencia no encontrada")
    return hearing


@router.get("/audiencias", response_model=list[HearingRead])
def list_all_hearings(
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    """Agenda view: every hearing, soonest first."""
    return hearing_service.list_all_hearings(db)


@router.get("/casos/{caso_id}/audiencias", response_model=list[HearingRead])
def list_case_hearings(
    caso_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    if not case_service.get_case(db, caso_id):
        raise HTTPException(status_code=404, detail="Caso no encontrado")
    return hearing_service.list_hearings_for_case(db, caso_id)


@router.get("/audiencias/{audiencia_id}", response_model=HearingRead)
def get_hearing(
    audiencia_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    return _get_hearing_or_404(db, audiencia_id)


@router.post(
    "/casos/{caso_id}/audiencias",
    response_model=HearingRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
async def create_hearing(
    caso_id: UUID,
    fecha: datetime = Form(...),
    tipo: str = Form(...),
    sala: str | None = Form(None),
    estatus: str | None = Form(None),
    notas: str | None = Form(None),
    auto_document: UploadFile | None = File(None),
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """Schedule a hearing. The `auto_document` file (court order) is mandatory."""
    caso = case_service.get_case(db, caso_id)
    if not caso:
        raise HTTPException(status_code=404, detail="Caso no encontrado")
    if not has_file(auto_document):
        raise HTTPException(status_code=400, detail="El AUTO es obligatorio para crear una audiencia.")

    try:
        data = HearingCreate(
            fecha=fecha,
            tipo=tipo,
            sala=sala or None,
            estatus=estatus or "programada",
            notas=notas or None,
        )
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise HTTPException(status_code=400, detail=f"{field}: {first.get('msg')}")

    size = await get_upload_file_size(auto_document)
    try:
        return hearing_service.create_hearing(
            db,
            caso,
            data,
            auto_name=auto_document.filename,
            auto_body=auto_document.file,
            auto_content_type=auto_document.content_type,
            auto_size=size,
            user_id=session.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch(
    "/audiencias/{audiencia_id}",
    response_model=HearingRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_hearing(
    audiencia_id: UUID,
    data: HearingUpdate,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    hearing = _get_hearing_or_404(db, audiencia_id)
    return hearing_service.update_hearing(db, hearing, data, session.user_id)


@router.delete(
    "/audiencias/{audiencia_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_hearing(
    audiencia_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    hearing = _get_hearing_or_404(db, audiencia_id)
    hearing_service.delete_hearing(db, hearing, session.user_id)
    return None


@router.get("/audiencias/{audiencia_id}/auto", response_model=DocumentRead | None)
def get_hearing_auto(
    audiencia_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    """Latest AUTO document for the hearing, or null when none was uploaded."""
    _get_hearing_or_404(db, audiencia_id)
    document = case_document_service.get_latest_auto_document(db, audiencia_id)
    if not document:
        return None
    return case_document_service.to_document_read(document)
