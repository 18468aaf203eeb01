"""Cases router - legal cases plus their notes, documents and timeline."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from asme.core.deps import require_csrf_header, require_roles, get_db
from asme.core.errors import ExternalServiceError
from asme.db.enums import ROLES_CAN_EDIT_CASES, ROLES_CAN_VIEW_DASHBOARD, DocumentType
from asme.schemas.auth import UserSession
from asme.schemas.case import (
    CaseCreate,
    CaseNoteCreate,
    CaseNoteRead,
    CaseRead,
    CaseUpdate,
    DocumentRead,
    TimelineRead,
)
from asme.services import (
    case_document_service,
    case_note_service,
    case_service,
    timeline_service,
)
from asme.utils.file_upload import get_upload_file_size, has_file

router = APIRouter()

can_view = require_roles(ROLES_CAN_VIEW_DASHBOARD)
can_edit = require_roles(ROLES_CAN_EDIT_CASES)


def _get_case_or_404(db: Session, caso_id: UUID):
    caso = case_service.get_case(db, caso_id)
    if not caso:
        raise HTTPException(status_code=404, detail="Caso no encontrado")
    return caso


def _validation_400(exc: ValidationError) -> HTTPException:
    first = exc.errors(include_url=False)[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return HTTPException(status_code=400, detail=f"{field}: {first.get('msg')}")


# =============================================================================
# Cases
# =============================================================================

@router.get("", response_model=list[CaseRead])
def list_cases(
    include_archived: bool = Query(False),
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    return case_service.list_cases(db, include_archived=include_archived)


@router.get("/{caso_id}", response_model=CaseRead)
def get_case(
    caso_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    return _get_case_or_404(db, caso_id)


@router.post(
    "",
    response_model=CaseRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
async def create_case(
    case_number: str = Form(...),
    client_name: str = Form(...),
    case_type: str = Form(...),
    assigned_to: str = Form(...),
    status: str | None = Form(None),
    client_phone: str | None = Form(None),
    client_email: str | None = Form(None),
    summary: str | None = Form(None),
    next_date: date | None = Form(None),
    initial_note: str | None = Form(None),
    document: UploadFile | None = File(None),
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """
    Create a case. The multipart `document` file is mandatory and is stored
    as the case's AUTO document.
    """
    if not has_file(document):
        raise HTTPException(status_code=400, detail="El documento es obligatorio para crear un caso.")

    try:
        data = CaseCreate(
            case_number=case_number,
            client_name=client_name,
            case_type=case_type,
            assigned_to=assigned_to,
            status=status or "abierto",
            client_phone=client_phone or None,
            client_email=client_email or None,
            summary=summary or None,
            next_date=next_date,
        )
    except ValidationError as e:
        raise _validation_400(e)

    size = await get_upload_file_size(document)
    try:
        return case_service.create_case(
            db,
            data,
            document_name=document.filename,
            document_body=document.file,
            document_content_type=document.content_type,
            document_size=size,
            initial_note=initial_note,
            user_id=session.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch(
    "/{caso_id}",
    response_model=CaseRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_case(
    caso_id: UUID,
    data: CaseUpdate,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    caso = _get_case_or_404(db, caso_id)
    return case_service.update_case(db, caso, data, user_id=session.user_id)


@router.post(
    "/{caso_id}/archive",
    response_model=CaseRead,
    dependencies=[Depends(require_csrf_header)],
)
def archive_case(
    caso_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    caso = _get_case_or_404(db, caso_id)
    return case_service.set_archived(db, caso, True, user_id=session.user_id)


@router.post(
    "/{caso_id}/unarchive",
    response_model=CaseRead,
    dependencies=[Depends(require_csrf_header)],
)
def unarchive_case(
    caso_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    caso = _get_case_or_404(db, caso_id)
    return case_service.set_archived(db, caso, False, user_id=session.user_id)


@router.delete(
    "/{caso_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_case(
    caso_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """Permanently delete a case with its hearings, notes, timeline and documents."""
    caso = _get_case_or_404(db, caso_id)
    try:
        case_service.delete_case(db, caso)
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return None


# =============================================================================
# Notes
# =============================================================================

@router.get("/{caso_id}/notas", response_model=list[CaseNoteRead])
def list_notes(
    caso_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    _get_case_or_404(db, caso_id)
    return case_note_service.list_notes(db, caso_id)


@router.post(
    "/{caso_id}/notas",
    response_model=CaseNoteRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_note(
    caso_id: UUID,
    data: CaseNoteCreate,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    _get_case_or_404(db, caso_id)
    try:
        return case_note_service.create_note(db, caso_id, data.contenido, session.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete(
    "/{caso_id}/notas/{note_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_note(
    caso_id: UUID,
    note_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    note = case_note_service.get_note(db, note_id)
    if not note or note.caso_id != caso_id:
        raise HTTPException(status_code=404, detail="Nota no encontrada")
    case_note_service.delete_note(db, note, session.user_id)
    return None


# =============================================================================
# Documents
# =============================================================================

@router.get("/{caso_id}/documentos", response_model=list[DocumentRead])
def list_documents(
    caso_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    """Documents newest first, each with a one-hour download URL."""
    _get_case_or_404(db, caso_id)
    documents = case_document_service.list_documents(db, caso_id)
    return [case_document_service.to_document_read(d) for d in documents]


@router.post(
    "/{caso_id}/documentos",
    response_model=DocumentRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
async def upload_document(
    caso_id: UUID,
    file: UploadFile | None = File(None),
    document_type: DocumentType | None = Form(None),
    audiencia_id: UUID | None = Form(None),
    description: str | None = Form(None),
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    _get_case_or_404(db, caso_id)
    if not has_file(file):
        raise HTTPException(status_code=400, detail="No file provided")

    size = await get_upload_file_size(file)
    try:
        document = case_document_service.upload_document(
            db,
            caso_id,
            file_name=file.filename,
            body=file.file,
            content_type=file.content_type,
            file_size=size,
            document_type=document_type,
            audiencia_id=audiencia_id,
            description=description,
            user_id=session.user_id,
        )
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return case_document_service.to_document_read(document)


@router.delete(
    "/{caso_id}/documentos/{document_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_document(
    caso_id: UUID,
    document_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    document = case_document_service.get_document(db, document_id)
    if not document or document.caso_id != caso_id:
        raise HTTPException(status_code=404, detail="Documento no encontrado")
    try:
        case_document_service.delete_document(db, document, session.user_id)
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return None


# =============================================================================
# Timeline
# =============================================================================

@router.get("/{caso_id}/timeline", response_model=list[TimelineRead])
def list_timeline(
    caso_id: UUID,
    session: UserSession = Depends(can_view),
    db: Session = Depends(get_db),
):
    _get_case_or_404(db, caso_id)
    return timeline_service.list_timeline(db, caso_id)
