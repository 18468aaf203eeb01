"""Upload router - blog media in the public Space and service card images."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.core.errors import ExternalServiceError
from asme.db.enums import ROLES_CAN_MANAGE_CONTENT
from asme.schemas.gallery import ServiceCardImageResponse
from asme.services import gallery_service, media_service
from asme.utils.file_upload import get_upload_file_size, has_file

router = APIRouter(
    dependencies=[Depends(require_csrf_header), Depends(require_roles(ROLES_CAN_MANAGE_CONTENT))]
)


class PresignRequest(BaseModel):
    fileName: str = Field(..., min_length=1, max_length=255)
    contentType: str = Field(..., min_length=1, max_length=255)
    folder: str


class PresignResponse(BaseModel):
    presignedUrl: str
    publicUrl: str
    key: str


class UploadResponse(BaseModel):
    success: bool = True
    url: str
    key: str


class DeleteByUrlRequest(BaseModel):
    url: str | None = None


class DeleteByUrlResponse(BaseModel):
    success: bool = True
    skipped: bool = False
    key: str | None = None


@router.post("/upload/spaces/presign", response_model=PresignResponse)
def presign_upload(data: PresignRequest):
    """Presigned PUT URL for large media uploads straight from the browser."""
    try:
        return media_service.create_presigned_upload(data.folder, data.fileName, data.contentType)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/upload/spaces", response_model=UploadResponse)
async def upload_to_spaces(
    file: UploadFile | None = File(None),
    folder: str | None = Form(None),
):
    if not has_file(file):
        raise HTTPException(status_code=400, detail="No file provided")

    size = await get_upload_file_size(file)
    try:
        upload_folder = media_service.validate_upload(folder, file.content_type, size)
        uploaded = media_service.upload_file(
            upload_folder.value, file.filename, file.file, file.content_type
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return UploadResponse(url=uploaded["url"], key=uploaded["key"])


@router.post("/upload/spaces/delete", response_model=DeleteByUrlResponse)
def delete_from_spaces(data: DeleteByUrlRequest):
    """Delete an object by public URL. Non-Space URLs are skipped, not errors."""
    if not data.url:
        raise HTTPException(status_code=400, detail="No URL provided")
    try:
        result = media_service.delete_by_url(data.url)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DeleteByUrlResponse(skipped=result["skipped"], key=result["key"])


@router.post("/service-cards/upload-image", response_model=ServiceCardImageResponse)
def upload_service_card_image(
    file: UploadFile | None = File(None),
    cardId: UUID | None = Form(None),
    db: Session = Depends(get_db),
):
    if not has_file(file) or not cardId:
        raise HTTPException(status_code=400, detail="Missing file or cardId")

    card = gallery_service.get_service_card(db, cardId)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")

    try:
        url = gallery_service.replace_service_card_image(
            db,
            card,
            file_name=file.filename,
            body=file.file,
            content_type=file.content_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ServiceCardImageResponse(imageUrl=url)
