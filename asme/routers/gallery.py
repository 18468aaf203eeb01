"""Gallery routers - public image feeds, service cards and team members."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.core.errors import ExternalServiceError
from asme.db.enums import ROLES_CAN_MANAGE_CONTENT, ServiceCardContentType
from asme.schemas.gallery import (
    ServiceCardCreate,
    ServiceCardRead,
    ServiceCardUpdate,
    TeamMemberCreate,
    TeamMemberImageCreate,
    TeamMemberImageRead,
    TeamMemberImageReorder,
    TeamMemberRead,
    TeamMemberUpdate,
)
from asme.services import gallery_service
from asme.utils.file_upload import has_file

can_manage = require_roles(ROLES_CAN_MANAGE_CONTENT)
staff_write = [Depends(require_csrf_header), Depends(can_manage)]


# =============================================================================
# Public feeds (/api/gallery)
# =============================================================================

router = APIRouter()


@router.get("/service-images", response_model=list[str])
def get_service_images(
    service_slug: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    return gallery_service.get_service_images(db, service_slug)


@router.get("/images", response_model=list[str])
def get_gallery_images(
    page_slug: str = Query(..., min_length=1),
    section: str = Query(gallery_service.DEFAULT_GALLERY_SECTION),
    db: Session = Depends(get_db),
):
    return gallery_service.get_gallery_images(db, page_slug, section)


@router.get("/legal-images", response_model=list[str])
def get_legal_service_images(
    page_slug: str = Query(..., min_length=1),
    section: str = Query(gallery_service.DEFAULT_LEGAL_SECTION),
    db: Session = Depends(get_db),
):
    return gallery_service.get_legal_service_images(db, page_slug, section)


# =============================================================================
# Service cards (/api/service-cards)
# =============================================================================

service_cards_router = APIRouter()


def _get_card_or_404(db: Session, card_id: UUID):
    card = gallery_service.get_service_card(db, card_id)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")
    return card


@service_cards_router.get(
    "",
    response_model=list[ServiceCardRead],
    dependencies=[Depends(can_manage)],
)
def list_service_cards(
    content_type: ServiceCardContentType | None = Query(None),
    page_slug: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return gallery_service.list_service_cards(db, content_type, page_slug)


@service_cards_router.post(
    "", response_model=ServiceCardRead, status_code=201, dependencies=staff_write
)
def create_service_card(data: ServiceCardCreate, db: Session = Depends(get_db)):
    return gallery_service.create_service_card(db, data)


@service_cards_router.patch("/{card_id}", response_model=ServiceCardRead, dependencies=staff_write)
def update_service_card(card_id: UUID, data: ServiceCardUpdate, db: Session = Depends(get_db)):
    card = _get_card_or_404(db, card_id)
    return gallery_service.update_service_card(db, card, data)


@service_cards_router.delete("/{card_id}", status_code=204, dependencies=staff_write)
def delete_service_card(card_id: UUID, db: Session = Depends(get_db)):
    card = _get_card_or_404(db, card_id)
    gallery_service.delete_service_card(db, card)
    return None


# =============================================================================
# Team members (/api/team)
# =============================================================================

team_router = APIRouter()


def _get_member_or_404(db: Session, member_id: UUID):
    member = gallery_service.get_team_member(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Team member not found")
    return member


def _get_image_or_404(db: Session, image_id: UUID):
    image = gallery_service.get_team_member_image(db, image_id)
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")
    return image


@team_router.get("", response_model=list[TeamMemberRead])
def list_active_team_members(db: Session = Depends(get_db)):
    """Public team page: active members with their images in order."""
    return gallery_service.list_team_members(db, active_only=True)


@team_router.get(
    "/manage",
    response_model=list[TeamMemberRead],
    dependencies=[Depends(can_manage)],
)
def list_all_team_members(db: Session = Depends(get_db)):
    return gallery_service.list_team_members(db)


@team_router.post("", response_model=TeamMemberRead, status_code=201, dependencies=staff_write)
def create_team_member(data: TeamMemberCreate, db: Session = Depends(get_db)):
    return gallery_service.create_team_member(db, data)


@team_router.patch("/{member_id}", response_model=TeamMemberRead, dependencies=staff_write)
def update_team_member(member_id: UUID, data: TeamMemberUpdate, db: Session = Depends(get_db)):
    member = _get_member_or_404(db, member_id)
    return gallery_service.update_team_member(db, member, data)


@team_router.delete("/{member_id}", status_code=204, dependencies=staff_write)
def delete_team_member(member_id: UUID, db: Session = Depends(get_db)):
    member = _get_member_or_404(db, member_id)
    gallery_service.delete_team_member(db, member)
    return None


@team_router.post(
    "/{member_id}/images",
    response_model=TeamMemberImageRead,
    status_code=201,
    dependencies=staff_write,
)
def add_team_member_image(
    member_id: UUID,
    data: TeamMemberImageCreate,
    db: Session = Depends(get_db),
):
    member = _get_member_or_404(db, member_id)
    return gallery_service.add_team_member_image(db, member, data.image_url, data.order)


@team_router.post(
    "/{member_id}/images/upload",
    response_model=TeamMemberImageRead,
    status_code=201,
    dependencies=staff_write,
)
def upload_team_member_image(
    member_id: UUID,
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
):
    """Upload an image to the Space and append it to the member's images."""
    member = _get_member_or_404(db, member_id)
    if not has_file(file):
        raise HTTPException(status_code=400, detail="No file provided")
    try:
        return gallery_service.upload_team_member_image(
            db,
            member,
            file_name=file.filename,
            body=file.file,
            content_type=file.content_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@team_router.patch(
    "/images/{image_id}",
    response_model=TeamMemberImageRead,
    dependencies=staff_write,
)
def reorder_team_member_image(
    image_id: UUID,
    data: TeamMemberImageReorder,
    db: Session = Depends(get_db),
):
    image = _get_image_or_404(db, image_id)
    return gallery_service.reorder_team_member_image(db, image, data.order)


@team_router.delete("/images/{image_id}", status_code=204, dependencies=staff_write)
def delete_team_member_image(image_id: UUID, db: Session = Depends(get_db)):
    image = _get_image_or_404(db, image_id)
    gallery_service.delete_team_member_image(db, image)
    return None
