"""Gallery service - service cards, page galleries and the team page."""

import logging
import time
from typing import BinaryIO
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from asme.db.enums import ServiceCardContentType
from asme.db.models import ServiceCard, TeamMember, TeamMemberImage
from asme.schemas.gallery import (
    ServiceCardCreate,
    ServiceCardUpdate,
    TeamMemberCreate,
    TeamMemberUpdate,
)
from asme.services import media_service
from asme.services.storage_url_service import is_spaces_url

logger = logging.getLogger(__name__)

SERVICES_PAGE_SLUG = "main"
SERVICES_SECTION = "services"
DEFAULT_GALLERY_SECTION = "main"
DEFAULT_LEGAL_SECTION = "hero"


# =============================================================================
# Public image feeds
# =============================================================================

def _active_image_urls(db: Session, *filters) -> list[str]:
    rows = (
        db.query(ServiceCard.image_url)
        .filter(ServiceCard.is_active.is_(True), ServiceCard.image_url.isnot(None), *filters)
        .order_by(ServiceCard.order_index.asc())
        .all()
    )
    return [row.image_url for row in rows]


def get_service_images(db: Session, service_slug: str) -> list[str]:
    """Carousel images for one service card on the home page."""
    return _active_image_urls(
        db,
        ServiceCard.content_type == ServiceCardContentType.SERVICE.value,
        ServiceCard.service_slug == service_slug,
        ServiceCard.page_slug == SERVICES_PAGE_SLUG,
        ServiceCard.section == SERVICES_SECTION,
    )


def get_gallery_images(db: Session, page_slug: str, section: str = DEFAULT_GALLERY_SECTION) -> list[str]:
    return _active_image_urls(
        db,
        ServiceCard.content_type == ServiceCardContentType.GALLERY.value,
        ServiceCard.page_slug == page_slug,
        ServiceCard.section == section,
    )


def get_legal_service_images(db: Session, page_slug: str, section: str = DEFAULT_LEGAL_SECTION) -> list[str]:
    return _active_image_urls(
        db,
        ServiceCard.content_type == ServiceCardContentType.LEGAL_SERVICE.value,
        ServiceCard.page_slug == page_slug,
        ServiceCard.section == section,
    )


# =============================================================================
# Service cards (staff)
# =============================================================================

def list_service_cards(
    db: Session,
    content_type: ServiceCardContentType | None = None,
    page_slug: str | None = None,
) -> list[ServiceCard]:
    query = db.query(ServiceCard)
    if content_type:
        query = query.filter(ServiceCard.content_type == content_type.value)
    if page_slug:
        query = query.filter(ServiceCard.page_slug == page_slug)
    return query.order_by(ServiceCard.page_slug, ServiceCard.section, ServiceCard.order_index).all()


def get_service_card(db: Session, card_id: UUID) -> ServiceCard | None:
    return db.query(ServiceCard).filter(ServiceCard.id == card_id).first()


def create_service_card(db: Session, data: ServiceCardCreate) -> ServiceCard:
    values = data.model_dump()
    values["content_type"] = data.content_type.value
    card = ServiceCard(**values)
    db.add(card)
    db.commit()
    db.refresh(card)
    return card


def update_service_card(db: Session, card: ServiceCard, data: ServiceCardUpdate) -> ServiceCard:
    for field, value in data.model_dump(exclude_unset=True).items():
        if hasattr(value, "value"):
            value = value.value
        setattr(card, field, value)
    db.commit()
    db.refresh(card)
    return card


def delete_service_card(db: Session, card: ServiceCard) -> None:
    image_url = card.image_url
    db.delete(card)
    db.commit()
    media_service.delete_urls_quietly([image_url])


def replace_service_card_image(
    db: Session,
    card: ServiceCard,
    *,
    file_name: str,
    body: bytes | BinaryIO,
    content_type: str | None,
) -> str:
    """
    Upload a new card image and point the card at it.

    The previous image is removed first when it lives in the Space; a
    failed removal is logged and does not block the upload.
    """
    if not (content_type or "").startswith("image/"):
        raise ValueError("File must be an image")

    if card.image_url and is_spaces_url(card.image_url):
        media_service.delete_urls_quietly([card.image_url])

    _, ext = media_service.split_file_name(file_name)
    key = f"{media_service.SERVICE_CARDS_FOLDER}/{card.id}-{int(time.time() * 1000)}.{ext}"
    url = media_service.upload_public_object(key, body, content_type)

    card.image_url = url
    db.commit()
    logger.info("Service card %s image replaced", card.id)
    return url


# =============================================================================
# Team members
# =============================================================================

def list_team_members(db: Session, *, active_only: bool = False) -> list[TeamMember]:
    query = db.query(TeamMember).options(selectinload(TeamMember.images))
    if active_only:
        query = query.filter(TeamMember.active.is_(True))
    return query.order_by(TeamMember.order.asc()).all()


def get_team_member(db: Session, member_id: UUID) -> TeamMember | None:
    return db.query(TeamMember).filter(TeamMember.id == member_id).first()


def create_team_member(db: Session, data: TeamMemberCreate) -> TeamMember:
    member = TeamMember(**data.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def update_team_member(db: Session, member: TeamMember, data: TeamMemberUpdate) -> TeamMember:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(member, field, value)
    db.commit()
    db.refresh(member)
    return member


def delete_team_member(db: Session, member: TeamMember) -> None:
    """Delete the member with its image rows (objects stay in the Space)."""
    db.delete(member)
    db.commit()


def _next_image_order(db: Session, member_id: UUID) -> int:
    current_max = (
        db.query(func.max(TeamMemberImage.order))
        .filter(TeamMemberImage.team_member_id == member_id)
        .scalar()
    )
    return 0 if current_max is None else current_max + 1


def add_team_member_image(
    db: Session,
    member: TeamMember,
    image_url: str,
    order: int | None = None,
) -> TeamMemberImage:
    """Attach an image; without an explicit order it goes last."""
    if order is None:
        order = _next_image_order(db, member.id)
    image = TeamMemberImage(team_member_id=member.id, image_url=image_url, order=order)
    db.add(image)
    db.commit()
    db.refresh(image)
    return image


def upload_team_member_image(
    db: Session,
    member: TeamMember,
    *,
    file_name: str,
    body: bytes | BinaryIO,
    content_type: str | None,
) -> TeamMemberImage:
    if not (content_type or "").startswith("image/"):
        raise ValueError("File must be an image")
    uploaded = media_service.upload_file(
        media_service.TEAM_IMAGES_FOLDER, file_name, body, content_type
    )
    return add_team_member_image(db, member, uploaded["url"])


def get_team_member_image(db: Session, image_id: UUID) -> TeamMemberImage | None:
    return db.query(TeamMemberImage).filter(TeamMemberImage.id == image_id).first()


def delete_team_member_image(db: Session, image: TeamMemberImage) -> None:
    db.delete(image)
    db.commit()


def reorder_team_member_image(db: Session, image: TeamMemberImage, order: int) -> TeamMemberImage:
    image.order = order
    db.commit()
    db.refresh(image)
    return image
